"""Business logic services."""

from .drive_service import DriveService, DriveListing, Breadcrumb
from .file_service import FileService
from .folder_service import FolderService
from .object_store import ObjectStore, CloudinaryObjectStore, UploadedBlob, get_object_store

__all__ = [
    "DriveService",
    "DriveListing",
    "Breadcrumb",
    "FileService",
    "FolderService",
    "ObjectStore",
    "CloudinaryObjectStore",
    "UploadedBlob",
    "get_object_store",
]
