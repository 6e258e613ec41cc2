"""Pydantic schemas for API request/response validation."""

from .common import OkResponse, normalize_folder_ref
from .auth import SignupRequest, LoginRequest, UserResponse, AuthResponse
from .folder import (
    FolderCreate,
    FolderRename,
    FolderResponse,
    FolderEnvelope,
    FolderListResponse,
    AncestorSegment,
    AncestorsResponse,
)
from .file import FileResponse, FileEnvelope, FileListResponse
from .drive import BreadcrumbSegment, DriveResponse

__all__ = [
    "OkResponse",
    "normalize_folder_ref",
    "SignupRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "FolderCreate",
    "FolderRename",
    "FolderResponse",
    "FolderEnvelope",
    "FolderListResponse",
    "AncestorSegment",
    "AncestorsResponse",
    "FileResponse",
    "FileEnvelope",
    "FileListResponse",
    "BreadcrumbSegment",
    "DriveResponse",
]
