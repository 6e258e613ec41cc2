"""Data access repositories."""

from .base import OwnedRepository
from .folder_repository import FolderRepository
from .file_repository import FileRepository

__all__ = [
    "OwnedRepository",
    "FolderRepository",
    "FileRepository",
]
