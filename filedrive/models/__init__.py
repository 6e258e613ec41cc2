"""Database models."""

from .user import User
from .folder import Folder
from .file_record import FileRecord, ResourceKind

__all__ = ["User", "Folder", "FileRecord", "ResourceKind"]
