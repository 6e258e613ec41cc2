"""Schemas for the combined drive view."""

from typing import List, Optional

from pydantic import BaseModel

from .file import FileResponse
from .folder import FolderResponse


class BreadcrumbSegment(BaseModel):
    id: Optional[str] = None  # None = synthetic root
    name: str


class DriveResponse(BaseModel):
    folder: Optional[str] = None
    query: str = ""
    breadcrumb: List[BreadcrumbSegment]
    folders: List[FolderResponse]
    files: List[FileResponse]
