"""Folder schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class FolderCreate(BaseModel):
    """Create a folder. ``parent`` of None/"null" means root ("My Drive").

    Name trimming and emptiness checks happen in FolderService so the error
    surfaces as VALIDATION_ERROR rather than a schema error.
    """
    name: Optional[str] = None
    parent: Optional[str] = None


class FolderRename(BaseModel):
    name: Optional[str] = None


class FolderResponse(BaseModel):
    id: str
    name: str
    parent: Optional[str] = None
    owner: str
    created_at: datetime

    @classmethod
    def from_model(cls, folder) -> "FolderResponse":
        return cls(
            id=folder.folder_id,
            name=folder.name,
            parent=folder.parent_id,
            owner=folder.owner_id,
            created_at=folder.created_at,
        )


class FolderEnvelope(BaseModel):
    folder: FolderResponse


class FolderListResponse(BaseModel):
    folders: List[FolderResponse]


class AncestorSegment(BaseModel):
    id: str
    name: str


class AncestorsResponse(BaseModel):
    ancestors: List[AncestorSegment]
