"""File record schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class FileResponse(BaseModel):
    id: str
    name: str
    url: str
    folder: Optional[str] = None
    owner: str
    size: int
    mime_type: Optional[str] = None
    resource_kind: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_model(cls, record) -> "FileResponse":
        return cls(
            id=record.file_id,
            name=record.name,
            url=record.url,
            folder=record.folder_id,
            owner=record.owner_id,
            size=record.size or 0,
            mime_type=record.mime_type,
            resource_kind=record.remote_resource_kind,
            created_at=record.created_at,
        )


class FileEnvelope(BaseModel):
    file: FileResponse


class FileListResponse(BaseModel):
    files: List[FileResponse]
