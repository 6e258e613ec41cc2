"""Repository for file record database operations."""

from typing import List, Optional

from ..exceptions import FileRecordNotFoundError
from ..models.file_record import FileRecord
from .base import OwnedRepository


class FileRepository(OwnedRepository[FileRecord]):
    """Data access layer for file records."""

    model_class = FileRecord
    id_column = "file_id"
    not_found_error = FileRecordNotFoundError

    def create(self, record: FileRecord) -> FileRecord:
        self.db.add(record)
        self.db.flush()
        self.db.refresh(record)
        return record

    def list_in_folder(self, owner_id: str, folder_id: Optional[str]) -> List[FileRecord]:
        """Files directly in *folder_id*, newest first. ``None`` means root."""
        query = self._owned(owner_id)
        if folder_id is None:
            query = query.filter(FileRecord.folder_id.is_(None))
        else:
            query = query.filter(FileRecord.folder_id == folder_id)
        return query.order_by(FileRecord.created_at.desc()).all()

    def set_resource_kind(self, record: FileRecord, kind: str) -> FileRecord:
        record.remote_resource_kind = kind
        self.db.flush()
        return record

    def list_missing_resource_kind(self, limit: Optional[int] = None) -> List[FileRecord]:
        """Records with a remote locator but no recorded resource kind (all owners)."""
        query = (
            self.db.query(FileRecord)
            .filter(FileRecord.remote_locator.isnot(None))
            .filter(FileRecord.remote_resource_kind.is_(None))
            .order_by(FileRecord.created_at)
        )
        if limit:
            query = query.limit(limit)
        return query.all()
