"""File record lifecycle: upload, list, download URL resolution, delete.

Blob handling is delegated to an ObjectStore. The record is the source of
truth for ownership; the blob is owned by the record and removed with it on
a best-effort basis.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..exceptions import InvalidParentError, PersistenceError, ValidationError
from ..models.file_record import FileRecord
from ..repositories.file_repository import FileRepository
from ..repositories.folder_repository import FolderRepository
from .object_store import ObjectStore
from .resource_kind import FALLBACK_KIND

logger = logging.getLogger(__name__)


class FileService:
    """Per-owner file metadata backed by an object store.

    Public methods:
        list_in_folder          -- exact folder match, newest first
        get                     -- one owned record
        create_from_upload      -- validate, upload blob, persist record
        remove                  -- best-effort blob delete, then record delete
        discard_record          -- same as remove for an already loaded record, no commit
        resolve_download_url    -- signed URL, healing a missing resource kind
        backfill_resource_kinds -- resolve kinds for every legacy record
    """

    def __init__(self, db: Session, store: ObjectStore, verify_downloads: Optional[bool] = None):
        self.db = db
        self.store = store
        self.repo = FileRepository(db)
        self.folder_repo = FolderRepository(db)
        self.verify_downloads = (
            settings.verify_download_urls if verify_downloads is None else verify_downloads
        )

    def list_in_folder(self, owner_id: str, folder_id: Optional[str]) -> List[FileRecord]:
        return self.repo.list_in_folder(owner_id, folder_id)

    def get(self, owner_id: str, file_id: str) -> FileRecord:
        return self.repo.get_owned(owner_id, file_id)

    def create_from_upload(
        self,
        owner_id: str,
        folder_id: Optional[str],
        data: Optional[bytes],
        original_name: Optional[str],
        mime_type: Optional[str],
        size: Optional[int] = None,
    ) -> FileRecord:
        """Upload *data* to the object store and persist its record.

        If the record cannot be saved the blob is removed again so no
        orphan is left behind.
        """
        if folder_id and self.folder_repo.get_owned_optional(owner_id, folder_id) is None:
            raise InvalidParentError(folder_id, field="folder")

        if not data:
            raise ValidationError("No file uploaded", field="file")
        name = (original_name or "").strip()
        if not name:
            raise ValidationError("Uploaded file has no name", field="file")

        blob = self.store.upload(data, owner_id, filename=name)

        record = FileRecord(
            owner_id=owner_id,
            folder_id=folder_id or None,
            name=name,
            url=blob.secure_url,
            size=size if size is not None else len(data),
            mime_type=mime_type,
            remote_locator=blob.locator,
            remote_resource_kind=blob.resource_kind,
            remote_version=blob.version,
        )
        try:
            record = self.repo.create(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Saving file record failed, rolling back upload", extra={"locator": blob.locator})
            self.store.remove(blob.locator, blob.resource_kind or FALLBACK_KIND.value)
            raise PersistenceError("Upload failed") from e

        logger.info(
            "File uploaded",
            extra={"file_id": record.file_id, "folder_id": record.folder_id, "size": record.size},
        )
        return record

    def remove(self, owner_id: str, file_id: str) -> None:
        record = self.repo.get_owned(owner_id, file_id)
        self.discard_record(record)
        self.db.commit()

    def discard_record(self, record: FileRecord) -> bool:
        """Delete *record*, attempting remote removal first.

        The record is deleted whatever the remote outcome; returns whether
        the blob was removed. Caller commits.
        """
        remote_removed = False
        if record.remote_locator:
            kind = record.remote_resource_kind
            if not kind:
                try:
                    kind = self.store.resolve_resource_kind(record.remote_locator, record.mime_type)
                except Exception as e:
                    logger.warning(
                        "Resource kind lookup failed, trying fallback kind: %s", e,
                        extra={"file_id": record.file_id, "locator": record.remote_locator},
                    )
                    kind = FALLBACK_KIND.value
            remote_removed = self.store.remove(record.remote_locator, kind)
            if not remote_removed:
                logger.warning(
                    "Deleting file record with orphaned blob",
                    extra={"file_id": record.file_id, "locator": record.remote_locator},
                )
        self.repo.delete(record)
        logger.info("File deleted", extra={"file_id": record.file_id, "remote_removed": remote_removed})
        return remote_removed

    def resolve_download_url(self, owner_id: str, file_id: str) -> str:
        """Signed URL for a file, or the stored public URL for legacy rows."""
        record = self.repo.get_owned(owner_id, file_id)
        if not record.remote_locator:
            logger.info("No locator on record, using stored url", extra={"file_id": file_id})
            return record.url

        kind = record.remote_resource_kind
        if not kind:
            kind = self.store.resolve_resource_kind(record.remote_locator, record.mime_type)
            self._heal_resource_kind(record, kind)

        url = self.store.url_for(record.remote_locator, kind, record.remote_version)
        if self.verify_downloads:
            self.store.verify_reachable(url)
        return url

    def backfill_resource_kinds(self, limit: Optional[int] = None) -> int:
        """Resolve and store the kind of every record that lacks one."""
        updated = 0
        for record in self.repo.list_missing_resource_kind(limit=limit):
            kind = self.store.resolve_resource_kind(record.remote_locator, record.mime_type)
            self.repo.set_resource_kind(record, kind)
            updated += 1
        if updated:
            self.db.commit()
        return updated

    def _heal_resource_kind(self, record: FileRecord, kind: str) -> None:
        # A failed write only means we probe again next time.
        try:
            self.repo.set_resource_kind(record, kind)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(
                "Could not persist detected resource kind: %s", e,
                extra={"file_id": record.file_id, "resource_kind": kind},
            )
            return
        logger.info(
            "Persisted detected resource kind",
            extra={"file_id": record.file_id, "resource_kind": kind},
        )
