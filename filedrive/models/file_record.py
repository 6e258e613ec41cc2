"""File record model: metadata for a blob held by the object store."""

from enum import Enum

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Index, String, Text

from ._common import new_id, utcnow
from ..database import Base


class ResourceKind(str, Enum):
    """Object store content category; governs how a blob is signed and deleted."""

    IMAGE = "image"
    VIDEO = "video"
    RAW = "raw"


class FileRecord(Base):
    """Uploaded file.

    ``remote_locator`` is written once at upload and never updated.
    ``remote_resource_kind`` may be NULL for legacy rows and is filled in
    lazily the first time the file is downloaded.
    """

    __tablename__ = "files"
    __table_args__ = (
        Index("ix_files_owner_folder", "owner_id", "folder_id"),
        Index("ix_files_created_at", "created_at"),
    )

    file_id = Column(String(32), primary_key=True, default=new_id)
    owner_id = Column(String(32), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    folder_id = Column(String(32), nullable=True)
    name = Column(String(255), nullable=False)

    # Public secure URL returned at upload time; display/fallback only.
    url = Column(Text, nullable=False)

    size = Column(BigInteger, nullable=False, default=0)
    mime_type = Column(String(255), nullable=True)

    remote_locator = Column(String(500), nullable=True)
    remote_resource_kind = Column(String(16), nullable=True)
    remote_version = Column(BigInteger, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
