"""Folder model: one node in a user's folder forest."""

from sqlalchemy import Column, Index, String, DateTime, ForeignKey

from ._common import new_id, utcnow
from ..database import Base


class Folder(Base):
    """A folder owned by one user.

    ``parent_id`` is NULL for root-level folders ("My Drive"). It is a plain
    column rather than a foreign key: a non-cascading delete leaves children
    pointing at the removed parent. The parent is fixed at creation.
    """

    __tablename__ = "folders"
    __table_args__ = (
        Index("ix_folders_owner_parent", "owner_id", "parent_id"),
        Index("ix_folders_created_at", "created_at"),
    )

    folder_id = Column(String(32), primary_key=True, default=new_id)
    owner_id = Column(String(32), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    parent_id = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
