"""Drive façade: the single entry point the UI consumes.

Combines FolderService and FileService to answer "what is in this folder",
build breadcrumbs, and fan out deletes. Search is a pure predicate applied
to a listing after it has been fetched; queries never reach the database.

``DriveListing`` and ``Breadcrumb`` are client-held values. The HTTP API
is stateless: ``GET /api/drive`` returns a fresh listing and breadcrumb and
``DELETE /api/folders/{id}`` returns only ``{ok: true}``. A caller that
keeps its own view (the web client, a CLI, a test) updates it locally with
``DriveListing.without_folder`` or ``Breadcrumb.enter/back/go_to/rename/drop``
instead of refetching, the way ``DriveService.remove_folder(listing=...)``
does.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models.file_record import FileRecord
from ..models.folder import Folder
from ..schemas.drive import BreadcrumbSegment
from .file_service import FileService
from .folder_service import FolderService
from .object_store import ObjectStore

logger = logging.getLogger(__name__)

ROOT_NAME = "My Drive"


def root_segment() -> BreadcrumbSegment:
    return BreadcrumbSegment(id=None, name=ROOT_NAME)


def matches_query(name: Optional[str], query: Optional[str]) -> bool:
    """Case-insensitive substring match; an empty query matches everything."""
    if not query:
        return True
    return query.lower() in (name or "").lower()


@dataclass(frozen=True)
class DriveListing:
    """Folders and files of one folder, as held by a client."""

    folders: List[Folder] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)

    def filtered(self, query: Optional[str]) -> "DriveListing":
        return DriveListing(
            folders=[f for f in self.folders if matches_query(f.name, query)],
            files=[f for f in self.files if matches_query(f.name, query)],
        )

    def without_folder(self, folder_id: str) -> "DriveListing":
        """Drop the folder and any file listed under it."""
        return DriveListing(
            folders=[f for f in self.folders if f.folder_id != folder_id],
            files=[f for f in self.files if f.folder_id != folder_id],
        )


def filter_listing(listing: DriveListing, query: Optional[str]) -> DriveListing:
    return listing.filtered(query)


@dataclass(frozen=True)
class Breadcrumb:
    """Navigation path held by one client view.

    Built incrementally as the user clicks into folders, or seeded from
    ``DriveService.breadcrumb_for`` when opening a deep link.
    """

    segments: Tuple[BreadcrumbSegment, ...] = field(default_factory=lambda: (root_segment(),))

    @classmethod
    def from_segments(cls, segments: List[BreadcrumbSegment]) -> "Breadcrumb":
        return cls(segments=tuple(segments) or (root_segment(),))

    @property
    def current_id(self) -> Optional[str]:
        return self.segments[-1].id

    def enter(self, folder_id: str, name: str) -> "Breadcrumb":
        return replace(self, segments=self.segments + (BreadcrumbSegment(id=folder_id, name=name),))

    def back(self) -> "Breadcrumb":
        if len(self.segments) <= 1:
            return self
        return replace(self, segments=self.segments[:-1])

    def go_to(self, index: int) -> "Breadcrumb":
        if index < 0 or index >= len(self.segments):
            raise IndexError(f"No breadcrumb segment at {index}")
        return replace(self, segments=self.segments[: index + 1])

    def rename(self, folder_id: str, name: str) -> "Breadcrumb":
        return replace(
            self,
            segments=tuple(
                seg.model_copy(update={"name": name}) if seg.id == folder_id else seg
                for seg in self.segments
            ),
        )

    def drop(self, folder_id: str) -> "Breadcrumb":
        """Back to root when the removed folder is on the path."""
        if any(seg.id == folder_id for seg in self.segments):
            return Breadcrumb()
        return self


class DriveService:
    """Orchestrates folder and file operations for one request.

    Public methods:
        browse          -- folders + files of one folder
        breadcrumb_for  -- root segment + ancestor chain
        search          -- browse then filter by name
        remove_folder   -- delete and prune a client-held listing
    """

    def __init__(self, db: Session, store: ObjectStore, cascade: Optional[bool] = None):
        self.db = db
        self.files = FileService(db, store)
        self.folders = FolderService(db, file_service=self.files, cascade=cascade)

    def browse(self, owner_id: str, folder_id: Optional[str]) -> DriveListing:
        return DriveListing(
            folders=self.folders.list_children(owner_id, folder_id),
            files=self.files.list_in_folder(owner_id, folder_id),
        )

    def breadcrumb_for(self, owner_id: str, folder_id: Optional[str]) -> List[BreadcrumbSegment]:
        if folder_id is None:
            return [root_segment()]
        chain = self.folders.ancestor_chain(owner_id, folder_id)
        return [root_segment()] + [BreadcrumbSegment(id=seg.id, name=seg.name) for seg in chain]

    def search(self, owner_id: str, folder_id: Optional[str], query: Optional[str]) -> DriveListing:
        return filter_listing(self.browse(owner_id, folder_id), query)

    def remove_folder(
        self,
        owner_id: str,
        folder_id: str,
        listing: Optional[DriveListing] = None,
        cascade: Optional[bool] = None,
    ) -> Optional[DriveListing]:
        """Delete a folder; if a listing is given, return it pruned.

        Pruning only affects the caller's copy. Without cascading, files
        that lived in the folder are still stored and still listed by
        ``browse(owner, folder_id)``.
        """
        self.folders.remove(owner_id, folder_id, cascade=cascade)
        if listing is None:
            return None
        return listing.without_folder(folder_id)
