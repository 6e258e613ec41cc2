"""Folder tree operations: create, rename, remove, list children, ancestor chain.

Folders form a forest per owner. A folder's parent is fixed when it is
created and there is no move operation, so the parent links cannot form a
cycle through this interface. A reparent operation would have to walk the
new parent's ancestors and reject itself before being accepted.

Deleting a folder removes that folder only unless cascading is enabled
(``FOLDER_DELETE_CASCADE`` or the per-call ``cascade`` flag). Without
cascading, child folders and files keep pointing at the removed id.
"""

import logging
from typing import List, Optional, TYPE_CHECKING

from sqlalchemy.orm import Session

from ..core.config import settings
from ..exceptions import FolderNotFoundError, InvalidParentError, ValidationError
from ..models.folder import Folder
from ..repositories.file_repository import FileRepository
from ..repositories.folder_repository import FolderRepository
from ..schemas.folder import AncestorSegment

if TYPE_CHECKING:
    from .file_service import FileService

logger = logging.getLogger(__name__)

MAX_FOLDER_NAME_LENGTH = 255


class FolderService:
    """Owner-scoped folder tree behind a narrow interface.

    Public methods:
        list_children   -- exact parent match, newest first
        get             -- one owned folder
        create          -- validates name and parent ownership
        rename          -- trims; parent never changes
        remove          -- this folder only, or the whole subtree when cascading
        ancestor_chain  -- root-most ancestor down to the folder itself
    """

    def __init__(
        self,
        db: Session,
        file_service: Optional["FileService"] = None,
        cascade: Optional[bool] = None,
    ):
        self.db = db
        self.repo = FolderRepository(db)
        self.file_repo = FileRepository(db)
        self.file_service = file_service
        self.cascade = settings.folder_delete_cascade if cascade is None else cascade

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_children(self, owner_id: str, parent_id: Optional[str]) -> List[Folder]:
        return self.repo.list_children(owner_id, parent_id)

    def get(self, owner_id: str, folder_id: str) -> Folder:
        return self.repo.get_owned(owner_id, folder_id)

    def create(self, owner_id: str, name: Optional[str], parent_id: Optional[str] = None) -> Folder:
        name = self._clean_name(name)
        if parent_id and self.repo.get_owned_optional(owner_id, parent_id) is None:
            raise InvalidParentError(parent_id)

        folder = self.repo.create(owner_id, name, parent_id or None)
        self.db.commit()
        logger.info("Folder created", extra={"folder_id": folder.folder_id, "parent_id": folder.parent_id})
        return folder

    def rename(self, owner_id: str, folder_id: str, new_name: Optional[str]) -> Folder:
        folder = self.repo.get_owned(owner_id, folder_id)
        name = self._clean_name(new_name)
        folder = self.repo.rename(folder, name)
        self.db.commit()
        return folder

    def remove(self, owner_id: str, folder_id: str, cascade: Optional[bool] = None) -> int:
        """Delete a folder. Returns the number of folders removed."""
        folder = self.repo.get_owned(owner_id, folder_id)
        cascade = self.cascade if cascade is None else cascade

        removed_folders = 1
        removed_files = 0
        if cascade:
            removed_folders, removed_files = self._remove_subtree(owner_id, folder)
        else:
            self.repo.delete(folder)

        self.db.commit()
        logger.info(
            "Folder removed",
            extra={
                "folder_id": folder_id,
                "cascade": cascade,
                "removed_folders": removed_folders,
                "removed_files": removed_files,
            },
        )
        return removed_folders

    def ancestor_chain(self, owner_id: str, folder_id: str) -> List[AncestorSegment]:
        """Walk parent links up from *folder_id*; root-most segment first.

        A link that does not resolve to a folder owned by *owner_id* makes
        the whole lookup fail; a partial chain is never returned.
        """
        folder = self.repo.get_owned(owner_id, folder_id)
        chain: List[AncestorSegment] = []
        seen = set()

        while folder is not None:
            if folder.folder_id in seen:
                logger.error("Cycle in folder parents", extra={"folder_id": folder_id})
                raise FolderNotFoundError(folder_id)
            seen.add(folder.folder_id)
            chain.insert(0, AncestorSegment(id=folder.folder_id, name=folder.name))

            if folder.parent_id is None:
                break
            parent = self.repo.get_owned_optional(owner_id, folder.parent_id)
            if parent is None:
                logger.warning(
                    "Broken ancestor chain",
                    extra={"folder_id": folder_id, "missing_parent_id": folder.parent_id},
                )
                raise FolderNotFoundError(folder_id)
            folder = parent

        return chain

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Missing name", field="name")
        if len(name) > MAX_FOLDER_NAME_LENGTH:
            raise ValidationError(
                f"Name must be at most {MAX_FOLDER_NAME_LENGTH} characters", field="name"
            )
        return name

    def _remove_subtree(self, owner_id: str, root: Folder) -> tuple[int, int]:
        """Delete *root*, every descendant folder, and the files inside them."""
        if self.file_service is None:
            raise RuntimeError("Cascading folder delete needs a FileService")

        removed_folders = 0
        removed_files = 0
        pending = [root]
        seen = set()

        while pending:
            folder = pending.pop()
            if folder.folder_id in seen:
                continue
            seen.add(folder.folder_id)

            pending.extend(self.repo.list_children(owner_id, folder.folder_id))
            for record in self.file_repo.list_in_folder(owner_id, folder.folder_id):
                self.file_service.discard_record(record)
                removed_files += 1

            self.repo.delete(folder)
            removed_folders += 1

        return removed_folders, removed_files
