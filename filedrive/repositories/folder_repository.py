"""Repository for folder database operations."""

from typing import List, Optional

from ..exceptions import FolderNotFoundError
from ..models.folder import Folder
from .base import OwnedRepository


class FolderRepository(OwnedRepository[Folder]):
    """Data access layer for folders."""

    model_class = Folder
    id_column = "folder_id"
    not_found_error = FolderNotFoundError

    def create(self, owner_id: str, name: str, parent_id: Optional[str] = None) -> Folder:
        folder = Folder(owner_id=owner_id, name=name, parent_id=parent_id)
        self.db.add(folder)
        self.db.flush()
        self.db.refresh(folder)
        return folder

    def list_children(self, owner_id: str, parent_id: Optional[str]) -> List[Folder]:
        """Folders directly under *parent_id*, newest first.

        ``None`` matches root-level folders only (``parent_id IS NULL``).
        """
        query = self._owned(owner_id)
        if parent_id is None:
            query = query.filter(Folder.parent_id.is_(None))
        else:
            query = query.filter(Folder.parent_id == parent_id)
        return query.order_by(Folder.created_at.desc()).all()

    def rename(self, folder: Folder, name: str) -> Folder:
        folder.name = name
        self.db.flush()
        self.db.refresh(folder)
        return folder
