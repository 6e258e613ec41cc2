"""Base repository with shared owner-scoped get-by-ID patterns.

Every drive table carries an ``owner_id``; lookups always filter on it so
a record belonging to someone else is indistinguishable from a missing one.
Subclasses specify model_class, id_column, and not_found_error; the base
provides the common implementations.
"""

from typing import TypeVar, Generic, Optional, Type
from sqlalchemy.orm import Session, Query

from ..database import Base
from ..exceptions import NotFoundError

ModelT = TypeVar("ModelT", bound=Base)


class OwnedRepository(Generic[ModelT]):
    """Shared repository logic for owner-scoped SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:     The SQLAlchemy model (e.g., Folder)
        id_column:       Name of the primary-key column
        not_found_error: Exception class to raise from get_owned
    """

    model_class: Type[ModelT]
    id_column: str = "id"
    not_found_error: Type[NotFoundError]

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, owner_id: str) -> Query:
        return self.db.query(self.model_class).filter(self.model_class.owner_id == owner_id)

    def get_owned(self, owner_id: str, entity_id: str) -> ModelT:
        """Get an entity owned by *owner_id*. Raises not_found_error otherwise."""
        entity = self.get_owned_optional(owner_id, entity_id)
        if entity is None:
            raise self.not_found_error(entity_id)
        return entity

    def get_owned_optional(self, owner_id: str, entity_id: Optional[str]) -> Optional[ModelT]:
        """Get an entity owned by *owner_id*, or None."""
        if not entity_id:
            return None
        col = getattr(self.model_class, self.id_column)
        return self._owned(owner_id).filter(col == entity_id).first()

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.flush()
