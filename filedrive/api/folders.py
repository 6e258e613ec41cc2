"""Folder API: list, create, rename, delete, ancestors.

Every endpoint is scoped to the authenticated user. Ids owned by someone
else answer 404, exactly like ids that do not exist.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.common import OkResponse, normalize_folder_ref
from ..schemas.folder import (
    AncestorsResponse,
    FolderCreate,
    FolderEnvelope,
    FolderListResponse,
    FolderRename,
    FolderResponse,
)
from ..services.drive_service import DriveService
from ..services.folder_service import FolderService
from ..services.object_store import ObjectStore, get_object_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/folders", tags=["folders"])


@router.get("", response_model=FolderListResponse)
def list_folders(
    parent: Optional[str] = Query(None, description="Parent folder id; omit or 'null' for root"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = FolderService(db)
    folders = service.list_children(auth.user_id, normalize_folder_ref(parent))
    return FolderListResponse(folders=[FolderResponse.from_model(f) for f in folders])


@router.post("", response_model=FolderEnvelope, status_code=201)
def create_folder(
    data: FolderCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = FolderService(db)
    folder = service.create(auth.user_id, data.name, normalize_folder_ref(data.parent))
    return FolderEnvelope(folder=FolderResponse.from_model(folder))


# Declared before "/{folder_id}" so it is not shadowed.
@router.get("/ancestors/{folder_id}", response_model=AncestorsResponse)
def get_ancestors(
    folder_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    """Ancestor chain from the top-most folder down to *folder_id*."""
    service = FolderService(db)
    return AncestorsResponse(ancestors=service.ancestor_chain(auth.user_id, folder_id))


@router.get("/{folder_id}", response_model=FolderEnvelope)
def get_folder(
    folder_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = FolderService(db)
    return FolderEnvelope(folder=FolderResponse.from_model(service.get(auth.user_id, folder_id)))


@router.patch("/{folder_id}", response_model=FolderEnvelope)
def rename_folder(
    folder_id: str,
    data: FolderRename,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
):
    service = FolderService(db)
    folder = service.rename(auth.user_id, folder_id, data.name)
    return FolderEnvelope(folder=FolderResponse.from_model(folder))


@router.delete("/{folder_id}", response_model=OkResponse)
def delete_folder(
    folder_id: str,
    cascade: Optional[bool] = Query(None, description="Override FOLDER_DELETE_CASCADE"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
    store: ObjectStore = Depends(get_object_store),
):
    """Delete a folder. Contents stay unless cascading is on."""
    DriveService(db, store).remove_folder(auth.user_id, folder_id, cascade=cascade)
    return OkResponse()
