"""Combined drive view: one folder's contents, its breadcrumb, optional name filter."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.common import normalize_folder_ref
from ..schemas.drive import DriveResponse
from ..schemas.file import FileResponse
from ..schemas.folder import FolderResponse
from ..services.drive_service import DriveService
from ..services.object_store import ObjectStore, get_object_store

router = APIRouter(prefix="/api/drive", tags=["drive"])


@router.get("", response_model=DriveResponse)
def browse(
    folder: Optional[str] = Query(None, description="Folder id; omit or 'null' for root"),
    q: str = Query("", description="Case-insensitive name filter"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
    store: ObjectStore = Depends(get_object_store),
):
    folder_id = normalize_folder_ref(folder)
    service = DriveService(db, store)
    breadcrumb = service.breadcrumb_for(auth.user_id, folder_id)
    listing = service.search(auth.user_id, folder_id, q)
    return DriveResponse(
        folder=folder_id,
        query=q,
        breadcrumb=breadcrumb,
        folders=[FolderResponse.from_model(f) for f in listing.folders],
        files=[FileResponse.from_model(f) for f in listing.files],
    )
