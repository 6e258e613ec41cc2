"""File API: list, upload, download, delete."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..core.auth import AuthContext, require_auth
from ..database import get_db
from ..schemas.common import OkResponse, normalize_folder_ref
from ..schemas.file import FileEnvelope, FileListResponse, FileResponse
from ..services.file_service import FileService
from ..services.object_store import ObjectStore, get_object_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])


@router.get("", response_model=FileListResponse)
def list_files(
    folder: Optional[str] = Query(None, description="Folder id; omit or 'null' for root"),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
    store: ObjectStore = Depends(get_object_store),
):
    service = FileService(db, store)
    records = service.list_in_folder(auth.user_id, normalize_folder_ref(folder))
    return FileListResponse(files=[FileResponse.from_model(r) for r in records])


@router.post("", response_model=FileEnvelope, status_code=201)
def upload_file(
    file: Optional[UploadFile] = File(None),
    folder: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
    store: ObjectStore = Depends(get_object_store),
):
    """Upload one file (multipart field ``file``) into an optional folder."""
    data = file.file.read() if file is not None else None
    service = FileService(db, store)
    record = service.create_from_upload(
        auth.user_id,
        normalize_folder_ref(folder),
        data,
        original_name=file.filename if file is not None else None,
        mime_type=file.content_type if file is not None else None,
        size=len(data) if data is not None else None,
    )
    return FileEnvelope(file=FileResponse.from_model(record))


@router.get("/download/{file_id}", response_class=RedirectResponse, status_code=302)
def download_file(
    file_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
    store: ObjectStore = Depends(get_object_store),
):
    """Redirect to a signed retrieval URL for the file."""
    url = FileService(db, store).resolve_download_url(auth.user_id, file_id)
    return RedirectResponse(url, status_code=302)


@router.delete("/{file_id}", response_model=OkResponse)
def delete_file(
    file_id: str,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth),
    store: ObjectStore = Depends(get_object_store),
):
    """Delete a file. The record goes even if the remote blob cannot be removed."""
    FileService(db, store).remove(auth.user_id, file_id)
    return OkResponse()
