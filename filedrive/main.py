"""Main FastAPI application."""

import logging
import re
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import __version__
from . import models  # noqa: F401  (registers tables on Base.metadata)
from .api import auth_router, drive_router, files_router, folders_router
from .core.config import settings, ConfigurationError, Environment
from .core.logging_config import setup_logging
from .database import engine, Base, get_db, DATABASE_URL, is_postgresql
from .exceptions import DriveException
from .middleware.exception_handler import drive_exception_handler, persistence_exception_handler
from .middleware.request_context import RequestContextMiddleware

# Setup logging first
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)


def _mask_url(url: str) -> str:
    """Mask the password in a database URL for logging."""
    return re.sub(r'://([^:]+):([^@]+)@', r'://\1:***@', url)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the filedrive API."""
    logger.info(f"Environment: {settings.environment.value}")
    try:
        problems = settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT:
        for problem in problems:
            logger.warning(f"CONFIG: {problem}")

    logger.info(f"Connecting to database: {_mask_url(DATABASE_URL)}")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.critical(f"Database initialisation failed: {e}")
        raise SystemExit(1) from e

    logger.info(
        "filedrive API started | env=%s | db=%s | object_store=%s | cascade=%s",
        settings.environment.value,
        "PostgreSQL" if is_postgresql() else "SQLite",
        "configured" if settings.object_store_configured else "missing",
        settings.folder_delete_cascade,
    )

    yield


app = FastAPI(
    title="filedrive API",
    description=(
        "Per-user file drive: nested folders, uploads stored in Cloudinary, "
        "signed download redirects.\n\n"
        "**Authentication:** every `/api/folders`, `/api/files` and `/api/drive` "
        "endpoint requires a `Bearer` token from `/api/auth/signup` or `/api/auth/login`."
    ),
    version=__version__,
    lifespan=lifespan,
)

# Middleware stack (outermost first, CORS wraps request context).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestContextMiddleware)

app.add_exception_handler(DriveException, drive_exception_handler)
app.add_exception_handler(SQLAlchemyError, persistence_exception_handler)

app.include_router(auth_router)
app.include_router(folders_router)
app.include_router(files_router)
app.include_router(drive_router)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "name": "filedrive API",
        "version": __version__,
        "status": "running"
    }


@app.get("/_health")
def liveness():
    """Bare liveness probe; never touches the database."""
    return {"ok": True}


_startup_time = time.monotonic()


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check returning database status, uptime, and file count.

    Never raises; a database failure reports "degraded" instead of a 5xx.
    """
    db_status = "ok"
    file_count = 0
    try:
        file_count = db.execute(text("SELECT COUNT(*) FROM files")).scalar() or 0
    except SQLAlchemyError:
        db_status = "error"

    return {
        "status": "healthy" if db_status == "ok" else "degraded",
        "db": db_status,
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": __version__,
        "file_count": file_count,
    }
