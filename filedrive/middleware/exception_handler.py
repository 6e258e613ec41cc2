"""Exception handlers for structured error responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import DriveException, PersistenceError

logger = logging.getLogger(__name__)


async def drive_exception_handler(request: Request, exc: DriveException) -> JSONResponse:
    """
    Handle domain exceptions and return structured JSON responses.

    Args:
        request: FastAPI request object
        exc: DriveException instance

    Returns:
        JSONResponse with error details
    """
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        f"DriveException: {exc.error_code.value}",
        extra={
            "error_code": exc.error_code.value,
            "path": request.url.path,
            "method": request.method,
            "details": exc.details,
            "status_code": exc.status_code
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def persistence_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Turn an uncaught database error into a PERSISTENCE_ERROR response.

    The driver message stays in the log; the client only sees the code.
    """
    logger.error(
        "Unhandled database error: %s", exc,
        extra={"path": request.url.path, "method": request.method},
    )
    error = PersistenceError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
