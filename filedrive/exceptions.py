"""Custom exception hierarchy for filedrive."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Folder errors
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    INVALID_PARENT = "INVALID_PARENT"

    # File errors
    FILE_NOT_FOUND = "FILE_NOT_FOUND"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Storage errors
    UPSTREAM_STORE_ERROR = "UPSTREAM_STORE_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"

    # Auth & rate limiting
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DriveException(Exception):
    """
    Base exception for all filedrive errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            status_code: HTTP status code to return
            details: Optional additional context/details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for JSON response.

        Returns:
            Dictionary with error, message, and details fields
        """
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class ValidationError(DriveException):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class InvalidParentError(DriveException):
    """Parent folder reference does not resolve to a folder owned by the caller."""

    def __init__(self, parent_id: str, field: str = "parent"):
        super().__init__(
            "Invalid folder",
            ErrorCode.INVALID_PARENT,
            status_code=400,
            details={"field": field, "folder_id": parent_id}
        )


class NotFoundError(DriveException):
    """Record does not exist or is owned by someone else.

    Cross-owner lookups raise this too, so callers cannot probe for ids
    belonging to other users.
    """

    def __init__(self, message: str, error_code: ErrorCode, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, status_code=404, details=details)


class FolderNotFoundError(NotFoundError):
    """Folder not found for this owner."""

    def __init__(self, folder_id: str):
        super().__init__(
            "Folder not found",
            ErrorCode.FOLDER_NOT_FOUND,
            details={"folder_id": folder_id}
        )


class FileRecordNotFoundError(NotFoundError):
    """File record not found for this owner."""

    def __init__(self, file_id: str):
        super().__init__(
            "File not found",
            ErrorCode.FILE_NOT_FOUND,
            details={"file_id": file_id}
        )


class UnauthorizedError(DriveException):
    """Request lacks valid authentication credentials."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message,
            ErrorCode.UNAUTHORIZED,
            status_code=401,
        )


class UpstreamStoreError(DriveException):
    """Object store operation failed unexpectedly.

    The SDK message is logged by the caller and never placed in details.
    """

    def __init__(self, message: str = "Object store request failed", operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message,
            ErrorCode.UPSTREAM_STORE_ERROR,
            status_code=502,
            details=details
        )


class PersistenceError(DriveException):
    """Database operation failed."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(
            message,
            ErrorCode.PERSISTENCE_ERROR,
            status_code=500,
        )
