"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Not found errors (404)
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MALFORMED_IMPORT = "MALFORMED_IMPORT"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Backend errors (502)
    BACKEND_ERROR = "BACKEND_ERROR"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ProfileValidationError(AppException):
    """A profile failed a validation rule."""

    def __init__(self, reason: str, details: Any | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message=reason,
            status_code=400,
            details=details,
        )


class MalformedImportError(AppException):
    """Imported content is not a JSON array of records."""

    def __init__(self, message: str = "Invalid file") -> None:
        super().__init__(
            error_code=ErrorCode.MALFORMED_IMPORT,
            message=f"Import failed: {message}",
            status_code=400,
        )


class ProfileNotFoundError(AppException):
    """Profile not found."""

    def __init__(self, profile_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message=f"Profile not found: {profile_id}",
            status_code=404,
            details={"profile_id": profile_id},
        )


class BackendError(AppException):
    """The backend request failed (network, constraint violation, auth)."""

    def __init__(self, message: str = "Backend request failed") -> None:
        super().__init__(
            error_code=ErrorCode.BACKEND_ERROR,
            message=message,
            status_code=502,
        )
