"""
Custom exception classes for the application.

Malformed .partner content is never an exception: per-line problems are
collected on the ParseResult. These classes cover programmer errors and
file I/O failures around the format engine.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PARTNER_FILE_READ_ERROR")
        message: Human-readable message
        status_code: HTTP-style status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# PARTNER FILE ERRORS
# ===================

class InvalidPartnerContentError(ValidationError):
    """Parser was handed something other than decoded text."""

    def __init__(self, received_type: str):
        super().__init__(
            code="PARTNER_FILE_INVALID_CONTENT",
            message="Partner file content must be a string",
            details={"received_type": received_type}
        )


class NotPartnerFileError(ValidationError):
    """File name / content type does not look like a .partner file."""

    def __init__(self, filename: str, content_type: Optional[str] = None):
        super().__init__(
            code="PARTNER_FILE_INVALID_TYPE",
            message=f"'{filename}' is not a valid .partner file",
            details={"filename": filename, "content_type": content_type}
        )


class PartnerFileReadError(AppError):
    """A .partner file could not be read or decoded (400)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="PARTNER_FILE_READ_ERROR",
            message=message,
            status_code=400,
            details=details
        )


class PartnerFileWriteError(AppError):
    """A .partner file could not be written (500)."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="PARTNER_FILE_WRITE_ERROR",
            message=message,
            status_code=500,
            details=details
        )
