"""
Domain errors raised by the content editors.
Routes translate them into HTTPException responses via raise_http_error.
"""
from fastapi import HTTPException, status


class CMSError(Exception):
    """Base class for editor errors that carry a user-facing message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error = "Request failed"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DraftValidationError(CMSError):
    """A required field is missing or a form value is out of range."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Validation error"


class ContentValidationError(DraftValidationError):
    """Raw JSON content failed to parse or does not match its section type."""

    error = "Invalid content"


class NotFoundError(CMSError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class ConflictError(CMSError):
    """A unique column (site content key, past work slug) already holds the value."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


def raise_http_error(exc: CMSError):
    """Re-raise a domain error as an HTTPException with the standard error payload."""
    raise HTTPException(
        status_code=exc.status_code,
        detail={"error": exc.error, "detail": exc.message}
    ) from exc
