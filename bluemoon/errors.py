"""Application error taxonomy shared by services and the HTTP layer.

Services raise these; the API layer renders them as
``{"error": {"code": ..., "message": ...}}`` with the error's HTTP status.
"""

from typing import Any, Dict

from fastapi import status


class AppError(Exception):
    """Base application error."""

    def __init__(self, message: str, code: str, http_status: int = 400):
        """Initialize error."""
        self.message = message
        self.code = code
        self.http_status = http_status
        super().__init__(message)


class ValidationError(AppError):
    """A required field is missing or malformed. Raised before any store access."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, "validation_error", status.HTTP_400_BAD_REQUEST)


class NotFoundError(AppError):
    """The requested entity does not exist."""

    def __init__(self, message: str = "Not found"):
        super().__init__(message, "not_found", status.HTTP_404_NOT_FOUND)


class ConflictError(AppError):
    """A unique key (unit label, slot number, ...) is already taken."""

    def __init__(self, message: str = "Already exists"):
        super().__init__(message, "conflict", status.HTTP_400_BAD_REQUEST)


class StoreUnavailableError(AppError):
    """The database could not complete the operation. Nothing was changed."""

    def __init__(self, message: str = "Database unavailable"):
        super().__init__(message, "store_unavailable", status.HTTP_503_SERVICE_UNAVAILABLE)


class SearchUnavailableError(StoreUnavailableError):
    """Every branch of a cross-entity search failed."""

    def __init__(self, message: str = "Search unavailable"):
        super().__init__(message)


def error_response(error: AppError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StoreUnavailableError",
    "SearchUnavailableError",
    "error_response",
]
