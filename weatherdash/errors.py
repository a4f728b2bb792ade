"""
Application error taxonomy.

Every error raised on purpose by the service derives from ``AppError``.
Messages are shown to API clients and must not contain internal details.
"""

from typing import List, Optional


class AppError(Exception):
    """Base class for errors whose message is safe to return to clients."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[str]] = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Raised when client input is malformed or missing."""

    status_code = 400
    default_message = "Validation error"


class BadRequestError(ValidationError):
    """Raised when a weather query has neither a city nor coordinates."""

    default_message = "Bad request"


class DuplicateError(AppError):
    """Raised when a unique constraint would be violated."""

    status_code = 400
    default_message = "User with this email already exists"


class AuthError(AppError):
    """
    Raised when a request is not authenticated.

    401 when no credential was sent, 403 when the credential is invalid.
    The message never says which check failed.
    """

    status_code = 401
    default_message = "Access token required"

    def __init__(self, message: Optional[str] = None, status_code: int = 401) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidTokenError(Exception):
    """Raised by the token service for malformed, forged or expired tokens."""


class NotFoundError(AppError):
    """Raised when a user or location does not exist."""

    status_code = 404
    default_message = "Not found"


class UpstreamTimeoutError(AppError):
    """Raised when the weather provider does not answer in time."""

    status_code = 408
    default_message = "Weather service timeout"


class UpstreamError(AppError):
    """Raised for any other weather provider failure."""

    status_code = 500
    default_message = "Error fetching weather data"


class InternalError(AppError):
    """Server-side failure whose cause is logged but not returned."""

    status_code = 500
