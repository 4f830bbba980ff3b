"""
Application-layer exceptions.

These exceptions are raised by use cases and infrastructure repositories and
converted into the JSON error envelope by the handlers registered in
backend.main. Each class carries the HTTP status it maps to.
"""

from typing import Any, Dict, List, Optional


class GymAPIError(Exception):
    """Base class for every error the API reports to callers."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


class ValidationError(GymAPIError):
    """Malformed or conflicting input (e.g. a second pending change request)."""

    status_code = 400
    default_message = "Invalid input data"


class AuthenticationError(GymAPIError):
    """Credentials or token could not be verified."""

    status_code = 401
    default_message = "Invalid credentials"


class AuthorizationError(GymAPIError):
    """
    The entity exists but the caller lacks the relationship to act on it.

    Ownership checks that must not leak existence use NotFoundError instead.
    """

    status_code = 403
    default_message = "Access denied"


class NotFoundError(GymAPIError):
    """Missing or inaccessible entity."""

    status_code = 404
    default_message = "Resource not found"


class ConflictError(GymAPIError):
    """Unique constraint violation (duplicate email or username)."""

    status_code = 400
    default_message = "Resource already exists"


class AccountLockedError(GymAPIError):
    """Too many failed login attempts."""

    status_code = 423
    default_message = "Account temporarily locked due to too many login attempts"


class InternalError(GymAPIError):
    """Unexpected failure, including partially applied multi-step writes."""

    status_code = 500
