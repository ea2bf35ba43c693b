"""
Account error taxonomy.

Every failure in the registration/authentication flow is raised as an
``AccountError`` subclass. The class-level ``status_code`` is the HTTP status
used when the error reaches the application exception handler; route modules
re-raise a different subclass where an endpoint reports the same failure
with another status.
"""

from typing import Optional


class AccountError(Exception):
    """Base class for errors reported to clients as ``{key: message}``."""

    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    """Missing or malformed request fields."""

    status_code = 400
    default_message = "Missing required fields"


class ConflictError(AccountError):
    """An account with the given email already exists."""

    status_code = 400
    default_message = "Email already exists"


class BadRequestError(AccountError):
    status_code = 400
    default_message = "User ID is required"


class NotFoundError(AccountError):
    status_code = 404
    default_message = "User not found"


class AuthenticationError(AccountError):
    """Bad credentials, or a missing, invalid or expired session token."""

    status_code = 401
    default_message = "Token verification failed, authorization denied"


class InternalError(AccountError):
    """Unexpected store, hashing or signing failure. Never carries details."""

    status_code = 500
    default_message = "Internal Server Error"
