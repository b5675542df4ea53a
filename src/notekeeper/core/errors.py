"""Project-wide custom exceptions.

Routers never translate these by hand: ``notekeeper.api.errors`` registers a
single handler that maps each class to exactly one HTTP status. Services and
stores raise them instead of returning ``None`` or leaking raw SQLAlchemy /
jose errors upward.

Add new errors here rather than scattering small ``class XError(Exception):``
definitions across the codebase; this keeps the public error surface easy to
audit and map to HTTP responses.
"""
from __future__ import annotations

import enum


class NotekeeperError(Exception):
    """Base class for all custom project exceptions.

    ``status_code`` and ``public_message`` drive the HTTP mapping; subclasses
    override them as class attributes.
    """
    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)

    @property
    def detail(self) -> str:
        return str(self)


class ValidationError(NotekeeperError):
    """Bad input shape, length or charset."""
    status_code = 400
    public_message = "Invalid request"


class DuplicateUsernameError(NotekeeperError):
    status_code = 409
    public_message = "Username already registered"


class InvalidCredentialsError(NotekeeperError):
    """Unknown username or wrong password; both share one message."""
    status_code = 401
    public_message = "Invalid username or password"


class UnauthorizedError(NotekeeperError):
    """Missing, invalid or expired session token."""
    status_code = 401
    public_message = "Not authenticated"


class InvalidTokenError(UnauthorizedError):
    """Raised by the token service when a credential fails verification."""


class ForbiddenReason(str, enum.Enum):
    NOT_OWNER = "not_owner"
    EDIT_WINDOW_EXPIRED = "edit_window_expired"


class ForbiddenError(NotekeeperError):
    """Authenticated but not permitted.

    Surfaces as 401 with one user-facing message; ``reason`` keeps the
    distinct cause for callers and tests.
    """
    status_code = 401
    public_message = "Not permitted to modify this note"

    def __init__(self, reason: ForbiddenReason):
        self.reason = reason
        super().__init__()


class NotFoundError(NotekeeperError):
    status_code = 404
    public_message = "Note not found"


class UnknownUserError(NotekeeperError):
    status_code = 400
    public_message = "User not found"

    def __init__(self, username: str):
        self.username = username
        super().__init__()


class InvalidDateFormatError(NotekeeperError):
    status_code = 400
    public_message = "Invalid date format, use 'YYYY-MM-DD'"

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid date format for '{field}', use 'YYYY-MM-DD'")


class StoreError(NotekeeperError):
    """Backing store failure. The client only ever sees ``public_message``."""
    status_code = 500
    public_message = "Internal server error"

    @property
    def detail(self) -> str:
        return self.public_message


__all__ = [
    "NotekeeperError",
    "ValidationError",
    "DuplicateUsernameError",
    "InvalidCredentialsError",
    "UnauthorizedError",
    "InvalidTokenError",
    "ForbiddenReason",
    "ForbiddenError",
    "NotFoundError",
    "UnknownUserError",
    "InvalidDateFormatError",
    "StoreError",
]
