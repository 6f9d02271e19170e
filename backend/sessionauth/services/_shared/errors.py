"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. Every failure of the token lifecycle carries a stable ``kind`` (its
classification) and a ``status_code`` hint; the translation into HTTP problem
responses happens in :meth:`BaseService.translate_exceptions`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, *markers: str) -> bool:
    """
    Check whether an IntegrityError mentions any of ``markers``.

    Drivers word the failure differently: PostgreSQL names the constraint
    (``uq_users_username``) while SQLite names the column
    (``users.username``), so callers pass both.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    markers : str
        Constraint or ``table.column`` names to look for.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return any(marker.lower() in message for marker in markers)


class ErrorKind(str, Enum):
    """Classification attached to every service failure."""

    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INVALID_TOKEN = "invalid_token"
    BAD_REQUEST = "bad_request"
    MISMATCH = "mismatch"
    UNAUTHORIZED = "unauthorized"


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Each request fails independently; nothing here is fatal to the process.
    """

    kind: ErrorKind = ErrorKind.BAD_REQUEST
    status_code: int = 400


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    kind = ErrorKind.CONFLICT
    status_code = 409

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class InvalidTokenError(ServiceError):
    """A token failed signature, expiry, type or shape checks."""

    kind = ErrorKind.INVALID_TOKEN
    status_code = 401

    def __init__(self, message: str = "Token is invalid.") -> None:
        super().__init__(message)


class SessionStateError(ServiceError):
    """No refresh session exists for the identity (logged out or never logged in)."""

    kind = ErrorKind.BAD_REQUEST
    status_code = 400

    def __init__(self, message: str = "No active session for this identity.") -> None:
        super().__init__(message)


class TokenMismatchError(ServiceError):
    """The presented refresh token is not the one currently stored (stale or replayed)."""

    kind = ErrorKind.MISMATCH
    status_code = 400

    def __init__(self, message: str = "Refresh token does not match the active session.") -> None:
        super().__init__(message)


class AuthenticationError(ServiceError):
    """Credentials were rejected by the authenticator."""

    kind = ErrorKind.UNAUTHORIZED
    status_code = 401

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)
