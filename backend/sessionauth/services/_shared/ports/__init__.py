"""
sessionauth.services._shared.ports
==================================

Collection of *ports* (hexagonal interfaces) that define the contracts the
token lifecycle service depends on.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, issuing/validating/reading signed tokens, and
    :class:`~.StubTokenProvider` for unit tests.

- :mod:`session_store`:
    :class:`~.SessionStore` (key-value store with per-key TTL), the
    :class:`~.SessionKeys` key schema and :class:`~.InMemorySessionStore`.

- :mod:`password_hasher`:
    :class:`~.PasswordHasher`.

- :mod:`authenticator`:
    :class:`~.Authenticator`, credential verification.

Concrete adapters (Redis, flask-jwt-extended, werkzeug) live under
``sessionauth.infra``.
"""

from __future__ import annotations

from .authenticator import Authenticator
from .password_hasher import PasswordHasher
from .session_store import REVOKED_MARKER, InMemorySessionStore, SessionKeys, SessionStore
from .token_provider import (
    ACCESS_TOKEN_TYPE,
    GRANT_TYPE,
    REFRESH_TOKEN_TYPE,
    StubTokenProvider,
    TokenProvider,
)

__all__ = [
    "ACCESS_TOKEN_TYPE",
    "REFRESH_TOKEN_TYPE",
    "GRANT_TYPE",
    "REVOKED_MARKER",
    "Authenticator",
    "PasswordHasher",
    "SessionKeys",
    "SessionStore",
    "InMemorySessionStore",
    "StubTokenProvider",
    "TokenProvider",
]
