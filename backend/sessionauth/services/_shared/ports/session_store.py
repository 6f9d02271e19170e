from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final, Protocol

REVOKED_MARKER: Final[str] = "revoked"


class SessionKeys:
    """
    Key schema shared by both kinds of session-store entries.

    - ``RT:<identity>`` holds the identity's current refresh token.
    - The raw access token is the key of its revoked marker.

    Encoded JWTs are ``base64url.base64url.base64url`` and never contain
    ``:``, so a raw token cannot land inside the ``RT:`` namespace; the
    builder still refuses one that would.
    """

    REFRESH_PREFIX: Final[str] = "RT:"

    @classmethod
    def refresh(cls, identity: str) -> str:
        if not identity:
            raise ValueError("identity must be a non-empty string")
        return f"{cls.REFRESH_PREFIX}{identity}"

    @classmethod
    def revoked(cls, access_token: str) -> str:
        if not access_token or access_token.startswith(cls.REFRESH_PREFIX):
            raise ValueError("access token cannot be used as a revoked-marker key")
        return access_token


class SessionStore(Protocol):
    """
    Key-value store with per-key time-to-live.

    Entries expire on their own; callers never clean up after TTL eviction.
    """

    def set(self, key: str, value: str, ttl: timedelta) -> None:
        """Write ``value`` under ``key``, replacing any previous value and TTL."""
        ...

    def get(self, key: str) -> str | None:
        """Return the live value for ``key`` or ``None``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``; absence is not an error."""
        ...

    def ttl(self, key: str) -> timedelta | None:
        """Remaining lifetime of ``key``, ``None`` when absent."""
        ...


@dataclass(frozen=True)
class _Entry:
    value: str
    expires_at: datetime


class InMemorySessionStore(SessionStore):
    """
    Process-local session store used in unit tests and single-process demos.

    .. note::
       Expiry is evaluated lazily on read against ``datetime.now``, so
       ``freezegun`` can move time forward in tests.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.expires_at <= self._now():
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, value: str, ttl: timedelta) -> None:
        with self._lock:
            self._entries[key] = _Entry(value=value, expires_at=self._now() + ttl)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._live(key)
            return entry.value if entry else None

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def ttl(self, key: str) -> timedelta | None:
        with self._lock:
            entry = self._live(key)
            return entry.expires_at - self._now() if entry else None
