# comments in English; reST docstrings
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import cast

import redis  # type: ignore[import-untyped]

from sessionauth.services._shared.ports import SessionStore


@dataclass(slots=True)
class RedisSessionStore(SessionStore):
    """
    Redis-backed session store.

    Holds both ``RT:<identity>`` refresh sessions and revoked access-token
    markers; Redis expires them on its own.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    @staticmethod
    def _ms(ttl: timedelta) -> int:
        # Redis rejects non-positive expirations; a spent TTL still gets 1 ms.
        return max(1, int(ttl.total_seconds() * 1000))

    @staticmethod
    def _decode(raw: bytes | str | None) -> str | None:
        if raw is None:
            return None
        return raw.decode() if isinstance(raw, bytes | bytearray) else str(raw)

    def set(self, key: str, value: str, ttl: timedelta) -> None:
        self.r.set(key, value, px=self._ms(ttl))

    def get(self, key: str) -> str | None:
        return self._decode(cast(bytes | None, self.r.get(key)))

    def delete(self, key: str) -> None:
        self.r.delete(key)

    def ttl(self, key: str) -> timedelta | None:
        left = cast(int, self.r.pttl(key))
        # -2: missing key, -1: no expiry (never written by this store)
        if left < 0:
            return None
        return timedelta(milliseconds=left)
