# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class VerifiedIdentity:
    """
    Identity whose credentials (or token) have been verified.

    :param name: Stable username; doubles as the session-store key suffix.
    :type name: str
    :param roles: Granted role names, in grant order.
    :type roles: tuple[str, ...]
    """

    name: str
    roles: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TokenInfo:
    """
    Token pair produced by a token provider.

    :param grant_type: Authorization scheme clients must use (``"Bearer"``).
    :type grant_type: str
    :param access_token: Encoded, self-describing access token.
    :type access_token: str
    :param refresh_token: Encoded refresh token.
    :type refresh_token: str
    :param access_token_ttl: Lifetime of the access token.
    :type access_token_ttl: timedelta
    :param refresh_token_ttl: Lifetime of the refresh token, also used as the
        TTL of its session-store entry.
    :type refresh_token_ttl: timedelta
    """

    grant_type: str
    access_token: str
    refresh_token: str
    access_token_ttl: timedelta
    refresh_token_ttl: timedelta
