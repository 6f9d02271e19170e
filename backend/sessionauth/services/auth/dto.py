# sessionauth/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from sessionauth.services._shared.dto import TokenInfo

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class SignUpIn:
    """
    Input DTO for account creation.

    :param username: Requested login identity (must be unused).
    :type username: str
    :param password: Raw password (hashed before storage).
    :type password: str
    :param phone: Optional contact phone.
    :type phone: str | None
    :param email: Optional contact email.
    :type email: str | None
    """

    username: str
    password: str
    phone: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param username: Login identity.
    :type username: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class ReissueIn:
    """
    Input DTO for token reissue.

    :param access_token: The caller's current access token; may be expired.
    :type access_token: str
    :param refresh_token: The refresh token from the last login/reissue.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param access_token: Access token to revoke; must still be valid.
    :type access_token: str
    """

    access_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Token pair handed to the client.

    :param grant_type: Authorization scheme (``"Bearer"``).
    :type grant_type: str
    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param refresh_token_expires_in: Refresh token lifetime in milliseconds.
    :type refresh_token_expires_in: int
    """

    grant_type: str
    access_token: str
    refresh_token: str
    refresh_token_expires_in: int

    @classmethod
    def from_token_info(cls, info: TokenInfo) -> TokenPairOut:
        return cls(
            grant_type=info.grant_type,
            access_token=info.access_token,
            refresh_token=info.refresh_token,
            refresh_token_expires_in=int(info.refresh_token_ttl.total_seconds() * 1000),
        )
