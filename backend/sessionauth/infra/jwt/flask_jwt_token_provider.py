# sessionauth/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from flask import current_app
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from sessionauth.services._shared.dto import TokenInfo, VerifiedIdentity
from sessionauth.services._shared.errors import InvalidTokenError
from sessionauth.services._shared.ports import GRANT_TYPE, TokenProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Access tokens carry the identity as ``sub`` and the granted roles in a
    ``roles`` claim. Lifetimes come from ``JWT_ACCESS_TOKEN_EXPIRES`` and
    ``JWT_REFRESH_TOKEN_EXPIRES``.

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def _lifetime(self, key: str) -> timedelta:
        value = current_app.config[key]
        if isinstance(value, timedelta):
            return value
        return timedelta(seconds=int(value))

    def issue(self, identity: VerifiedIdentity) -> TokenInfo:
        from flask_jwt_extended import create_access_token, create_refresh_token

        access_ttl = self._lifetime("JWT_ACCESS_TOKEN_EXPIRES")
        refresh_ttl = self._lifetime("JWT_REFRESH_TOKEN_EXPIRES")

        access = cast(
            str,
            create_access_token(
                identity=identity.name,
                additional_claims={"roles": list(identity.roles)},
                expires_delta=access_ttl,
            ),
        )
        refresh = cast(
            str,
            create_refresh_token(identity=identity.name, expires_delta=refresh_ttl),
        )
        return TokenInfo(
            grant_type=GRANT_TYPE,
            access_token=access,
            refresh_token=refresh,
            access_token_ttl=access_ttl,
            refresh_token_ttl=refresh_ttl,
        )

    def decode(self, token: str, *, allow_expired: bool = False) -> dict[str, Any]:
        """
        Decode and verify ``token``.

        :raises InvalidTokenError: On bad signature, shape or (unless
            ``allow_expired``) expiry.
        """
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token, allow_expired=allow_expired))
        except (JWTExtendedException, PyJWTError) as exc:
            raise InvalidTokenError(f"Token is invalid: {exc}") from exc

    def validate(self, token: str, *, expected_type: str | None = None) -> bool:
        try:
            claims = self.decode(token)
        except InvalidTokenError as exc:
            log.debug("token rejected: %s", exc)
            return False
        return expected_type is None or claims.get("type") == expected_type

    def identity_of(self, token: str, *, expected_type: str | None = None) -> VerifiedIdentity:
        claims = self.decode(token, allow_expired=True)
        if expected_type is not None and claims.get("type") != expected_type:
            raise InvalidTokenError(f"Token type is not {expected_type!r}.")
        subject = claims.get("sub")
        if not subject:
            raise InvalidTokenError("Token carries no subject.")
        return VerifiedIdentity(name=str(subject), roles=tuple(claims.get("roles") or ()))

    def remaining_ttl(self, token: str) -> timedelta:
        exp = int(self.decode(token, allow_expired=True)["exp"])
        left = datetime.fromtimestamp(exp, tz=UTC) - datetime.now(UTC)
        return max(left, timedelta(0))
