"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import verify_jwt_in_request

from sessionauth.core.errors import Unauthorized
from sessionauth.core.extensions import get_redis
from sessionauth.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from sessionauth.infra.redis.redis_session_store import RedisSessionStore
from sessionauth.infra.security.password_hasher import WerkzeugPasswordHasher
from sessionauth.services import AuthService, UserCredentialsAuthenticator
from sessionauth.services._shared.base import BaseService
from sessionauth.services._shared.errors import ServiceError

F = TypeVar("F", bound=Callable[..., Any])


def build_auth_service() -> AuthService:
    """Compose :class:`AuthService` with the production adapters."""

    hasher = WerkzeugPasswordHasher()
    return AuthService(
        token_provider=JWTTokenProvider(),
        session_store=RedisSessionStore(get_redis()),
        password_hasher=hasher,
        authenticator=UserCredentialsAuthenticator(password_hasher=hasher),
    )


def bearer_token() -> str | None:
    """Return the raw token from ``Authorization: Bearer <token>``, if any."""

    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def translate_errors(func: F) -> F:
    """Re-raise service errors as API errors so the problem handler renders them."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        try:
            return func(*args, **kwargs)
        except ServiceError as exc:
            raise BaseService.translate_exceptions(exc) from exc

    return wrapper  # type: ignore[return-value]


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, non-revoked JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        token = bearer_token()
        service = build_auth_service()
        if token is None or service.is_access_token_revoked(token):
            raise Unauthorized("Token has been revoked", code="token_revoked")
        g.auth_service = service
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
