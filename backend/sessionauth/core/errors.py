"""Centralized JSON (RFC 7807) error handling for the API.

Every failure leaves the app as ``application/problem+json`` carrying a
stable ``code`` and the request's correlation id. 4xx are logged as
warnings, 5xx as errors with the traceback.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from sessionauth.core.logger import ensure_request_id

log = logging.getLogger(__name__)


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, typically snake_case.
    details : dict[str, Any] | None, optional
        Optional structured payload included in the response body.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}


class Unauthorized(APIError):
    """401 when authentication fails or a token is rejected."""

    def __init__(self, message: str = "Unauthorized", code: str = "unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code=code)


def problem_response(
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    *,
    exc_info: bool = False,
) -> tuple[Response, int]:
    """
    Log the failure and build its problem+json response.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Client-safe summary, sent as ``detail``.
    :param details: Optional structured payload.
    :param exc_info: Attach the active traceback to the log record.
    :returns: ``(response, status)`` pair for a Flask error handler.
    """
    status = int(status)
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": message,
        "instance": request.path,
        "code": code,
        "request_id": ensure_request_id(),
    }
    if details:
        problem["details"] = details

    level = logging.ERROR if status >= 500 else logging.WARNING
    log.log(
        level,
        "request failed: code=%s status=%s detail=%s",
        code,
        status,
        message,
        exc_info=exc_info,
    )

    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp, status


def _http_code(status: int) -> str:
    if status == HTTPStatus.UNPROCESSABLE_ENTITY:
        return "unprocessable_entity"
    return HTTPStatus(status).phrase.lower().replace(" ", "_").replace("-", "_")


def _register_jwt_callbacks() -> None:
    """Render flask-jwt-extended rejections as problem+json instead of ``{"msg": ...}``."""
    from sessionauth.core.extensions import jwt

    @jwt.unauthorized_loader
    def _missing_token(reason: str):
        return problem_response(HTTPStatus.UNAUTHORIZED, "missing_token", reason)

    @jwt.invalid_token_loader
    def _invalid_token(reason: str):
        return problem_response(HTTPStatus.UNAUTHORIZED, "invalid_token", reason)

    @jwt.expired_token_loader
    def _expired_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return problem_response(HTTPStatus.UNAUTHORIZED, "token_expired", "Token has expired")


def init_app(app: Flask) -> None:
    """Attach the problem+json handlers and the JWT rejection loaders."""

    _register_jwt_callbacks()

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return problem_response(err.status_code, err.code, err.message, err.details)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = err.description or HTTPStatus(status).phrase
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        return problem_response(status, _http_code(status), message)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        # Raw DB messages stay in the log
        return problem_response(HTTPStatus.CONFLICT, "conflict", "Resource conflict", exc_info=True)

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            "Service temporarily unavailable",
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Session-store outages land here too
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "internal_server_error",
            "Unexpected error",
            exc_info=True,
        )
