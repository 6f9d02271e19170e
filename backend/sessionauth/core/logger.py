"""JSON logging on stdout, correlated by request id.

The id comes from ``X-Request-ID`` (or ``X-Correlation-ID``) when the client
sends one, otherwise a UUID4 is minted. It is echoed back on every response
and stamped on every record logged while the request is handled.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# Attributes every LogRecord carries; anything else was passed through ``extra``
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def ensure_request_id() -> str:
    """Return the id of the current request, assigning one on first use.

    Outside a request a throwaway UUID is returned.
    """
    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        incoming = next(filter(None, (request.headers.get(h) for h in CORRELATION_HEADERS)), None)
        g.request_id = incoming or str(uuid4())
    return g.request_id


def log_event(logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """Emit a named lifecycle event such as ``auth.login``.

    :param logger: Module logger emitting the record.
    :param event: Dotted event name, used as the message.
    :param level: Logging level.
    :param fields: Extra JSON fields. Never pass token values here.
    """
    logger.log(level, event, extra={"event": event, **fields})


class JSONFormatter(logging.Formatter):
    """One JSON object per line; ``extra=`` fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and key not in payload
        )
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout through :class:`JSONFormatter`."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Assign, echo and then forget the request id around every request."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _assign_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response

    @app.teardown_request
    def _forget_request_id(exc: BaseException | None) -> None:
        # ``g`` outlives the request when an app context was already pushed
        g.pop("request_id", None)


__all__ = [
    "JSONFormatter",
    "REQUEST_ID_HEADER",
    "configure_logging",
    "ensure_request_id",
    "init_app",
    "log_event",
]
