"""CORS policy for the authentication API."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from sessionauth.core.logger import REQUEST_ID_HEADER

# Browsers must be allowed to send bearer tokens and read the correlation id
ALLOWED_HEADERS = ("Authorization", "Content-Type", REQUEST_ID_HEADER)
EXPOSED_HEADERS = (REQUEST_ID_HEADER,)


def parse_origins(raw: str | None) -> list[str]:
    """Split a comma-separated ``CORS_ORIGINS`` value into clean entries."""
    return [o.strip() for o in (raw or "").split(",") if o.strip()]


def init_app(app: Flask) -> None:
    """Configure CORS for ``/api/*`` from ``CORS_ORIGINS``.

    A blank value or ``"*"`` allows any origin without credentials; an explicit
    list enables credentialed requests from those origins only.
    """
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        supports_credentials=not wildcard,
        allow_headers=list(ALLOWED_HEADERS),
        expose_headers=list(EXPOSED_HEADERS),
        methods=["GET", "POST", "OPTIONS"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
