"""HTTP API: versioned blueprints mounted under ``API_BASE_PREFIX``."""

from __future__ import annotations

from flask import Flask


def _join(*segments: str) -> str:
    return "/" + "/".join(s.strip("/") for s in segments if s.strip("/"))


def init_app(app: Flask) -> None:
    """Mount every v1 blueprint at ``<API_BASE_PREFIX>/v1/<relative prefix>``."""

    from sessionauth.api.v1 import API_VERSION, REGISTRY

    version_root = _join(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION)
    for blueprint, relative in REGISTRY:
        app.register_blueprint(blueprint, url_prefix=_join(version_root, relative))


__all__ = ["init_app"]
