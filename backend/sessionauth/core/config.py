"""Environment-driven settings, one class per deployment flavour.

``APP_ENV`` picks the class (``development``, ``testing`` or
``production``); individual values come from environment variables, with a
local ``.env`` file loaded first when present.
"""

from __future__ import annotations

import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read an on/off flag (``1``, ``true``, ``yes``, ``on``; any case)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def env_seconds(name: str, default: int) -> timedelta:
    """Read a token lifetime given in whole seconds.

    Parameters
    ----------
    name: str
        Environment variable holding the number of seconds.
    default: int
        Seconds used when the variable is unset or blank.

    Raises
    ------
    ValueError
        If the lifetime is not positive.
    """
    raw = os.getenv(name, "").strip()
    seconds = int(raw) if raw else default
    if seconds <= 0:
        raise ValueError(f"{name} must be a positive number of seconds.")
    return timedelta(seconds=seconds)


class BaseConfig:
    """Settings shared by every environment.

    Token lifetimes double as session-store TTLs: the refresh entry lives as
    long as ``JWT_REFRESH_TOKEN_EXPIRES``, and a revoked marker never outlives
    ``JWT_ACCESS_TOKEN_EXPIRES``. Leaving ``REDIS_URL`` unset means no client
    is built and one has to be installed in ``app.extensions`` by hand.
    """

    API_BASE_PREFIX = "/api"

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = env_seconds("JWT_ACCESS_TOKEN_EXPIRES_SECONDS", 30 * 60)
    JWT_REFRESH_TOKEN_EXPIRES = env_seconds("JWT_REFRESH_TOKEN_EXPIRES_SECONDS", 7 * 24 * 3600)

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO")

    REDIS_URL = os.getenv("REDIS_URL")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    PROPAGATE_EXCEPTIONS = False
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Local runs: debug on, Redis on localhost unless told otherwise."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


class TestingConfig(BaseConfig):
    """Test runs: in-memory SQLite, no Redis client (tests install a fake one)."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = False
    REDIS_URL = None
    JWT_SECRET_KEY = "testing-secret-key-with-enough-length-32b"
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


_BY_NAME: dict[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the class named by ``APP_ENV`` (``DevelopmentConfig`` if unset or unknown)."""
    name = os.getenv("APP_ENV", "development").strip().lower()
    return _BY_NAME.get(name, DevelopmentConfig)
