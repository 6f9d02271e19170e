"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`sessionauth.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``sessionauth.services._shared.base``)
    * :class:`BaseService`

- Auth service (from ``sessionauth.services.auth``)
    * :class:`AuthService`
    * :class:`UserCredentialsAuthenticator`
    * DTOs: :class:`SignUpIn`, :class:`LoginIn`, :class:`ReissueIn`,
      :class:`LogoutIn`, :class:`TokenPairOut`
"""

from __future__ import annotations

from ._shared.base import BaseService
from .auth.authenticator import UserCredentialsAuthenticator
from .auth.dto import LoginIn, LogoutIn, ReissueIn, SignUpIn, TokenPairOut
from .auth.service import AuthService

__all__ = [
    # Base
    "BaseService",
    # Auth
    "AuthService",
    "UserCredentialsAuthenticator",
    "SignUpIn",
    "LoginIn",
    "ReissueIn",
    "LogoutIn",
    "TokenPairOut",
]
