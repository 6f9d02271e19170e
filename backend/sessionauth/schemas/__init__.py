"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, LogoutSchema, ReissueSchema, SignUpSchema, TokenPairSchema

__all__ = [
    "LoginSchema",
    "LogoutSchema",
    "ReissueSchema",
    "SignUpSchema",
    "TokenPairSchema",
]
