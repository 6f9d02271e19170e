"""Repository package exposing persistence-layer access for the user aggregate."""

from __future__ import annotations

from sessionauth.repositories.base import BaseRepository
from sessionauth.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
