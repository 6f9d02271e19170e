from __future__ import annotations

from typing import Protocol


class PasswordHasher(Protocol):
    """Port for one-way password hashing."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, password_hash: str, plaintext: str) -> bool: ...
