from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from sessionauth.services._shared.ports import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Password hasher backed by :mod:`werkzeug.security` (salted, one-way)."""

    def hash(self, plaintext: str) -> str:
        return generate_password_hash(plaintext)

    def verify(self, password_hash: str, plaintext: str) -> bool:
        if not password_hash:
            return False
        return check_password_hash(password_hash, plaintext)
