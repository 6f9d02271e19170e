"""User repository: lookups by login identity."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from sessionauth.models.user import User
from sessionauth.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never touches tokens or the session store; only DB-level user lookup.
    """

    model = User

    def _default_eagerload(self, stmt):
        """Load role grants with the user so ``User.roles`` never lazy-loads."""
        return stmt.options(selectinload(User.role_grants))

    def get_by_username(self, username: str) -> User | None:
        """Fetch a user by exact username.

        :param username: Login identity (surrounding whitespace ignored).
        :type username: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = self._default_eagerload(select(User).where(User.username == username.strip()))
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_username(self, username: str) -> bool:
        """Return ``True`` when a user with the provided username exists."""
        stmt = select(User.id).where(User.username == username.strip())
        return bool(self.session.execute(stmt).first())
