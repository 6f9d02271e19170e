"""User and role-grant models for the authentication backend."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from sessionauth.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class Authority(str, Enum):
    """Role names granted to users."""

    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


class UserRole(PKMixin, db.Model):
    """
    One role grant held by a user.

    Grants are rows, not a set: granting the same role twice stores two rows.
    """

    __tablename__ = "user_roles"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(String(50), nullable=False)


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Application user; the only subject type the backend authenticates.

    Fields
    ------
    username : str
        Login identity. Unique; also the key suffix of the refresh session
        (``RT:<username>``).
    password_hash : str
        One-way hash produced by the password hasher. Never the plaintext.
    email : str | None
        Contact email (normalized lowercase/trimmed).
    phone : str | None
        Contact phone number.
    role_grants : list[UserRole]
        Granted roles in grant order. See :attr:`roles`.
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(254), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    role_grants: Mapped[list[UserRole]] = relationship(
        UserRole,
        cascade="all, delete-orphan",
        order_by=UserRole.id,
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_username", "username"),
    )

    # -------------------- Roles --------------------
    @property
    def roles(self) -> list[str]:
        """Role names in grant order (duplicates preserved)."""
        return [grant.role for grant in self.role_grants]

    def add_role(self, role: Authority | str) -> None:
        """
        Append a role grant.

        :param role: Role to grant. No deduplication is performed.
        :type role: Authority | str
        """
        name = role.value if isinstance(role, Authority) else str(role)
        self.role_grants.append(UserRole(role=name))

    # -------------------- Validators --------------------
    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Trim and require a username.

        :raises ValueError: If username is missing or only whitespace.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()

    @validates("email")
    def _normalize_email(self, key: str, value: str | None) -> str | None:
        """
        Normalize an optional email.

        :raises ValueError: If a non-empty email is malformed.
        """
        if value is None or not value.strip():
            return None
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v
