"""Tests for the service-layer error helpers."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from sessionauth.services._shared.errors import violates


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


@pytest.mark.parametrize(
    "message",
    [
        "UNIQUE constraint failed: users.username",
        'duplicate key value violates unique constraint "uq_users_username"',
    ],
)
def test_violates_matches_constraint_or_column(message):
    assert violates(_integrity(message), "uq_users_username", "users.username") is True


def test_violates_ignores_other_constraints():
    exc = _integrity("NOT NULL constraint failed: users.password_hash")

    assert violates(exc, "uq_users_username", "users.username") is False
