"""Integration tests for the ``flask users`` command group."""

from __future__ import annotations

from sessionauth.core.extensions import db as _db
from sessionauth.repositories import UserRepository
from tests.factories.user import UserFactory


def test_grant_admin_command(cli_runner, session) -> None:
    user = UserFactory(username="alice")

    result = cli_runner.invoke(args=["users", "grant-admin", "alice"])

    assert result.exit_code == 0, result.output
    assert "ROLE_ADMIN" in result.output
    session.refresh(user)
    assert UserRepository(session=session).get_by_username("alice").roles == [
        "ROLE_USER",
        "ROLE_ADMIN",
    ]


def test_grant_admin_unknown_user_fails(cli_runner) -> None:
    result = cli_runner.invoke(args=["users", "grant-admin", "ghost"])

    assert result.exit_code != 0
    assert "not found" in result.output


def test_init_db_creates_tables(cli_runner, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(_db, "create_all", lambda: calls.append("create_all"))

    result = cli_runner.invoke(args=["users", "init-db"])

    assert result.exit_code == 0, result.output
    assert calls == ["create_all"]
