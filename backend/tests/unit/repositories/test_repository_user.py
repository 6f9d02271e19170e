"""Tests for :class:`sessionauth.repositories.user.UserRepository`."""

from __future__ import annotations

from sessionauth.repositories import UserRepository
from tests.factories.user import UserFactory


def test_get_by_username(session):
    user = UserFactory(username="alice")
    repo = UserRepository(session=session)

    assert repo.get_by_username("alice") is user
    assert repo.get_by_username(" alice ") is user
    assert repo.get_by_username("bob") is None


def test_exists_by_username(session):
    UserFactory(username="alice")
    repo = UserRepository(session=session)

    assert repo.exists_by_username("alice") is True
    assert repo.exists_by_username("bob") is False


def test_add_flushes_primary_key(session):
    repo = UserRepository(session=session)
    user = UserFactory.build(username="carol")

    repo.add(user)

    assert user.id is not None
    assert repo.get_by_username("carol") is user


def test_repository_falls_back_to_scoped_session(session):
    UserFactory(username="alice")

    assert UserRepository().exists_by_username("alice") is True
