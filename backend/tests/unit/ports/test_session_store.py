"""Tests for the session-store key schema and the in-memory store."""

from __future__ import annotations

from datetime import timedelta

import pytest
from freezegun import freeze_time

from sessionauth.services._shared.ports import InMemorySessionStore, SessionKeys


class TestSessionKeys:
    def test_refresh_key_is_prefixed(self):
        assert SessionKeys.refresh("alice") == "RT:alice"

    def test_revoked_key_is_the_raw_token(self):
        token = "eyJhbGciOiJIUzI1NiJ9.eyJzdWIiOiJhbGljZSJ9.sig"
        assert SessionKeys.revoked(token) == token

    def test_refresh_key_requires_identity(self):
        with pytest.raises(ValueError):
            SessionKeys.refresh("")

    @pytest.mark.parametrize("token", ["", "RT:alice"])
    def test_revoked_key_cannot_collide_with_refresh_namespace(self, token):
        with pytest.raises(ValueError):
            SessionKeys.revoked(token)


class TestInMemorySessionStore:
    def test_entries_expire_after_ttl(self):
        store = InMemorySessionStore()
        with freeze_time("2026-01-01 00:00:00") as frozen:
            store.set("RT:alice", "token", timedelta(minutes=5))
            frozen.tick(timedelta(minutes=4))
            assert store.get("RT:alice") == "token"
            assert store.ttl("RT:alice") == timedelta(minutes=1)

            frozen.tick(timedelta(minutes=1))
            assert store.get("RT:alice") is None
            assert store.ttl("RT:alice") is None

    def test_set_replaces_value(self):
        store = InMemorySessionStore()
        store.set("RT:alice", "old", timedelta(days=1))
        store.set("RT:alice", "new", timedelta(days=1))

        assert store.get("RT:alice") == "new"
        assert store.ttl("RT:alice") is not None

    def test_delete_missing_key_is_noop(self):
        store = InMemorySessionStore()
        store.delete("RT:ghost")
        assert store.get("RT:ghost") is None
