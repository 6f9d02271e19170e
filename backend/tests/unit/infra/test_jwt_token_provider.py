"""Unit tests for the flask-jwt-extended token provider (needs an app context)."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token, create_refresh_token, decode_token

from sessionauth.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from sessionauth.services._shared.dto import VerifiedIdentity
from sessionauth.services._shared.errors import InvalidTokenError
from sessionauth.services._shared.ports import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE


@pytest.fixture
def provider(app):
    return JWTTokenProvider()


@pytest.fixture
def identity():
    return VerifiedIdentity(name="alice", roles=("ROLE_USER", "ROLE_ADMIN"))


def test_issue_uses_configured_lifetimes(app, provider, identity):
    info = provider.issue(identity)

    assert info.grant_type == "Bearer"
    assert info.access_token_ttl == app.config["JWT_ACCESS_TOKEN_EXPIRES"]
    assert info.refresh_token_ttl == app.config["JWT_REFRESH_TOKEN_EXPIRES"]

    access = decode_token(info.access_token)
    refresh = decode_token(info.refresh_token)
    assert access["sub"] == "alice"
    assert access["type"] == ACCESS_TOKEN_TYPE
    assert access["roles"] == ["ROLE_USER", "ROLE_ADMIN"]
    assert refresh["type"] == REFRESH_TOKEN_TYPE


def test_issue_twice_yields_distinct_refresh_tokens(provider, identity):
    first = provider.issue(identity)
    second = provider.issue(identity)

    assert first.refresh_token != second.refresh_token


def test_validate_checks_expected_type(provider, identity):
    info = provider.issue(identity)

    assert provider.validate(info.access_token) is True
    assert provider.validate(info.access_token, expected_type=ACCESS_TOKEN_TYPE) is True
    assert provider.validate(info.access_token, expected_type=REFRESH_TOKEN_TYPE) is False
    assert provider.validate(info.refresh_token, expected_type=REFRESH_TOKEN_TYPE) is True


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_validate_rejects_malformed_tokens(provider, token):
    assert provider.validate(token) is False


def test_validate_rejects_expired_token(provider):
    expired = create_refresh_token(identity="alice", expires_delta=timedelta(seconds=-1))

    assert provider.validate(expired, expected_type=REFRESH_TOKEN_TYPE) is False


def test_validate_rejects_foreign_signature(app, provider, identity):
    token = provider.issue(identity).access_token
    original = app.config["JWT_SECRET_KEY"]
    app.config["JWT_SECRET_KEY"] = "another-secret-key-that-is-long-enough-32b"
    try:
        assert provider.validate(token) is False
    finally:
        app.config["JWT_SECRET_KEY"] = original


def test_identity_of_accepts_expired_access_token(provider):
    expired = create_access_token(
        identity="alice",
        additional_claims={"roles": ["ROLE_USER"]},
        expires_delta=timedelta(seconds=-1),
    )

    identity = provider.identity_of(expired)
    assert identity.name == "alice"
    assert identity.roles == ("ROLE_USER",)


def test_identity_of_rejects_malformed_token(provider):
    with pytest.raises(InvalidTokenError):
        provider.identity_of("not-a-jwt")


def test_identity_of_checks_expected_type(provider, identity):
    info = provider.issue(identity)

    assert provider.identity_of(info.access_token, expected_type=ACCESS_TOKEN_TYPE).name == "alice"
    with pytest.raises(InvalidTokenError):
        provider.identity_of(info.refresh_token, expected_type=ACCESS_TOKEN_TYPE)


def test_remaining_ttl_counts_down_and_floors_at_zero(app, provider, identity):
    info = provider.issue(identity)
    left = provider.remaining_ttl(info.access_token)
    assert timedelta(0) < left <= app.config["JWT_ACCESS_TOKEN_EXPIRES"]

    expired = create_access_token(identity="alice", expires_delta=timedelta(seconds=-5))
    assert provider.remaining_ttl(expired) == timedelta(0)
