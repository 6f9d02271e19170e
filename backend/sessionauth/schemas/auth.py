"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class SignUpSchema(Schema):
    """Input payload for account creation."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))
    phone = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=32))
    email = fields.Email(load_default=None, allow_none=True, validate=validate.Length(max=254))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    username = fields.String(required=True, validate=validate.Length(min=1, max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class ReissueSchema(Schema):
    """Input payload for exchanging a refresh token."""

    access_token = fields.String(
        required=True, data_key="accessToken", validate=validate.Length(min=1)
    )
    refresh_token = fields.String(
        required=True, data_key="refreshToken", validate=validate.Length(min=1)
    )


class LogoutSchema(Schema):
    """Input payload for closing a session."""

    access_token = fields.String(
        required=True, data_key="accessToken", validate=validate.Length(min=1)
    )


class TokenPairSchema(Schema):
    """Response payload carrying a freshly issued token pair."""

    grant_type = fields.String(required=True, data_key="grantType")
    access_token = fields.String(required=True, data_key="accessToken")
    refresh_token = fields.String(required=True, data_key="refreshToken")
    refresh_token_expires_in = fields.Integer(required=True, data_key="refreshTokenExpiresIn")
