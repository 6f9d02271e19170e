"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, g, request
from flask_jwt_extended import get_jwt_identity

from sessionauth.api.deps import (
    build_auth_service,
    json_response,
    require_auth,
    timing,
    translate_errors,
)
from sessionauth.schemas import (
    LoginSchema,
    LogoutSchema,
    ReissueSchema,
    SignUpSchema,
    TokenPairSchema,
)
from sessionauth.services import LoginIn, LogoutIn, ReissueIn, SignUpIn

bp = Blueprint("auth", __name__, url_prefix="/auth")

sign_up_schema = SignUpSchema()
login_schema = LoginSchema()
reissue_schema = ReissueSchema()
logout_schema = LogoutSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/sign-up")
@timing
@translate_errors
def sign_up():
    """Create an account with the default role."""

    data = sign_up_schema.load(request.get_json(silent=True) or {})
    build_auth_service().sign_up(SignUpIn(**data))
    return json_response({"data": None, "message": "Sign-up succeeded."}, status=201)


@bp.post("/login")
@timing
@translate_errors
def login():
    """Authenticate credentials and issue a token pair."""

    data = login_schema.load(request.get_json(silent=True) or {})
    pair = build_auth_service().login(LoginIn(**data))
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/reissue")
@timing
@translate_errors
def reissue():
    """Exchange the current refresh token for a new pair."""

    data = reissue_schema.load(request.get_json(silent=True) or {})
    pair = build_auth_service().reissue(ReissueIn(**data))
    return json_response({"data": token_pair_schema.dump(pair)})


@bp.post("/logout")
@timing
@translate_errors
def logout():
    """Close the session and blacklist the presented access token."""

    data = logout_schema.load(request.get_json(silent=True) or {})
    build_auth_service().logout(LogoutIn(**data))
    return json_response({"message": "Logout succeeded."})


@bp.post("/authority")
@require_auth
@timing
@translate_errors
def authority():
    """Grant ``ROLE_ADMIN`` to the authenticated caller."""

    g.auth_service.grant_admin_role(get_jwt_identity())
    return json_response({"message": "Admin role granted."})
