"""Flask CLI commands for schema bootstrap and user administration."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from sessionauth.api.deps import build_auth_service
from sessionauth.core.extensions import db
from sessionauth.services._shared.errors import NotFoundError

LOGGER = logging.getLogger(__name__)


@click.group("users")
def users_cli() -> None:
    """User and schema administration commands."""


@users_cli.command("init-db")
@with_appcontext
def init_db() -> None:
    """Create every table known to the model metadata (idempotent)."""
    db.create_all()
    LOGGER.info("users.init_db")
    click.echo("Database tables created.")


@users_cli.command("grant-admin")
@click.argument("username")
@with_appcontext
def grant_admin(username: str) -> None:
    """Append ROLE_ADMIN to USERNAME's roles."""
    service = build_auth_service()
    try:
        service.grant_admin_role(username)
    except NotFoundError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Granted ROLE_ADMIN to {username}.")
