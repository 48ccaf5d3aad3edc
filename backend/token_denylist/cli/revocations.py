"""Flask CLI commands for inspecting and maintaining the revocation list."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext
from marshmallow import ValidationError

from token_denylist.core.extensions import get_revocation_list
from token_denylist.schemas.revocation import ExpiryField

LOGGER = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Raise logging verbosity for the revocation service when requested."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("token_denylist.services.revocation").setLevel(level)
    LOGGER.setLevel(level)


@click.group("revocations")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for revocation commands.")
def revocations_cli(verbose: bool) -> None:
    """Manage the token revocation list."""
    _configure_logging(verbose)


@revocations_cli.command("revoke")
@click.argument("jti")
@click.argument("expires_at")
@with_appcontext
def revoke_command(jti: str, expires_at: str) -> None:
    """Revoke JTI until EXPIRES_AT (epoch seconds or ISO-8601)."""
    try:
        expiry = ExpiryField().deserialize(expires_at)
    except ValidationError as exc:
        raise click.BadParameter(" ".join(exc.messages), param_hint="EXPIRES_AT") from exc
    stored = get_revocation_list().revoke(jti, expiry)
    if stored:
        click.echo(f"revoked {jti} (expires {expiry})")
    else:
        click.echo(f"skipped {jti}: token already expired at {expiry}")


@revocations_cli.command("status")
@click.argument("jti")
@with_appcontext
def status_command(jti: str) -> None:
    """Print whether JTI is currently revoked."""
    revoked = get_revocation_list().is_revoked(jti)
    click.echo(f"{jti}: {'revoked' if revoked else 'not revoked'}")


@revocations_cli.command("unrevoke")
@click.argument("jti")
@with_appcontext
def unrevoke_command(jti: str) -> None:
    """Remove JTI from the revocation list."""
    removed = get_revocation_list().unrevoke(jti)
    click.echo(f"{jti}: {'removed' if removed else 'no entry'}")


@revocations_cli.command("clear")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def clear_command(yes: bool) -> None:
    """Remove every entry from the revocation list."""
    if not yes:
        click.confirm("This removes every revocation entry. Continue?", abort=True)
    get_revocation_list().clear()
    click.echo("revocation list cleared")


@revocations_cli.command("grace")
@with_appcontext
def grace_command() -> None:
    """Show the grace period for new revocations (set via REVOCATION_GRACE_PERIOD)."""
    click.echo(f"grace period: {get_revocation_list().grace_period}s")


@revocations_cli.command("purge-expired")
@with_appcontext
def purge_command() -> None:
    """Physically delete expired rows (SQL store only)."""
    store = get_revocation_list().store
    purge = getattr(store, "purge_expired", None)
    if purge is None:
        raise click.UsageError(
            f"{type(store).__name__} expires entries on its own; nothing to purge."
        )
    click.echo(f"purged {purge()} expired entries")
