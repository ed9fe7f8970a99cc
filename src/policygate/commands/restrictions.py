"""Command group: user restriction flags."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from policygate.commands._base import PgGroup
from policygate.domain.restrictions import is_known_restriction
from policygate.gateway.result import Outcome

if TYPE_CHECKING:
    from policygate.commands._context import AppContext


def _unknown_key_warnings(key: str) -> list[str]:
    if is_known_restriction(key):
        return []
    return [f"'{key}' is not a well-known restriction key"]


@click.group(cls=PgGroup)
def restrictions() -> None:
    """Query and toggle user restrictions."""


@restrictions.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List enforced restriction keys."""
    keys = app.gateway.get_user_restrictions()
    app.emit(Outcome.success("get_user_restrictions", sorted(keys)))


@restrictions.command(
    "set",
    examples="""\
  policygate restrictions set no_install_apps --on
  policygate restrictions set no_install_apps --off""",
)
@click.argument("key")
@click.option("--on/--off", "enabled", required=True, help="Enforce or lift the restriction.")
@click.pass_obj
def set_cmd(app: AppContext, key: str, enabled: bool) -> None:
    """Enforce or lift a restriction."""
    app.emit(app.gateway.set_user_restriction(key, enabled), warnings=_unknown_key_warnings(key))


@restrictions.command("has")
@click.argument("key")
@click.pass_obj
def has_cmd(app: AppContext, key: str) -> None:
    """Report whether a restriction is enforced."""
    enforced = app.gateway.has_user_restriction(key)
    app.emit(
        Outcome.success("has_user_restriction", enforced),
        warnings=_unknown_key_warnings(key),
    )
