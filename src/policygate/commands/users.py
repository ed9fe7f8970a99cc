"""Command group: managed user lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from policygate.commands._base import PgGroup
from policygate.domain.flags import CreateUserFlag
from policygate.domain.handles import UserHandle

if TYPE_CHECKING:
    from policygate.commands._context import AppContext


@click.group(cls=PgGroup)
def users() -> None:
    """Create and remove managed users."""


@users.command(
    examples="""\
  policygate users create --name "Kiosk"
  policygate users create --ephemeral --skip-setup-wizard""",
)
@click.option("--name", default=None, help="Display name of the new user.")
@click.option("--skip-setup-wizard", is_flag=True, help="Skip the setup wizard.")
@click.option("--ephemeral", is_flag=True, help="Remove the user when it stops.")
@click.option("--leave-system-apps", is_flag=True, help="Keep all system apps enabled.")
@click.pass_obj
def create(
    app: AppContext,
    name: str | None,
    skip_setup_wizard: bool,
    ephemeral: bool,
    leave_system_apps: bool,
) -> None:
    """Create and manage a new user."""
    flags = CreateUserFlag.NONE
    if skip_setup_wizard:
        flags |= CreateUserFlag.SKIP_SETUP_WIZARD
    if ephemeral:
        flags |= CreateUserFlag.MAKE_USER_EPHEMERAL
    if leave_system_apps:
        flags |= CreateUserFlag.LEAVE_ALL_SYSTEM_APPS_ENABLED
    app.emit(app.gateway.create_and_manage_user(name, flags))


@users.command(
    examples="""\
  policygate users remove 10
  policygate users remove --serial 12""",
)
@click.argument("handle", type=int, required=False)
@click.option("--serial", type=int, default=None, help="Remove by serial number instead.")
@click.pass_obj
def remove(app: AppContext, handle: int | None, serial: int | None) -> None:
    """Remove a user by handle id or serial number."""
    if (handle is None) == (serial is None):
        raise click.UsageError("Pass exactly one of HANDLE or --serial.")
    if serial is not None:
        app.emit(app.gateway.remove_user_by_serial_number(serial))
    else:
        assert handle is not None
        app.emit(app.gateway.remove_user(UserHandle(identifier=handle)))
