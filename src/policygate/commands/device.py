"""Commands: device-wide actions (lock, wipe, bug report, network logging)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from policygate.commands._base import PgCommand
from policygate.domain.flags import WipeFlag

if TYPE_CHECKING:
    from policygate.commands._context import AppContext


@click.command(cls=PgCommand)
@click.pass_obj
def lock(app: AppContext) -> None:
    """Lock the device now."""
    app.emit(app.gateway.lock_now())


@click.command(
    cls=PgCommand,
    examples="""\
  policygate wipe --yes
  policygate wipe --external-storage --reset-protection --yes""",
)
@click.option("--external-storage", is_flag=True, help="Also wipe external storage.")
@click.option("--reset-protection", is_flag=True, help="Also wipe factory reset protection data.")
@click.option("--euicc", is_flag=True, help="Also wipe eUICC data.")
@click.option("--silently", is_flag=True, help="Do not show a reason to the user.")
@click.confirmation_option(prompt="This factory-resets the device. Continue?")
@click.pass_obj
def wipe(
    app: AppContext,
    external_storage: bool,
    reset_protection: bool,
    euicc: bool,
    silently: bool,
) -> None:
    """Factory-reset the device."""
    flags = WipeFlag.NONE
    if external_storage:
        flags |= WipeFlag.WIPE_EXTERNAL_STORAGE
    if reset_protection:
        flags |= WipeFlag.WIPE_RESET_PROTECTION_DATA
    if euicc:
        flags |= WipeFlag.WIPE_EUICC
    if silently:
        flags |= WipeFlag.WIPE_SILENTLY
    app.emit(app.gateway.wipe_data(flags))


@click.command(cls=PgCommand)
@click.pass_obj
def bugreport(app: AppContext) -> None:
    """Request a bug report capture."""
    app.emit(app.gateway.request_bugreport())


@click.command("network-logging", cls=PgCommand)
@click.option("--on/--off", "enabled", required=True, help="Enable or disable network logging.")
@click.pass_obj
def network_logging(app: AppContext, enabled: bool) -> None:
    """Enable or disable network logging."""
    app.emit(app.gateway.set_network_logging(enabled))
