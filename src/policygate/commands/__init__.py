"""Subcommand modules for policygate.

Provides register_commands() which uses deferred imports to keep
``policygate --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    from policygate.commands.device import bugreport, lock, network_logging, wipe
    from policygate.commands.restrictions import restrictions
    from policygate.commands.users import users

    cli.add_command(users)
    cli.add_command(restrictions)

    cli.add_command(lock)
    cli.add_command(wipe)
    cli.add_command(bugreport)
    cli.add_command(network_logging)
