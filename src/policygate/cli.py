"""Root CLI group for policygate with global flags and command registration."""

from __future__ import annotations

import click

from policygate import __version__
from policygate.commands import register_commands
from policygate.commands._context import AppContext
from policygate.config.settings import GatewaySettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="policygate")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and call timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("-b", "--backend", default=None, help="Backend name (default from config).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    backend: str | None,
) -> None:
    """policygate — drive device administration through a classified gateway.

    The default memory backend simulates a fresh device on every
    invocation; no state carries over between commands.
    """
    settings = GatewaySettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings, backend=backend)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
