"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy gateway construction and centralized
outcome emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from policygate.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from policygate.config.settings import GatewaySettings
    from policygate.gateway.policy import PolicyGateway
    from policygate.gateway.result import Outcome


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The gateway (and the plugin discovery it needs) is created on first
    use so ``--help`` and ``--version`` never load a backend.
    """

    def __init__(self, settings: GatewaySettings, *, backend: str | None = None) -> None:
        self.settings = settings
        self.backend_name = backend or settings.gateway.backend
        self._gateway: PolicyGateway | None = None

        from policygate.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            namespace=settings.gateway.namespace,
            backend=self.backend_name,
        )

        if settings.verbose:
            from policygate.gateway.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def gateway(self) -> PolicyGateway:
        """The gateway instance (created lazily on first access)."""
        if self._gateway is None:
            from policygate.gateway.policy import PolicyGateway
            from policygate.plugins.manager import PluginManager, UnknownBackendError

            plugins = PluginManager()
            plugins.discover_and_load(local_dir=self.settings.plugins.local_dir)
            try:
                backend = plugins.create_backend(self.backend_name, self.settings)
            except UnknownBackendError as exc:
                raise click.ClickException(str(exc)) from exc
            self._gateway = PolicyGateway(
                backend,
                namespace=self.settings.gateway.namespace,
                plugin_manager=plugins,
            )
        return self._gateway

    def emit(self, outcome: Outcome, *, warnings: list[str] | None = None) -> None:
        """Format and output an Outcome with correct exit semantics.

        * Success: writes to stdout, returns normally. Warnings go to
          stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        if warnings:
            outcome = outcome.model_copy(update={"warnings": [*outcome.warnings, *warnings]})
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        output = format_result(outcome, settings=settings)
        if outcome.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in outcome.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
