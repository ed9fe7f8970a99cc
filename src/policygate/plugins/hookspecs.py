"""Pluggy hook specifications for policygate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from policygate.gateway.backend import BackendFactory

hookspec = pluggy.HookspecMarker("policygate")
hookimpl = pluggy.HookimplMarker("policygate")


class PolicygateHookSpec:
    """Hook specifications for the policygate plugin system."""

    @hookspec
    def register_backends(self) -> dict[str, BackendFactory] | None:
        """Return backend name -> factory mappings.

        A factory receives the active ``GatewaySettings`` and returns an
        ``AdministrativeBackend``.
        """

    @hookspec
    def post_operation(
        self,
        op: str,
        ok: bool,
        error: dict[str, Any] | None,
    ) -> None:
        """Called after every gateway action operation completes."""
