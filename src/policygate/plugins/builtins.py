"""Built-in plugin registering the bundled backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

from policygate.backends.memory import InMemoryBackend
from policygate.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from policygate.gateway.backend import BackendFactory


class BuiltinBackendsPlugin:
    """Provides the ``memory`` backend."""

    @hookimpl
    def register_backends(self) -> dict[str, BackendFactory]:
        return {"memory": InMemoryBackend.from_settings}
