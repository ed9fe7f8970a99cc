"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
Capabilities: backend providers and operation observers.
INVARIANT: Plugin failures are warnings, never errors.
"""

from policygate.plugins.manager import PluginManager, UnknownBackendError

__all__ = ["PluginManager", "UnknownBackendError"]
