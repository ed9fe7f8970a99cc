"""Plugin discovery, loading, and backend resolution.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus an optional local directory of single-file plugins.
Capabilities: backend providers (``register_backends``) and operation
observers (``post_operation``).
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pluggy

from policygate.plugins.hookspecs import PolicygateHookSpec

if TYPE_CHECKING:
    from policygate.config.settings import GatewaySettings
    from policygate.gateway.backend import AdministrativeBackend, BackendFactory

PROJECT_NAME = "policygate"
ENTRY_POINT_GROUP = "policygate.plugins"

logger = logging.getLogger(__name__)


class UnknownBackendError(LookupError):
    """Raised when no plugin provides the requested backend name."""


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(PolicygateHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Register built-ins, then discover entry-point and local plugins.

        Returns a list of loaded plugin names.
        """
        from policygate.plugins.builtins import BuiltinBackendsPlugin

        if self._pm.get_plugin("builtin-backends") is None:
            self.register_plugin(BuiltinBackendsPlugin(), name="builtin-backends")
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Backends
    # ------------------------------------------------------------------

    def backend_factories(self) -> dict[str, BackendFactory]:
        """Collect backend factories from every plugin.

        Plugins registered later win on name clashes. Malformed
        registrations are logged and skipped.
        """
        factories: dict[str, BackendFactory] = {}
        # pluggy calls the most recently registered plugin first.
        for plugin_map in reversed(self._pm.hook.register_backends()):
            if plugin_map is None:
                continue
            if not isinstance(plugin_map, dict):
                logger.warning("Ignoring non-dict backend registration: %r", plugin_map)
                continue
            for name, factory in plugin_map.items():
                if not callable(factory):
                    logger.warning("Ignoring non-callable backend factory %r", name)
                    continue
                factories[name] = factory
        return factories

    def create_backend(self, name: str, settings: GatewaySettings) -> AdministrativeBackend:
        """Instantiate the backend registered under *name*."""
        factories = self.backend_factories()
        factory = factories.get(name)
        if factory is None:
            available = ", ".join(sorted(factories)) or "none"
            msg = f"Unknown backend {name!r} (available: {available})"
            raise UnknownBackendError(msg)
        return factory(settings)

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module; classes carrying hookimpl-decorated methods are instantiated
        and registered. A broken local plugin is logged and skipped.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"policygate_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    logger.warning("Could not create module spec for %s", py_file)
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception:
                logger.warning("Failed to load local plugin %s", py_file, exc_info=True)
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=f"{module_name}.{obj.__name__}")
                except Exception:
                    logger.warning(
                        "Failed to instantiate plugin class %s from %s",
                        obj.__name__,
                        py_file,
                        exc_info=True,
                    )

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly; hook
        dispatch against a class leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any ``@hookimpl`` methods.

        Pluggy's ``HookimplMarker("policygate")`` sets a ``policygate_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "policygate_impl", None):
                return True
        return False
