"""Tests for PluginManager — registration, hook relay, and backend resolution."""

from __future__ import annotations

import pytest

from policygate.backends.memory import InMemoryBackend
from policygate.config.settings import GatewaySettings
from policygate.plugins.hookspecs import hookimpl
from policygate.plugins.manager import PluginManager, UnknownBackendError


class _FakeBackend(InMemoryBackend):
    pass


class _FleetPlugin:
    @hookimpl
    def register_backends(self):
        return {"fleet": lambda settings: _FakeBackend(max_users=settings.memory.max_users)}


class _OverridingPlugin:
    @hookimpl
    def register_backends(self):
        return {"memory": lambda settings: _FakeBackend()}


class _MalformedPlugin:
    @hookimpl
    def register_backends(self):
        return {"broken": "not-callable"}


class _ListPlugin:
    @hookimpl
    def register_backends(self):
        return ["memory"]


@pytest.fixture
def settings() -> GatewaySettings:
    return GatewaySettings(memory={"max_users": 3})


class TestPluginManager:
    def test_hook_relay_accessible(self):
        pm = PluginManager()
        assert hasattr(pm.hook, "register_backends")
        assert hasattr(pm.hook, "post_operation")

    def test_register_plugin(self):
        pm = PluginManager()
        pm.register_plugin(_FleetPlugin(), name="fleet")
        assert "fleet" in pm.list_plugin_names()

    def test_register_plugin_default_name(self):
        pm = PluginManager()
        pm.register_plugin(_FleetPlugin())
        assert "_FleetPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self):
        pm = PluginManager()
        plugin = _FleetPlugin()
        pm.register_plugin(plugin, name="fleet")
        pm.unregister(plugin)
        assert "fleet" not in pm.list_plugin_names()

    def test_is_loaded_false_before_discover(self):
        assert PluginManager().is_loaded is False

    def test_discover_registers_builtins(self):
        pm = PluginManager()
        names = pm.discover_and_load()
        assert pm.is_loaded is True
        assert "builtin-backends" in names

    def test_discover_twice_keeps_one_builtin(self):
        pm = PluginManager()
        pm.discover_and_load()
        names = pm.discover_and_load()
        assert names.count("builtin-backends") == 1


class TestBackendResolution:
    def test_memory_backend_from_builtins(self, settings):
        pm = PluginManager()
        pm.discover_and_load()
        backend = pm.create_backend("memory", settings)
        assert isinstance(backend, InMemoryBackend)

    def test_plugin_backend(self, settings):
        pm = PluginManager()
        pm.discover_and_load()
        pm.register_plugin(_FleetPlugin())
        assert sorted(pm.backend_factories()) == ["fleet", "memory"]
        assert isinstance(pm.create_backend("fleet", settings), _FakeBackend)

    def test_later_plugin_overrides_builtin(self, settings):
        pm = PluginManager()
        pm.discover_and_load()
        pm.register_plugin(_OverridingPlugin())
        assert isinstance(pm.create_backend("memory", settings), _FakeBackend)

    def test_malformed_registrations_skipped(self, settings):
        pm = PluginManager()
        pm.discover_and_load()
        pm.register_plugin(_MalformedPlugin())
        pm.register_plugin(_ListPlugin())
        assert sorted(pm.backend_factories()) == ["memory"]

    def test_unknown_backend(self, settings):
        pm = PluginManager()
        pm.discover_and_load()
        with pytest.raises(UnknownBackendError, match="available: memory"):
            pm.create_backend("fleet", settings)

    def test_unknown_backend_is_lookup_error(self, settings):
        with pytest.raises(LookupError, match="available: none"):
            PluginManager().create_backend("memory", settings)
