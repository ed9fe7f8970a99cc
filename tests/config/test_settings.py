"""Tests for GatewaySettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from policygate.config.settings import GatewaySettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("POLICYGATE_CONFIG", raising=False)


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = GatewaySettings.from_cli(start=tmp_path)
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.gateway.namespace == "DPM"
        assert settings.gateway.backend == "memory"
        assert settings.memory.max_users == 4
        assert settings.plugins.local_dir is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = GatewaySettings.from_cli(start=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "policygate.toml").write_text(
            '[gateway]\nnamespace = "EMM"\nbackend = "fleet"\n[memory]\nmax_users = 8\n'
        )
        settings = GatewaySettings.from_cli(start=tmp_path)
        assert settings.gateway.namespace == "EMM"
        assert settings.gateway.backend == "fleet"
        assert settings.memory.max_users == 8
        assert settings.config_path == (tmp_path / "policygate.toml").resolve()

    def test_sparse_override(self, tmp_path: Path) -> None:
        (tmp_path / "policygate.toml").write_text("[memory]\nmax_users = 1\n")
        settings = GatewaySettings.from_cli(start=tmp_path)
        assert settings.memory.max_users == 1
        assert settings.gateway.namespace == "DPM"

    def test_walks_up_from_subdirectory(self, tmp_path: Path) -> None:
        (tmp_path / "policygate.toml").write_text('[gateway]\nnamespace = "UP"\n')
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        assert GatewaySettings.from_cli(start=deep).gateway.namespace == "UP"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "gw.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[gateway]\nnamespace = "CUSTOM"\n')
        settings = GatewaySettings.from_cli(config_path=str(custom))
        assert settings.gateway.namespace == "CUSTOM"
        assert settings.config_path == custom

    def test_invalid_toml_is_a_click_error(self, tmp_path: Path) -> None:
        (tmp_path / "policygate.toml").write_text("[gateway\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            GatewaySettings.from_cli(start=tmp_path)


class TestPriority:
    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "policygate.toml").write_text("quiet = true\n")
        settings = GatewaySettings.from_cli(start=tmp_path, quiet=False)
        assert settings.quiet is False

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POLICYGATE_QUIET", "true")
        assert GatewaySettings.from_cli(start=tmp_path).quiet is True

    def test_nested_env_var_beats_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "policygate.toml").write_text('[gateway]\nnamespace = "TOML"\n')
        monkeypatch.setenv("POLICYGATE_GATEWAY__NAMESPACE", "ENV")
        assert GatewaySettings.from_cli(start=tmp_path).gateway.namespace == "ENV"
