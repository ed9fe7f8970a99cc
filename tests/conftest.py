"""Shared pytest fixtures and test helpers for policygate tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from policygate.backends.memory import InMemoryBackend
from policygate.gateway.errors import GatewayError
from policygate.gateway.policy import PolicyGateway
from policygate.gateway.telemetry import _current_span, disable_telemetry


class Recorder:
    """Continuation pair that records every call it receives."""

    def __init__(self) -> None:
        self.successes: list[Any] = []
        self.errors: list[Exception | GatewayError] = []

    def on_success(self, value: Any) -> None:
        self.successes.append(value)

    def on_error(self, error: Exception | GatewayError) -> None:
        self.errors.append(error)

    @property
    def calls(self) -> int:
        return len(self.successes) + len(self.errors)

    @property
    def pair(self) -> dict[str, Any]:
        """Keyword arguments for a gateway action operation."""
        return {"on_success": self.on_success, "on_error": self.on_error}

    def only_success(self) -> Any:
        assert self.errors == [], self.errors
        assert len(self.successes) == 1, self.successes
        return self.successes[0]

    def only_error(self) -> Any:
        assert self.successes == [], self.successes
        assert len(self.errors) == 1, self.errors
        return self.errors[0]


@pytest.fixture
def backend() -> InMemoryBackend:
    """Simulated device with room for two secondary users."""
    return InMemoryBackend(max_users=2)


@pytest.fixture
def gateway(backend: InMemoryBackend) -> PolicyGateway:
    return PolicyGateway(backend)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory with no config overrides in the environment.

    Use via ``@pytest.mark.usefixtures("_isolated_config")``.
    """
    for name in ("POLICYGATE_CONFIG", "POLICYGATE_GATEWAY__BACKEND", "POLICYGATE_QUIET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Telemetry is process-wide context; never leak it between tests."""
    yield
    disable_telemetry()
    _current_span.set(None)
