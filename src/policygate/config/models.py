"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, policygate.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class GatewayConfig(BaseModel):
    """[gateway] section."""

    model_config = {"frozen": True}

    namespace: str = "DPM"
    backend: str = "memory"


class MemoryBackendConfig(BaseModel):
    """[memory] section — the simulated backend."""

    model_config = {"frozen": True}

    max_users: int = Field(default=4, ge=0)


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    local_dir: Path | None = None

