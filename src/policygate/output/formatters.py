"""Output mode selection for Outcomes.

Human mode delegates to the Rich renderers; ``--json`` serializes the
Outcome model; ``--quiet`` prints the bare payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from policygate.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from policygate.gateway.result import Outcome


@dataclass(frozen=True)
class OutputSettings:
    json_output: bool = False
    quiet: bool = False


def format_result(outcome: Outcome, *, settings: OutputSettings | None = None) -> str:
    """Format an Outcome for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return outcome.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(outcome)
    return render_result(outcome)
