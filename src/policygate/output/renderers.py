"""Rich renderers for gateway Outcomes.

Success payloads are rendered by shape: user handles, restriction sets,
booleans, and void results each get their own layout.
"""

from __future__ import annotations

from collections.abc import Set
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from policygate.domain.handles import UserHandle
from policygate.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from policygate.gateway.result import Outcome


def render_result(outcome: Outcome) -> str:
    """Render an Outcome to a styled string via Rich."""
    console = create_console()

    if outcome.ok:
        _status_line(console, "OK", "pg.ok", outcome.op)
        _render_value(console, outcome.value)
    else:
        _render_error(console, outcome)

    return get_output(console).rstrip("\n")


def render_quiet(outcome: Outcome) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not outcome.ok:
        msg = outcome.error.message if outcome.error else "Unknown error"
        return f"ERROR: {outcome.op}: {msg}"
    if isinstance(outcome.value, UserHandle):
        return str(outcome.value.identifier)
    if isinstance(outcome.value, bool):
        return "true" if outcome.value else "false"
    if isinstance(outcome.value, (Set, list)):
        return "\n".join(sorted(outcome.value))
    return f"OK: {outcome.op}"


def _status_line(console: Console, label: str, style: str, op: str) -> None:
    console.print(Text.assemble((label, style), (f"  {op}", "pg.op")))


def _field(console: Console, key: str, value: str, style: str = "") -> None:
    console.print(Text.assemble((f"  {key}: ", "pg.key"), (value, style)))


def _render_value(console: Console, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, UserHandle):
        _field(console, "user", str(value), "pg.handle")
        return
    if isinstance(value, bool):
        _field(console, "enforced", "yes" if value else "no")
        return
    if isinstance(value, (Set, list)):
        if not value:
            console.print(Text("  (none)", style="pg.key"))
            return
        table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
        table.add_column("Restriction")
        for key in sorted(value):
            table.add_row(Text(key))
        console.print(table)
        return
    _field(console, "value", str(value))


def _render_error(console: Console, outcome: Outcome) -> None:
    _status_line(console, "ERROR", "pg.error", outcome.op)
    if outcome.error is None:
        return
    _field(console, "kind", outcome.error.kind.value, "pg.kind")
    _field(console, "message", outcome.error.message)
