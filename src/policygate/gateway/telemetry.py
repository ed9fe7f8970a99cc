"""Call timing for gateway operations — Span, @traced, trace_span.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled via --verbose, each operation builds a span tree with one
child per backend primitive and injects it into Outcome.meta.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from policygate.gateway.errors import describe_result
from policygate.gateway.result import Outcome

log = structlog.get_logger("policygate.telemetry")

_enabled: ContextVar[bool] = ContextVar("_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """Timing span for one operation or backend primitive."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 2),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@contextmanager
def trace_span(name: str, *args: Any) -> Generator[Span | None]:
    """Create a child span under the current span.

    *name* may be a call template; *args* are substituted only once a span
    is actually recorded. Yields None when telemetry is disabled or no
    operation span is active.
    """
    if not _enabled.get():
        yield None
        return

    parent = _current_span.get()
    if parent is None:
        yield None
        return

    if args:
        name = name.format(*(describe_result(arg) for arg in args))
    child = Span(name=name, parent=parent)
    parent.children.append(child)

    token = _current_span.set(child)
    try:
        yield child
    finally:
        child.end()
        _current_span.reset(token)


def _inject_meta(outcome: Outcome, span: Span) -> Outcome:
    merged = {**(outcome.meta or {}), "telemetry": span.to_dict()}
    return outcome.model_copy(update={"meta": merged})


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a gateway operation and attach the span to its Outcome."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__name__)
        token = _current_span.set(span)
        try:
            result = func(*args, **kwargs)
        except Exception:
            span.end()
            _current_span.reset(token)
            log.debug("span.complete", span_name=span.name, ok=False)
            raise

        span.end()
        _current_span.reset(token)

        ok = True
        if isinstance(result, Outcome):
            ok = result.ok
            result = _inject_meta(result, span)  # type: ignore[assignment]
        log.debug(
            "span.complete",
            span_name=span.name,
            duration_ms=round(span.duration_ms, 2),
            ok=ok,
            children=len(span.children),
        )
        return result

    return wrapper


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def get_current_span() -> Span | None:
    """Get the active span, for manual annotation."""
    if not _enabled.get():
        return None
    return _current_span.get()
