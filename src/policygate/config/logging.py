"""structlog setup for policygate.

Every record, whether from structlog (``gateway.call``, ``span.complete``)
or from stdlib loggers (plugin discovery, best-effort discards), leaves
through one stderr handler and carries:

- ``component``: the policygate layer that emitted it (``gateway``,
  ``telemetry``, ``plugins``, ``backends``, ...)
- ``namespace`` and ``backend``: the gateway the CLI invocation drives

Human mode uses structlog's console renderer; ``--log-json`` emits one JSON
object per line.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from policygate.gateway.errors import DEFAULT_NAMESPACE

ROOT_LOGGER = "policygate"

# Short component names for loggers that don't follow the package layout.
_COMPONENT_ALIASES = {"policygate.telemetry": "telemetry"}


def tag_component(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Add ``component`` from the emitting logger's name."""
    name = event_dict.get("logger", "")
    if name in _COMPONENT_ALIASES:
        event_dict["component"] = _COMPONENT_ALIASES[name]
    elif name.startswith(f"{ROOT_LOGGER}."):
        event_dict["component"] = name.split(".")[1]
    return event_dict


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        tag_component,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    namespace: str = DEFAULT_NAMESPACE,
    backend: str | None = None,
) -> None:
    """Route structlog and stdlib records through a single stderr handler.

    Safe to call repeatedly; the previous handler is replaced.

    Args:
        verbose: Let policygate DEBUG records through (gateway calls,
            spans, swallowed best-effort failures). Otherwise WARNING+.
        log_json: JSON lines instead of console output.
        namespace: Diagnostic namespace bound onto every record.
        backend: Backend name bound onto every record, when known.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)

    structlog.contextvars.clear_contextvars()
    context: dict[str, Any] = {"namespace": namespace}
    if backend is not None:
        context["backend"] = backend
    structlog.contextvars.bind_contextvars(**context)
