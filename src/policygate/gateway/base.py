"""BaseGateway — uniform translation of backend outcomes.

Every action operation funnels through :meth:`BaseGateway._call`:

1. invoke the backend primitive;
2. if it raises, the outcome is a backend_fault carrying that exception;
3. if it returns a value the operation treats as invalid, the outcome is a
   synthesized invalid_result / failed_operation;
4. otherwise the outcome is a success with the translated payload.

The outcome is fully built before any continuation runs, so a continuation
that raises can never trigger the other one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from policygate.gateway.errors import DEFAULT_NAMESPACE, GatewayError, backend_fault
from policygate.gateway.result import OnError, OnSuccess, Outcome
from policygate.gateway.telemetry import trace_span

if TYPE_CHECKING:
    from policygate.gateway.backend import AdministrativeBackend
    from policygate.plugins.manager import PluginManager

logger = logging.getLogger(__name__)
log = structlog.get_logger(__name__)

# Returns a classified error for an invalid raw result, or None when valid.
ResultCheck = Callable[[Any], GatewayError | None]


class BaseGateway:
    """Foundation for gateways over an :class:`AdministrativeBackend`.

    Parameters:
        backend: The privileged subsystem every call is delegated to.
        namespace: Prefix used in rendered diagnostics.
        plugin_manager: Optional manager whose ``post_operation`` observers
            are notified after every action operation.
    """

    def __init__(
        self,
        backend: AdministrativeBackend,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self._backend = backend
        self._namespace = namespace
        self._plugins = plugin_manager

    @property
    def backend(self) -> AdministrativeBackend:
        return self._backend

    @property
    def namespace(self) -> str:
        return self._namespace

    def _call(
        self,
        op: str,
        primitive: Callable[[], Any],
        method: str,
        *args: Any,
        check: ResultCheck | None = None,
        payload: Callable[[Any], Any] | None = None,
    ) -> Outcome:
        """Invoke *primitive* and classify what it returned or raised."""
        with trace_span(method, *args):
            try:
                raw = primitive()
            except Exception as exc:
                error = backend_fault(exc, method, *args, namespace=self._namespace)
                return Outcome.failure(op, error)

        error = check(raw) if check is not None else None
        if error is not None:
            return Outcome.failure(op, error)
        return Outcome.success(op, payload(raw) if payload is not None else None)

    def _complete(
        self,
        outcome: Outcome,
        on_success: OnSuccess | None,
        on_error: OnError | None,
    ) -> Outcome:
        """Log, notify observers, then fire exactly one continuation."""
        if outcome.ok:
            log.debug("gateway.call", op=outcome.op, ok=True)
        else:
            assert outcome.error is not None
            log.debug(
                "gateway.call",
                op=outcome.op,
                ok=False,
                kind=outcome.error.kind.value,
                error=outcome.error.message,
            )

        warnings = self._notify(outcome)
        if warnings:
            outcome = outcome.model_copy(update={"warnings": [*outcome.warnings, *warnings]})

        if on_success is not None and on_error is not None:
            outcome.deliver(on_success, on_error)
        return outcome

    def _discard(self, op: str, outcome: Outcome) -> None:
        """Drop the outcome of a best-effort call."""
        if not outcome.ok:
            assert outcome.error is not None
            logger.debug("Ignoring failed best-effort %s: %s", op, outcome.error.message)
        self._notify(outcome)

    def _notify(self, outcome: Outcome) -> list[str]:
        """Dispatch ``post_operation`` to observers. No-op without plugins.

        INVARIANT: Observer failures are warnings, never errors.
        """
        if self._plugins is None:
            return []
        error = outcome.error.to_payload() if outcome.error is not None else None
        try:
            self._plugins.hook.post_operation(op=outcome.op, ok=outcome.ok, error=error)
        except Exception:
            logger.debug("Observer dispatch failed for %s", outcome.op, exc_info=True)
            return [f"Observer dispatch failed for {outcome.op}"]
        return []


def require_pair(on_success: OnSuccess | None, on_error: OnError | None) -> None:
    """Reject a half-supplied continuation pair before touching the backend."""
    if (on_success is None) != (on_error is None):
        msg = "on_success and on_error must be supplied together"
        raise ValueError(msg)
