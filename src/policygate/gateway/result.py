"""Outcome — the universal return type of gateway action operations.

INVARIANT: ``ok`` is True exactly when ``error`` is None.
Delivery fires exactly one continuation, exactly once. A backend fault
reaches ``on_error`` as the exception the backend raised, unmodified.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from policygate.gateway.errors import ErrorKind, GatewayError

OnSuccess = Callable[[Any], object]
OnError = Callable[[Exception | GatewayError], object]


class Outcome(BaseModel):
    """Result of one gateway operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the gateway operation (e.g. ``"remove_user"``).
        value: Typed success payload (``None`` for void operations).
        error: Classified failure if ``ok`` is False.
        warnings: Non-fatal issues, such as failing observer plugins.
        meta: Optional metadata (call telemetry).
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ok: bool
    op: str
    value: Any = None
    error: GatewayError | None = None
    warnings: list[str] = Field(default_factory=list)
    meta: dict[str, Any] | None = None

    @model_validator(mode="after")
    def check_single_branch(self) -> Outcome:
        if self.ok == (self.error is not None):
            msg = "an Outcome carries an error exactly when it is not ok"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, op: str, value: Any = None) -> Outcome:
        return cls(ok=True, op=op, value=value)

    @classmethod
    def failure(cls, op: str, error: GatewayError) -> Outcome:
        return cls(ok=False, op=op, error=error)

    def deliver(self, on_success: OnSuccess, on_error: OnError) -> None:
        """Fire the continuation matching this outcome.

        ``on_error`` receives the backend exception itself for a backend
        fault and the synthesized :class:`GatewayError` otherwise.
        """
        if self.ok:
            on_success(self.value)
            return
        assert self.error is not None
        if self.error.kind is ErrorKind.BACKEND_FAULT and self.error.cause is not None:
            on_error(self.error.cause)
        else:
            on_error(self.error)
