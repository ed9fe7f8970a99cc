"""GatewayError — the classified failure value behind every failed Outcome.

INVARIANT: invalid_result and failed_operation errors are synthesized by the
gateway. They never originate from the backend.
A backend_fault keeps the exception the backend raised in ``cause``; that
exact object is what an error continuation receives.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_NAMESPACE = "DPM"
FALSE_RESULT = "false"
NULL_RESULT = "null"


class ErrorKind(StrEnum):
    """Failure classification."""

    BACKEND_FAULT = "backend_fault"
    INVALID_RESULT = "invalid_result"
    FAILED_OPERATION = "failed_operation"


class GatewayError(BaseModel):
    """Structured failure reported through an ``on_error`` continuation.

    Attributes:
        kind: Classification of the failure.
        method: Name template of the backend call, with ``{}`` placeholders
            (e.g. ``"removeUser({})"``).
        args: Arguments substituted into *method*.
        result: String form of the offending return value. ``None`` for
            backend faults.
        namespace: Prefix of the rendered diagnostic.
        cause: The exception raised by the backend, for backend faults.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: ErrorKind
    method: str
    args: tuple[Any, ...] = ()
    result: str | None = None
    namespace: str = DEFAULT_NAMESPACE
    cause: Exception | None = Field(default=None, exclude=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def call(self) -> str:
        """The method template with its arguments substituted.

        Arguments render like results, so ``None`` reads ``null``.
        """
        return self.method.format(*(describe_result(arg) for arg in self.args))

    @property
    def is_invalid_result(self) -> bool:
        """True for invalid_result and its failed_operation specialization."""
        return self.kind in (ErrorKind.INVALID_RESULT, ErrorKind.FAILED_OPERATION)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        """Human-readable diagnostic, built without re-querying the backend."""
        if self.kind is ErrorKind.BACKEND_FAULT:
            return f"{self.namespace}.{self.call} raised {type(self.cause).__name__}: {self.cause}"
        return f"{self.namespace}.{self.call} returned {self.result}"

    def to_payload(self) -> dict[str, Any]:
        """Flat summary handed to ``post_operation`` observers."""
        return {
            "kind": self.kind.value,
            "call": f"{self.namespace}.{self.call}",
            "result": self.result,
            "message": self.message,
        }

    def __str__(self) -> str:
        return self.message


def describe_result(result: object) -> str:
    """String form of a raw backend return value."""
    if result is None:
        return NULL_RESULT
    if isinstance(result, bool):
        return "true" if result else FALSE_RESULT
    return str(result)


def invalid_result(
    result: object, method: str, *args: Any, namespace: str = DEFAULT_NAMESPACE
) -> GatewayError:
    """Error for a backend call that returned a semantically invalid value."""
    return GatewayError(
        kind=ErrorKind.INVALID_RESULT,
        method=method,
        args=args,
        result=describe_result(result),
        namespace=namespace,
    )


def failed_operation(
    method: str, *args: Any, namespace: str = DEFAULT_NAMESPACE
) -> GatewayError:
    """Error for a boolean-contract backend call that returned ``False``."""
    return GatewayError(
        kind=ErrorKind.FAILED_OPERATION,
        method=method,
        args=args,
        result=FALSE_RESULT,
        namespace=namespace,
    )


def backend_fault(
    exc: Exception, method: str, *args: Any, namespace: str = DEFAULT_NAMESPACE
) -> GatewayError:
    """Error wrapping an exception raised by the backend."""
    return GatewayError(
        kind=ErrorKind.BACKEND_FAULT,
        method=method,
        args=args,
        namespace=namespace,
        cause=exc,
    )
