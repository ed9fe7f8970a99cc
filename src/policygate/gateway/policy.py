"""PolicyGateway — one call shape per administrative capability.

Action operations take keyword-only ``on_success`` / ``on_error``
continuations and also return their :class:`Outcome`. Exactly one
continuation fires, exactly once. Callers that prefer a return value may
omit both continuations.

Accessors (``get_user_restrictions``, ``has_user_restriction``,
``get_serial_number_for_user``) return directly and have no classified
failure path; a backend that cannot answer them raises straight through.
"""

from __future__ import annotations

from policygate.domain.handles import UserHandle
from policygate.gateway.base import BaseGateway, require_pair
from policygate.gateway.errors import GatewayError, failed_operation, invalid_result
from policygate.gateway.result import OnError, OnSuccess, Outcome
from policygate.gateway.telemetry import traced


class PolicyGateway(BaseGateway):
    """Classified-outcome wrapper over an administrative backend."""

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @traced
    def create_and_manage_user(
        self,
        name: str | None = None,
        flags: int = 0,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        """Create a managed user; succeeds with its :class:`UserHandle`."""
        require_pair(on_success, on_error)
        method = "createAndManageUser({}, {})"
        flags = int(flags)

        def check(raw: object) -> GatewayError | None:
            if isinstance(raw, UserHandle):
                return None
            return invalid_result(raw, method, name, flags, namespace=self._namespace)

        outcome = self._call(
            "create_and_manage_user",
            lambda: self._backend.create_and_manage_user(name, flags),
            method,
            name,
            flags,
            check=check,
            payload=lambda raw: raw,
        )
        return self._complete(outcome, on_success, on_error)

    @traced
    def remove_user(
        self,
        user: UserHandle,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        """Remove *user*; a ``False`` from the backend is a failed operation."""
        require_pair(on_success, on_error)
        return self._complete(self._remove_user("remove_user", user), on_success, on_error)

    @traced
    def remove_user_by_serial_number(
        self,
        serial_number: int,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        """Resolve *serial_number* to a handle, then remove that user.

        A serial number with no live user fails on the lookup step and the
        removal primitive is never invoked.
        """
        require_pair(on_success, on_error)
        op = "remove_user_by_serial_number"
        method = "getUserForSerialNumber({})"

        def check(raw: object) -> GatewayError | None:
            if isinstance(raw, UserHandle):
                return None
            return invalid_result(raw, method, serial_number, namespace=self._namespace)

        lookup = self._call(
            op,
            lambda: self._backend.get_user_for_serial_number(serial_number),
            method,
            serial_number,
            check=check,
            payload=lambda raw: raw,
        )
        if not lookup.ok:
            return self._complete(lookup, on_success, on_error)
        return self._complete(self._remove_user(op, lookup.value), on_success, on_error)

    def _remove_user(self, op: str, user: UserHandle) -> Outcome:
        method = "removeUser({})"

        def check(raw: object) -> GatewayError | None:
            if raw is False:
                return failed_operation(method, user, namespace=self._namespace)
            return None

        return self._call(
            op, lambda: self._backend.remove_user(user), method, user, check=check
        )

    def get_serial_number_for_user(self, user: UserHandle) -> int:
        """Serial number the backend assigned to *user* (``-1`` when unknown)."""
        return self._backend.get_serial_number_for_user(user)

    # ------------------------------------------------------------------
    # Restrictions
    # ------------------------------------------------------------------

    def get_user_restrictions(self) -> frozenset[str]:
        """Restriction keys currently enforced."""
        return frozenset(self._backend.get_user_restrictions())

    def has_user_restriction(self, key: str) -> bool:
        return bool(self._backend.has_user_restriction(key))

    @traced
    def set_user_restriction(
        self,
        key: str,
        enabled: bool,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        """Add the restriction when *enabled*, clear it otherwise."""
        require_pair(on_success, on_error)
        return self._complete(self._set_user_restriction(key, enabled), on_success, on_error)

    def set_user_restriction_best_effort(self, key: str, enabled: bool) -> None:
        """Fire-and-forget :meth:`set_user_restriction`; every failure is discarded."""
        self._discard("set_user_restriction", self._set_user_restriction(key, enabled))

    def _set_user_restriction(self, key: str, enabled: bool) -> Outcome:
        if enabled:
            return self._call(
                "set_user_restriction",
                lambda: self._backend.add_user_restriction(key),
                "addUserRestriction({})",
                key,
            )
        return self._call(
            "set_user_restriction",
            lambda: self._backend.clear_user_restriction(key),
            "clearUserRestriction({})",
            key,
        )

    # ------------------------------------------------------------------
    # Device
    # ------------------------------------------------------------------

    @traced
    def lock_now(
        self,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        require_pair(on_success, on_error)
        outcome = self._call("lock_now", self._backend.lock_now, "lockNow()")
        return self._complete(outcome, on_success, on_error)

    @traced
    def wipe_data(
        self,
        flags: int = 0,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        """Factory-reset the device; *flags* is a :class:`WipeFlag` bitmask."""
        require_pair(on_success, on_error)
        flags = int(flags)
        outcome = self._call(
            "wipe_data", lambda: self._backend.wipe_data(flags), "wipeData({})", flags
        )
        return self._complete(outcome, on_success, on_error)

    @traced
    def request_bugreport(
        self,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        require_pair(on_success, on_error)
        outcome = self._call(
            "request_bugreport", self._backend.request_bugreport, "requestBugreport()"
        )
        return self._complete(outcome, on_success, on_error)

    @traced
    def set_network_logging(
        self,
        enabled: bool,
        *,
        on_success: OnSuccess | None = None,
        on_error: OnError | None = None,
    ) -> Outcome:
        require_pair(on_success, on_error)
        return self._complete(self._set_network_logging(enabled), on_success, on_error)

    def set_network_logging_best_effort(self, enabled: bool) -> None:
        """Fire-and-forget :meth:`set_network_logging`; every failure is discarded."""
        self._discard("set_network_logging", self._set_network_logging(enabled))

    def _set_network_logging(self, enabled: bool) -> Outcome:
        return self._call(
            "set_network_logging",
            lambda: self._backend.set_network_logging_enabled(enabled),
            "setNetworkLoggingEnabled({})",
            enabled,
        )
