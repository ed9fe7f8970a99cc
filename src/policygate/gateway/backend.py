"""AdministrativeBackend — the privileged primitives the gateway delegates to.

The gateway calls these synchronously and classifies what they return or
raise. Implementations own all concurrency safety of device state.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from policygate.config.settings import GatewaySettings
    from policygate.domain.handles import UserHandle


@runtime_checkable
class AdministrativeBackend(Protocol):
    """Privileged device-administration primitives."""

    def create_and_manage_user(self, name: str | None, flags: int) -> UserHandle | None:
        """Create a managed user. ``None`` when the user could not be created."""
        ...

    def remove_user(self, user: UserHandle) -> bool:
        """Remove *user*. ``False`` when the removal did not happen."""
        ...

    def get_user_for_serial_number(self, serial_number: int) -> UserHandle | None:
        """Resolve a serial number. ``None`` when no live user has it."""
        ...

    def get_serial_number_for_user(self, user: UserHandle) -> int:
        """Serial number of *user*, or ``-1`` when unknown."""
        ...

    def get_user_restrictions(self) -> Iterable[str]: ...

    def add_user_restriction(self, key: str) -> None: ...

    def clear_user_restriction(self, key: str) -> None: ...

    def has_user_restriction(self, key: str) -> bool: ...

    def lock_now(self) -> None: ...

    def wipe_data(self, flags: int) -> None: ...

    def request_bugreport(self) -> None: ...

    def set_network_logging_enabled(self, enabled: bool) -> None: ...


BackendFactory = Callable[["GatewaySettings"], AdministrativeBackend]
