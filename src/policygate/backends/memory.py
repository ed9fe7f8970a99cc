"""Simulated device backend held entirely in memory.

Used by the test suite and as the default CLI backend. Every primitive runs
under one lock, so restriction state is serialized here and never cached by
the gateway.

Nothing is persisted. Each CLI invocation builds a fresh device holding only
the system user, so state set by one command (a restriction, a created
user) is gone by the next.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from policygate.domain.flags import CreateUserFlag
from policygate.domain.handles import SYSTEM_USER, UNKNOWN_SERIAL_NUMBER, UserHandle

if TYPE_CHECKING:
    from policygate.config.settings import GatewaySettings

logger = logging.getLogger(__name__)

FIRST_SECONDARY_ID = 10


@dataclass(frozen=True)
class SimulatedUser:
    """A user provisioned on the simulated device."""

    handle: UserHandle
    serial_number: int
    name: str | None
    flags: int

    @property
    def ephemeral(self) -> bool:
        return bool(self.flags & CreateUserFlag.MAKE_USER_EPHEMERAL)


class InMemoryBackend:
    """Thread-safe stand-in for a device administration subsystem.

    Parameters:
        max_users: Secondary users allowed before creation starts failing.
    """

    def __init__(self, *, max_users: int = 4) -> None:
        self._lock = threading.Lock()
        self._max_users = max_users
        self._next_id = FIRST_SECONDARY_ID
        self._users: dict[int, SimulatedUser] = {
            0: SimulatedUser(handle=SYSTEM_USER, serial_number=0, name=None, flags=0)
        }
        self._restrictions: set[str] = set()
        self._denied: dict[str, Exception] = {}
        self.locked = False
        self.wipe_flags: int | None = None
        self.bugreports = 0
        self.network_logging_enabled = False

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> InMemoryBackend:
        return cls(max_users=settings.memory.max_users)

    # ------------------------------------------------------------------
    # Fault injection
    # ------------------------------------------------------------------

    def deny(self, primitive: str, exc: Exception | None = None) -> None:
        """Make *primitive* raise *exc* (a ``PermissionError`` by default)."""
        self._denied[primitive] = exc or PermissionError(f"caller may not call {primitive}")

    def allow(self, primitive: str) -> None:
        self._denied.pop(primitive, None)

    def _check(self, primitive: str) -> None:
        exc = self._denied.get(primitive)
        if exc is not None:
            raise exc

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    @property
    def users(self) -> list[SimulatedUser]:
        with self._lock:
            return list(self._users.values())

    def create_and_manage_user(self, name: str | None, flags: int) -> UserHandle | None:
        with self._lock:
            self._check("create_and_manage_user")
            if len(self._users) - 1 >= self._max_users:
                logger.debug("User limit %d reached", self._max_users)
                return None
            identifier = self._next_id
            self._next_id += 1
            handle = UserHandle(identifier=identifier)
            self._users[identifier] = SimulatedUser(
                handle=handle, serial_number=identifier, name=name, flags=int(flags)
            )
            return handle

    def remove_user(self, user: UserHandle) -> bool:
        with self._lock:
            self._check("remove_user")
            if user == SYSTEM_USER or user.identifier not in self._users:
                return False
            del self._users[user.identifier]
            return True

    def get_user_for_serial_number(self, serial_number: int) -> UserHandle | None:
        with self._lock:
            self._check("get_user_for_serial_number")
            for user in self._users.values():
                if user.serial_number == serial_number:
                    return user.handle
            return None

    def get_serial_number_for_user(self, user: UserHandle) -> int:
        with self._lock:
            self._check("get_serial_number_for_user")
            found = self._users.get(user.identifier)
            return found.serial_number if found else UNKNOWN_SERIAL_NUMBER

    # ------------------------------------------------------------------
    # Restrictions
    # ------------------------------------------------------------------

    def get_user_restrictions(self) -> frozenset[str]:
        with self._lock:
            self._check("get_user_restrictions")
            return frozenset(self._restrictions)

    def add_user_restriction(self, key: str) -> None:
        with self._lock:
            self._check("add_user_restriction")
            self._restrictions.add(key)

    def clear_user_restriction(self, key: str) -> None:
        with self._lock:
            self._check("clear_user_restriction")
            self._restrictions.discard(key)

    def has_user_restriction(self, key: str) -> bool:
        with self._lock:
            self._check("has_user_restriction")
            return key in self._restrictions

    # ------------------------------------------------------------------
    # Device
    # ------------------------------------------------------------------

    def lock_now(self) -> None:
        with self._lock:
            self._check("lock_now")
            self.locked = True

    def wipe_data(self, flags: int) -> None:
        with self._lock:
            self._check("wipe_data")
            self.wipe_flags = int(flags)
            self._users = {0: self._users[0]}
            self._restrictions.clear()

    def request_bugreport(self) -> None:
        with self._lock:
            self._check("request_bugreport")
            self.bugreports += 1

    def set_network_logging_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._check("set_network_logging_enabled")
            self.network_logging_enabled = enabled
