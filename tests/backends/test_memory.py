"""Tests for the simulated in-memory backend."""

from __future__ import annotations

import threading

import pytest

from policygate.backends.memory import InMemoryBackend
from policygate.config.settings import GatewaySettings
from policygate.domain.flags import CreateUserFlag
from policygate.domain.handles import SYSTEM_USER, UserHandle
from policygate.gateway.backend import AdministrativeBackend


class TestProtocol:
    def test_satisfies_backend_protocol(self) -> None:
        assert isinstance(InMemoryBackend(), AdministrativeBackend)

    def test_from_settings(self) -> None:
        settings = GatewaySettings(memory={"max_users": 1})
        backend = InMemoryBackend.from_settings(settings)
        assert backend.create_and_manage_user("a", 0) is not None
        assert backend.create_and_manage_user("b", 0) is None


class TestUsers:
    def test_starts_with_system_user(self) -> None:
        backend = InMemoryBackend()
        assert [u.handle for u in backend.users] == [SYSTEM_USER]

    def test_identifiers_increase(self) -> None:
        backend = InMemoryBackend()
        first = backend.create_and_manage_user("a", 0)
        second = backend.create_and_manage_user("b", CreateUserFlag.MAKE_USER_EPHEMERAL)
        assert (first, second) == (UserHandle(identifier=10), UserHandle(identifier=11))
        assert backend.get_serial_number_for_user(second) == 11

    def test_serial_lookup(self) -> None:
        backend = InMemoryBackend()
        handle = backend.create_and_manage_user("a", 0)
        assert backend.get_user_for_serial_number(10) == handle
        assert backend.get_user_for_serial_number(99) is None

    def test_remove_unknown_or_system(self) -> None:
        backend = InMemoryBackend()
        assert backend.remove_user(UserHandle(identifier=50)) is False
        assert backend.remove_user(SYSTEM_USER) is False

    def test_identifiers_not_reused(self) -> None:
        backend = InMemoryBackend()
        handle = backend.create_and_manage_user("a", 0)
        assert backend.remove_user(handle) is True
        assert backend.create_and_manage_user("b", 0) == UserHandle(identifier=11)

    def test_unknown_user_serial(self) -> None:
        assert InMemoryBackend().get_serial_number_for_user(UserHandle(identifier=5)) == -1


class TestFaultInjection:
    def test_deny_defaults_to_permission_error(self) -> None:
        backend = InMemoryBackend()
        backend.deny("lock_now")
        with pytest.raises(PermissionError, match="lock_now"):
            backend.lock_now()
        assert backend.locked is False

    def test_allow_restores(self) -> None:
        backend = InMemoryBackend()
        backend.deny("lock_now", RuntimeError("x"))
        backend.allow("lock_now")
        backend.lock_now()
        assert backend.locked is True


class TestConcurrency:
    def test_parallel_restriction_updates(self) -> None:
        backend = InMemoryBackend()
        keys = [f"custom_{i}" for i in range(50)]

        def worker(key: str) -> None:
            backend.add_user_restriction(key)

        threads = [threading.Thread(target=worker, args=(k,)) for k in keys]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert backend.get_user_restrictions() == frozenset(keys)
