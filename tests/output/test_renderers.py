"""Tests for Rich renderers of gateway Outcomes."""

from policygate.domain.handles import UserHandle
from policygate.gateway.errors import backend_fault, failed_operation
from policygate.gateway.result import Outcome
from policygate.output.renderers import render_quiet, render_result


class TestSuccessRenderer:
    def test_void(self) -> None:
        output = render_result(Outcome.success("lock_now"))
        assert "OK" in output
        assert "lock_now" in output

    def test_handle(self) -> None:
        output = render_result(Outcome.success("create_and_manage_user", UserHandle(identifier=10)))
        assert "UserHandle{10}" in output

    def test_restriction_table_sorted(self) -> None:
        output = render_result(Outcome.success("get_user_restrictions", ["no_sms", "no_camera"]))
        assert output.index("no_camera") < output.index("no_sms")

    def test_empty_restrictions(self) -> None:
        assert "(none)" in render_result(Outcome.success("get_user_restrictions", []))

    def test_boolean(self) -> None:
        assert "enforced: yes" in render_result(Outcome.success("has_user_restriction", True))


class TestErrorRenderer:
    def test_failed_operation(self) -> None:
        error = failed_operation("removeUser({})", UserHandle(identifier=10))
        output = render_result(Outcome.failure("remove_user", error))
        assert "ERROR" in output
        assert "failed_operation" in output
        assert "DPM.removeUser(UserHandle{10}) returned false" in output

    def test_backend_fault(self) -> None:
        error = backend_fault(PermissionError("denied"), "lockNow()")
        output = render_result(Outcome.failure("lock_now", error))
        assert "backend_fault" in output
        assert "PermissionError: denied" in output


class TestQuietRenderer:
    def test_handle_prints_identifier(self) -> None:
        outcome = Outcome.success("create_and_manage_user", UserHandle(identifier=12))
        assert render_quiet(outcome) == "12"

    def test_restrictions_one_per_line(self) -> None:
        outcome = Outcome.success("get_user_restrictions", frozenset({"b", "a"}))
        assert render_quiet(outcome) == "a\nb"

    def test_boolean(self) -> None:
        assert render_quiet(Outcome.success("has_user_restriction", False)) == "false"

    def test_void(self) -> None:
        assert render_quiet(Outcome.success("lock_now")) == "OK: lock_now"

    def test_error(self) -> None:
        outcome = Outcome.failure("remove_user", failed_operation("removeUser({})", 3))
        assert render_quiet(outcome) == "ERROR: remove_user: DPM.removeUser(3) returned false"
