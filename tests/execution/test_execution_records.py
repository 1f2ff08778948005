"""Tests for testkit.execution.models — Execution and TerminationInfo."""

from datetime import timedelta

import pytest

from tests._support import at
from testkit.core.errors import PreconditionViolationError
from testkit.engine import Status, TestExecutionResult
from testkit.execution.models import Execution, TerminationInfo


class TestTerminationInfo:
    def test_skipped(self):
        info = TerminationInfo.of_skipped("disabled")
        assert info.is_skipped and not info.is_executed and not info.is_not_skipped
        assert info.skip_reason == "disabled"
        with pytest.raises(PreconditionViolationError):
            info.execution_result

    def test_executed(self):
        result = TestExecutionResult.aborted()
        info = TerminationInfo.of_executed(result)
        assert info.is_executed and info.is_not_skipped
        assert info.execution_result is result
        assert info.has_status(Status.ABORTED)
        assert not info.has_status(Status.FAILED)
        with pytest.raises(PreconditionViolationError):
            info.skip_reason

    def test_skipped_never_has_status(self):
        assert not TerminationInfo.of_skipped("r").has_status(Status.SUCCESSFUL)

    def test_equality(self):
        assert TerminationInfo.of_skipped("r") == TerminationInfo.of_skipped("r")
        assert TerminationInfo.of_skipped("r") != TerminationInfo.of_skipped("s")


class TestExecution:
    def test_duration_is_derived(self, tree):
        execution = Execution.finished(tree.first, at(2), at(5), TestExecutionResult.successful())
        assert execution.duration == timedelta(seconds=3)

    def test_absent_start_has_no_duration(self, tree):
        execution = Execution.finished(tree.first, None, at(5), TestExecutionResult.successful())
        assert execution.duration is None
        assert "start_instant=<none>" in str(execution)

    def test_skipped_factory(self, tree):
        execution = Execution.skipped(tree.first, at(1), at(1), "disabled")
        assert execution.termination_info.skip_reason == "disabled"

    def test_is_immutable(self, tree):
        execution = Execution.skipped(tree.first, at(1), at(1), "disabled")
        with pytest.raises(AttributeError):
            execution.end_instant = at(2)

    def test_str_mentions_descriptor_and_termination(self, tree):
        text = str(Execution.skipped(tree.first, at(1), at(1), "disabled"))
        assert text.startswith("Execution[test_descriptor=test 'first()'")
        assert "termination_info=skipped('disabled')" in text
