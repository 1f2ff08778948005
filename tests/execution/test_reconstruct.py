"""Tests for testkit.execution.reconstruct — the event-to-execution fold.

Covers:
- start/end pairing per node
- skip without a prior start
- terminal-event ordering
- FINISHED without a start under both MissingStartPolicy values
- pathological double terminal events
- round-trip counts against raw terminal events
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from tests._support import at
from testkit.core.errors import PreconditionViolationError
from testkit.core.settings import MissingStartPolicy
from testkit.engine import TestExecutionResult
from testkit.execution.events import EventType, ExecutionEvent
from testkit.execution.reconstruct import create_executions

OK = TestExecutionResult.successful()


class TestPairing:
    def test_start_and_finish_pair_up(self, tree):
        executions = create_executions([
            ExecutionEvent.started(tree.first, at(1)),
            ExecutionEvent.finished(tree.first, OK, at(4)),
        ])

        assert len(executions) == 1
        execution = executions[0]
        assert execution.test_descriptor == tree.first
        assert execution.start_instant == at(1)
        assert execution.end_instant == at(4)
        assert execution.duration == timedelta(seconds=3)
        assert execution.termination_info.execution_result is OK

    def test_skip_after_start_uses_start(self, tree):
        executions = create_executions([
            ExecutionEvent.started(tree.container, at(1)),
            ExecutionEvent.skipped(tree.container, "aborted mid-way", at(5)),
        ])
        assert executions[0].start_instant == at(1)
        assert executions[0].end_instant == at(5)
        assert executions[0].termination_info.skip_reason == "aborted mid-way"

    def test_skip_without_start(self, tree):
        executions = create_executions([ExecutionEvent.skipped(tree.first, "disabled", at(7))])

        execution = executions[0]
        assert execution.start_instant == execution.end_instant == at(7)
        assert execution.duration == timedelta(0)
        assert execution.termination_info.is_skipped
        assert execution.termination_info.skip_reason == "disabled"

    def test_latest_start_wins(self, tree):
        executions = create_executions([
            ExecutionEvent.started(tree.first, at(1)),
            ExecutionEvent.started(tree.first, at(3)),
            ExecutionEvent.finished(tree.first, OK, at(4)),
        ])
        assert executions[0].start_instant == at(3)

    def test_ignores_non_terminal_kinds(self, tree):
        executions = create_executions([
            ExecutionEvent.dynamic_test_registered(tree.first, at(0)),
            ExecutionEvent.reporting_entry_published(tree.first, {"k": "v"}, at(1)),
        ])
        assert executions == []


class TestOrdering:
    def test_output_follows_terminal_event_order(self, tree):
        executions = create_executions([
            ExecutionEvent.started(tree.engine, at(0)),
            ExecutionEvent.started(tree.container, at(1)),
            ExecutionEvent.started(tree.first, at(2)),
            ExecutionEvent.finished(tree.first, OK, at(3)),
            ExecutionEvent.skipped(tree.second, "disabled", at(4)),
            ExecutionEvent.finished(tree.container, OK, at(5)),
            ExecutionEvent.finished(tree.engine, OK, at(6)),
        ])
        assert [e.test_descriptor for e in executions] == [
            tree.first,
            tree.second,
            tree.container,
            tree.engine,
        ]
        assert executions[2].start_instant == at(1)
        assert executions[3].duration == timedelta(seconds=6)


class TestMissingStart:
    def test_terminal_policy_uses_terminal_timestamp(self, tree):
        executions = create_executions(
            [ExecutionEvent.finished(tree.engine, OK, at(9))],
            MissingStartPolicy.TERMINAL,
        )
        assert executions[0].start_instant == at(9)
        assert executions[0].duration == timedelta(0)

    def test_absent_policy_leaves_start_empty(self, tree):
        executions = create_executions(
            [ExecutionEvent.finished(tree.first, OK, at(9))],
            MissingStartPolicy.ABSENT,
        )
        assert executions[0].start_instant is None
        assert executions[0].duration is None
        assert executions[0].end_instant == at(9)

    def test_default_policy_comes_from_settings(self, tree, monkeypatch):
        monkeypatch.setenv("TESTKIT_MISSING_START_POLICY", "absent")
        executions = create_executions([ExecutionEvent.finished(tree.first, OK, at(9))])
        assert executions[0].start_instant is None

    def test_finished_without_start_does_not_raise(self, tree):
        executions = create_executions([ExecutionEvent.finished(tree.first, OK, at(2))])
        assert len(executions) == 1


class TestPathologicalInput:
    def test_node_skipped_twice_yields_two_executions(self, tree):
        executions = create_executions([
            ExecutionEvent.started(tree.first, at(1)),
            ExecutionEvent.skipped(tree.first, "first", at(2)),
            ExecutionEvent.skipped(tree.first, "second", at(5)),
        ])

        assert len(executions) == 2
        assert (executions[0].start_instant, executions[0].end_instant) == (at(1), at(2))
        # the start entry was consumed by the first skip
        assert (executions[1].start_instant, executions[1].end_instant) == (at(5), at(5))

    def test_skipped_then_finished_emits_both(self, tree):
        executions = create_executions([
            ExecutionEvent.skipped(tree.first, "r", at(1)),
            ExecutionEvent.finished(tree.first, OK, at(2)),
        ])
        assert [e.termination_info.is_skipped for e in executions] == [True, False]


class TestRoundTrip:
    def test_counts_match_raw_terminal_events(self, tree):
        events = [
            ExecutionEvent.started(tree.engine, at(0)),
            ExecutionEvent.started(tree.container, at(1)),
            ExecutionEvent.skipped(tree.first, "a", at(2)),
            ExecutionEvent.started(tree.second, at(3)),
            ExecutionEvent.finished(tree.second, TestExecutionResult.failed(), at(4)),
            ExecutionEvent.skipped(tree.third, "b", at(5)),
            ExecutionEvent.finished(tree.container, OK, at(6)),
            ExecutionEvent.finished(tree.engine, OK, at(7)),
        ]
        executions = create_executions(events)

        skipped = sum(1 for e in executions if e.termination_info.is_skipped)
        executed = sum(1 for e in executions if e.termination_info.is_executed)
        assert skipped == sum(1 for e in events if e.type is EventType.SKIPPED)
        assert executed == sum(1 for e in events if e.type is EventType.FINISHED)


class TestPreconditions:
    def test_none_events_rejected(self):
        with pytest.raises(PreconditionViolationError):
            create_executions(None)

    def test_none_element_rejected(self, tree):
        with pytest.raises(PreconditionViolationError):
            create_executions([ExecutionEvent.started(tree.first, at(0)), None])
