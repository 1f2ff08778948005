"""Execution Recorder — capture every lifecycle notification of a run.

The recorder is a transparent sink: it appends each notification, in
arrival order, and never validates or reorders.  It implements the
:class:`~testkit.engine.listener.EngineExecutionListener` protocol so an
engine can report into it directly.

Architecture::

    ExecutionRecorder
    ├── execution_started / execution_skipped / execution_finished
    │   dynamic_test_registered / reporting_entry_published
    │       → ExecutionEvent(clock()) → record(event)
    ├── record(event)             (serialized behind a lock)
    ├── finish(result)            → engine_result
    ├── events()                  → tuple snapshot
    └── get_execution_results()   → ExecutionResults

    ExecutionRecorder.execute(engine, request) → ExecutionResults

Example::

    from testkit import ExecutionRecorder, event, engine, started, finished_successfully

    results = ExecutionRecorder.execute(my_engine, request)
    results.events().assert_events_match_exactly(
        event(engine(), started()),
        event(engine(), finished_successfully()),
    )
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from testkit.core.logging import ensure_configured, get_logger
from testkit.core.preconditions import not_none
from testkit.engine.descriptors import TestDescriptor
from testkit.engine.results import TestExecutionResult
from testkit.execution.events import EventType, ExecutionEvent, utcnow

if TYPE_CHECKING:
    from testkit.engine.listener import TestEngine
    from testkit.execution.results import ExecutionResults

logger = get_logger(__name__)


class ExecutionRecorder:
    """Thread-safe, append-only sink for lifecycle notifications.

    Parameters
    ----------
    clock
        Source of event timestamps. Defaults to :func:`utcnow`; tests pass a
        deterministic clock.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        ensure_configured()
        self._clock = clock or utcnow
        self._events: list[ExecutionEvent] = []
        self._lock = threading.Lock()
        self._engine_result: TestExecutionResult | None = None

    # --- Running an engine ---------------------------------------------------

    @classmethod
    def execute(
        cls,
        engine: TestEngine,
        request: Any,
        clock: Callable[[], datetime] | None = None,
    ) -> ExecutionResults:
        """Run *engine* against *request* and return the recorded results."""
        not_none(engine, "TestEngine must not be None")
        recorder = cls(clock=clock)
        logger.debug("engine_execution_started", engine=engine.engine_id)
        engine.execute(request, recorder)
        if recorder.engine_result is None:
            recorder._finish_from_engine_event()
        logger.debug(
            "engine_execution_finished",
            engine=engine.engine_id,
            events=len(recorder._events),
            result=str(recorder.engine_result),
        )
        return recorder.get_execution_results()

    # --- Listener surface ----------------------------------------------------

    def dynamic_test_registered(self, test_descriptor: TestDescriptor) -> None:
        self.record(ExecutionEvent.dynamic_test_registered(test_descriptor, self._clock()))

    def execution_started(self, test_descriptor: TestDescriptor) -> None:
        self.record(ExecutionEvent.started(test_descriptor, self._clock()))

    def execution_skipped(self, test_descriptor: TestDescriptor, reason: str) -> None:
        self.record(ExecutionEvent.skipped(test_descriptor, reason, self._clock()))

    def execution_finished(
        self,
        test_descriptor: TestDescriptor,
        result: TestExecutionResult,
    ) -> None:
        self.record(ExecutionEvent.finished(test_descriptor, result, self._clock()))

    def reporting_entry_published(
        self,
        test_descriptor: TestDescriptor,
        entry: dict[str, str],
    ) -> None:
        self.record(ExecutionEvent.reporting_entry_published(test_descriptor, entry, self._clock()))

    # --- Recording -----------------------------------------------------------

    def record(self, event: ExecutionEvent) -> None:
        """Append *event*; no ordering checks are made."""
        not_none(event, "ExecutionEvent must not be None")
        with self._lock:
            self._events.append(event)
        logger.debug(
            "event_recorded",
            event_type=event.type.name,
            node=str(event.test_descriptor.unique_id),
        )

    def finish(self, result: TestExecutionResult) -> None:
        """Record the terminal outcome of the run as a whole."""
        not_none(result, "TestExecutionResult must not be None")
        with self._lock:
            self._engine_result = result

    @property
    def engine_result(self) -> TestExecutionResult | None:
        with self._lock:
            return self._engine_result

    def events(self) -> tuple[ExecutionEvent, ...]:
        """Snapshot of everything recorded so far."""
        with self._lock:
            return tuple(self._events)

    def get_execution_results(self) -> ExecutionResults:
        from testkit.execution.results import ExecutionResults

        with self._lock:
            events = tuple(self._events)
            engine_result = self._engine_result
        return ExecutionResults(events, engine_result)

    def _finish_from_engine_event(self) -> None:
        for event in reversed(self.events()):
            if event.type is EventType.FINISHED and event.test_descriptor.is_engine:
                self.finish(event.payload_as(TestExecutionResult))
                return

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


__all__ = ["ExecutionRecorder"]
