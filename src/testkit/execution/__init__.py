"""Recording lifecycle events and reconstructing executions from them.

Architecture::

    events.py        ExecutionEvent, EventType, event predicates
    recorder.py      ExecutionRecorder (thread-safe sink, engine listener)
    models.py        Execution, TerminationInfo
    reconstruct.py   create_executions (single-pass fold)
    executions.py    Executions query facade
    results.py       Events facade, FilteredResults, ExecutionResults
"""

from testkit.execution.events import (
    EventType,
    ExecutionEvent,
    by_payload,
    by_test_descriptor,
    by_type,
    utcnow,
)
from testkit.execution.executions import Executions
from testkit.execution.models import Execution, TerminationInfo
from testkit.execution.reconstruct import create_executions
from testkit.execution.recorder import ExecutionRecorder
from testkit.execution.results import Events, ExecutionResults, FilteredResults

__all__ = [
    "EventType",
    "ExecutionEvent",
    "by_payload",
    "by_test_descriptor",
    "by_type",
    "utcnow",
    "Executions",
    "Execution",
    "TerminationInfo",
    "create_executions",
    "ExecutionRecorder",
    "Events",
    "ExecutionResults",
    "FilteredResults",
]
