"""
Testkit - record a hierarchical test run and assert on what happened.

Two independent views of the same recorded event stream:

- testkit.execution: ExecutionRecorder → events → Executions query facade
- testkit.conditions: event conditions + assert_events_match_exactly
"""

__version__ = "0.1.0"

from testkit.conditions import (  # noqa: E402
    Condition,
    aborted_with_reason,
    all_of,
    assert_events_match_exactly,
    container,
    display_name,
    dynamic_test_registered,
    engine,
    event,
    finished,
    finished_successfully,
    finished_with_failure,
    nested_container,
    reason,
    skipped_with_reason,
    started,
    type_,
    unique_id_substring,
)
from testkit.core.errors import (  # noqa: E402
    EventsMismatchError,
    PreconditionViolationError,
    TestkitError,
)
from testkit.core.settings import MissingStartPolicy, TestkitSettings, get_settings  # noqa: E402
from testkit.engine import (  # noqa: E402
    NodeRole,
    Status,
    TestDescriptor,
    TestExecutionResult,
    UniqueId,
)
from testkit.execution import (  # noqa: E402
    EventType,
    Events,
    Execution,
    ExecutionEvent,
    ExecutionRecorder,
    ExecutionResults,
    Executions,
    TerminationInfo,
    create_executions,
)

__all__ = [
    "Condition",
    "aborted_with_reason",
    "all_of",
    "assert_events_match_exactly",
    "container",
    "display_name",
    "dynamic_test_registered",
    "engine",
    "event",
    "finished",
    "finished_successfully",
    "finished_with_failure",
    "nested_container",
    "reason",
    "skipped_with_reason",
    "started",
    "type_",
    "unique_id_substring",
    "MissingStartPolicy",
    "TestkitSettings",
    "get_settings",
    "EventsMismatchError",
    "PreconditionViolationError",
    "TestkitError",
    "NodeRole",
    "Status",
    "TestDescriptor",
    "TestExecutionResult",
    "UniqueId",
    "EventType",
    "Events",
    "Execution",
    "ExecutionEvent",
    "ExecutionRecorder",
    "ExecutionResults",
    "Executions",
    "TerminationInfo",
    "create_executions",
]
