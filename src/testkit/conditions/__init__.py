"""Condition DSL for asserting on recorded event streams.

Architecture::

    core.py      Condition, all_of / any_of / not_, ConditionMismatch
    events.py    event conditions + assert_events_match_exactly
    results.py   result status/cause conditions, exception conditions
"""

from testkit.conditions.core import Condition, ConditionMismatch, all_of, any_of, not_
from testkit.conditions.events import (
    aborted_with_reason,
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
    result,
    skipped_with_reason,
    started,
    test,
    type_,
    unique_id_substring,
)
from testkit.conditions.results import (
    cause,
    is_instance_of,
    message,
    message_contains,
    message_matching,
    status,
)

__all__ = [
    "Condition",
    "ConditionMismatch",
    "all_of",
    "any_of",
    "not_",
    "aborted_with_reason",
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
    "result",
    "skipped_with_reason",
    "started",
    "test",
    "type_",
    "unique_id_substring",
    "cause",
    "is_instance_of",
    "message",
    "message_contains",
    "message_matching",
    "status",
]
