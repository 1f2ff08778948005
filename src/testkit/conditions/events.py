"""Conditions over :class:`ExecutionEvent` and the exact-sequence assertion.

Manifesto:
A run's event stream is a flattened tree.  Rather than re-deriving that
tree, tests describe the stream they expect, one condition per position,
and let :func:`assert_events_match_exactly` report every position that
differs in a single failure.

ARCHITECTURE
────────────
::

    Primitives                      Compositions
      type_(EventType)                event(*conditions)        → all_of
      engine() / container() / test() started()
      unique_id_substring(text)       skipped_with_reason(str | predicate)
      display_name(name)              finished(result_condition)
      reason(str | predicate)         finished_successfully()
      result(result_condition)        finished_with_failure(cause?)
                                      aborted_with_reason(cause?)
                                      container(str | type | Condition)
                                      test(substring, display_name?)
                                      nested_container(type | enclosing, name)
                                      dynamic_test_registered(str | Condition)

    assert_events_match_exactly(events, *conditions)
      → None, or raises EventsMismatchError listing every mismatch

Example::

    assert_events_match_exactly(
        recorder.events(),
        event(engine(), started()),
        event(container("FooTests"), skipped_with_reason("disabled")),
        event(engine(), finished_successfully()),
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from testkit.conditions.core import Condition, ConditionMismatch, all_of
from testkit.conditions.results import status, status_with_cause
from testkit.core.errors import EventsMismatchError
from testkit.core.logging import ensure_configured, get_logger
from testkit.core.preconditions import condition as require, contains_no_none_elements, not_none
from testkit.engine.descriptors import TestDescriptor
from testkit.engine.results import Status, TestExecutionResult
from testkit.execution.events import (
    EventType,
    ExecutionEvent,
    by_payload,
    by_test_descriptor,
    by_type,
)

logger = get_logger(__name__)

EventCondition = Condition[ExecutionEvent]


# ---------------------------------------------------------------------------
# Exact-sequence assertion
# ---------------------------------------------------------------------------


def assert_events_match_exactly(
    events: Iterable[ExecutionEvent],
    *conditions: EventCondition,
) -> None:
    """Assert that *events* match *conditions* position by position.

    Every position is evaluated; a size difference and each unsatisfied
    position are collected and raised together.

    Raises:
        PreconditionViolationError: If an argument is ``None`` or holds ``None``.
        EventsMismatchError: If the sizes differ or any position does not match.
    """
    ensure_configured()
    observed = contains_no_none_elements(
        events, "ExecutionEvent list must not be None or contain None elements"
    )
    expected = contains_no_none_elements(conditions, "conditions must not contain None")

    failures: list[ConditionMismatch] = []
    if len(observed) != len(expected):
        failures.append(ConditionMismatch(None, f"{len(expected)} events", f"{len(observed)} events"))

    for index, condition in enumerate(expected):
        if index >= len(observed):
            failures.append(ConditionMismatch(index, condition.description))
            continue
        actual = observed[index]
        if not condition.matches(actual):
            failures.append(
                ConditionMismatch(index, condition.description, actual, tuple(condition.explain(actual)))
            )

    if failures:
        logger.debug(
            "event_sequence_mismatch",
            expected=len(expected),
            observed=len(observed),
            failures=len(failures),
        )
        raise EventsMismatchError(
            failures,
            expected_count=len(expected),
            actual_count=len(observed),
        )


# ---------------------------------------------------------------------------
# Compositions
# ---------------------------------------------------------------------------


def event(*conditions: EventCondition) -> EventCondition:
    """Event satisfying all of *conditions*."""
    return all_of(*conditions)


def started() -> EventCondition:
    return type_(EventType.STARTED)


def skipped_with_reason(expected: str | Callable[[str], bool]) -> EventCondition:
    return all_of(type_(EventType.SKIPPED), reason(expected))


def finished(result_condition: Condition[TestExecutionResult]) -> EventCondition:
    return all_of(type_(EventType.FINISHED), result(result_condition))


def finished_successfully() -> EventCondition:
    return finished(status(Status.SUCCESSFUL))


def finished_with_failure(cause_condition: Condition[BaseException] | None = None) -> EventCondition:
    return finished(status_with_cause(Status.FAILED, cause_condition))


def aborted_with_reason(cause_condition: Condition[BaseException] | None = None) -> EventCondition:
    return finished(status_with_cause(Status.ABORTED, cause_condition))


def container(target: str | type | EventCondition | None = None) -> EventCondition:
    """A container node, optionally narrowed by id substring, class, or condition."""
    role = Condition(by_test_descriptor(lambda d: d.is_container), "is a container")
    if target is None:
        return role
    if isinstance(target, Condition):
        return all_of(role, target)
    if isinstance(target, type):
        target = _class_name(target)
    return all_of(role, unique_id_substring(target))


def test(unique_id_part: str | None = None, name: str | None = None) -> EventCondition:
    """A test node, optionally narrowed by id substring and display name."""
    role = Condition(by_test_descriptor(lambda d: d.is_test), "is a test")
    parts: list[EventCondition] = [role]
    if unique_id_part is not None:
        parts.append(unique_id_substring(unique_id_part))
    if name is not None:
        parts.append(display_name(name))
    return parts[0] if len(parts) == 1 else all_of(*parts)


test.__test__ = False  # type: ignore[attr-defined]


def nested_container(enclosing: str | type, node: str | None = None) -> EventCondition:
    """A container nested in another, matched by both id fragments.

    ``nested_container(Outer.Inner)`` derives both fragments from the class;
    ``nested_container("Outer", "Inner")`` takes them explicitly.
    For classes defined inside a function the enclosing fragment is the
    class path after ``<locals>.``, without the module.
    """
    if isinstance(enclosing, type):
        cls = enclosing
        outer, _, _ = cls.__qualname__.rpartition(".")
        require(
            bool(outer) and not outer.endswith("<locals>"),
            f"{cls.__qualname__} is not a nested class",
        )
        enclosing, node = _qualified_name(cls.__module__, outer), cls.__name__
    not_none(node, "nested node name must not be None")
    return all_of(container(enclosing), container(node))


def dynamic_test_registered(target: str | EventCondition) -> EventCondition:
    not_none(target, "target must not be None")
    if not isinstance(target, Condition):
        target = unique_id_substring(target)
    return all_of(type_(EventType.DYNAMIC_TEST_REGISTERED), target)


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def type_(expected_type: EventType) -> EventCondition:
    not_none(expected_type, "event type must not be None")
    return Condition(by_type(expected_type), "type is %s", expected_type.name)


def engine() -> EventCondition:
    return Condition(by_test_descriptor(lambda d: d.is_engine), "is an engine")


def unique_id_substring(fragment: str) -> EventCondition:
    """Descriptor with some ``type:value`` id segment containing *fragment*."""
    not_none(fragment, "unique id substring must not be None")

    def _matches(descriptor: TestDescriptor) -> bool:
        return any(fragment in str(segment) for segment in descriptor.unique_id.segments)

    return Condition(
        by_test_descriptor(_matches),
        "descriptor with uniqueId substring '%s'",
        fragment,
    )


def display_name(name: str) -> EventCondition:
    not_none(name, "display name must not be None")
    return Condition(
        by_test_descriptor(lambda d: d.display_name == name),
        "descriptor with display name '%s'",
        name,
    )


def reason(expected: str | Callable[[str], bool]) -> EventCondition:
    not_none(expected, "expected reason must not be None")
    if isinstance(expected, str):
        return Condition(
            by_payload(str, lambda actual: actual == expected),
            "event with reason '%s'",
            expected,
        )
    return Condition(by_payload(str, expected), "event with custom reason predicate")


def result(condition: Condition[TestExecutionResult]) -> EventCondition:
    not_none(condition, "result condition must not be None")
    return Condition(
        by_payload(TestExecutionResult, condition.matches),
        "event with result where %s",
        condition.description,
    )


def _class_name(cls: type) -> str:
    return _qualified_name(cls.__module__, cls.__qualname__)


def _qualified_name(module: str, qualname: str) -> str:
    """``module.qualname``; for function-local classes only the part after ``<locals>.``."""
    _, local, tail = qualname.rpartition("<locals>.")
    if local:
        return tail
    return f"{module}.{qualname}"


__all__ = [
    "EventCondition",
    "assert_events_match_exactly",
    "event",
    "started",
    "skipped_with_reason",
    "finished",
    "finished_successfully",
    "finished_with_failure",
    "aborted_with_reason",
    "container",
    "test",
    "nested_container",
    "dynamic_test_registered",
    "type_",
    "engine",
    "unique_id_substring",
    "display_name",
    "reason",
    "result",
]
