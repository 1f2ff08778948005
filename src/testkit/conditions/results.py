"""Conditions over :class:`TestExecutionResult` and the exceptions it carries."""

from __future__ import annotations

import re
from collections.abc import Callable

from testkit.conditions.core import Condition, all_of
from testkit.core.preconditions import not_none
from testkit.engine.results import Status, TestExecutionResult


def status(expected_status: Status) -> Condition[TestExecutionResult]:
    not_none(expected_status, "status must not be None")
    return Condition(
        lambda result: result.status is expected_status,
        "execution result with status %s",
        expected_status.name,
    )


def cause(condition: Condition[BaseException]) -> Condition[TestExecutionResult]:
    """Result whose throwable exists and satisfies *condition*."""
    not_none(condition, "cause condition must not be None")
    return Condition(
        lambda result: result.throwable is not None and condition.matches(result.throwable),
        "execution result with cause where %s",
        condition.description,
    )


def status_with_cause(
    expected_status: Status,
    cause_condition: Condition[BaseException] | None = None,
) -> Condition[TestExecutionResult]:
    if cause_condition is None:
        return status(expected_status)
    return all_of(status(expected_status), cause(cause_condition))


# ---------------------------------------------------------------------------
# Throwable conditions
# ---------------------------------------------------------------------------


def is_instance_of(exception_type: type[BaseException]) -> Condition[BaseException]:
    not_none(exception_type, "exception type must not be None")
    return Condition(
        lambda exc: isinstance(exc, exception_type),
        "instance of %s",
        exception_type.__name__,
    )


def message(expected: str) -> Condition[BaseException]:
    not_none(expected, "expected message must not be None")
    return Condition(lambda exc: str(exc) == expected, "message '%s'", expected)


def message_contains(fragment: str) -> Condition[BaseException]:
    not_none(fragment, "message fragment must not be None")
    return Condition(lambda exc: fragment in str(exc), "message containing '%s'", fragment)


def message_matching(predicate: Callable[[str], bool] | str) -> Condition[BaseException]:
    """Message matching a regex (when given a string) or a custom predicate."""
    not_none(predicate, "message predicate must not be None")
    if isinstance(predicate, str):
        pattern = re.compile(predicate)
        return Condition(
            lambda exc: pattern.search(str(exc)) is not None,
            "message matching /%s/",
            predicate,
        )
    return Condition(lambda exc: predicate(str(exc)), "message with custom predicate")


__all__ = [
    "status",
    "cause",
    "status_with_cause",
    "is_instance_of",
    "message",
    "message_contains",
    "message_matching",
]
