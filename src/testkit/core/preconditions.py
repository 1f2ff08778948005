"""Argument guards for public call boundaries.

Every guard raises :class:`~testkit.core.errors.PreconditionViolationError`
on failure and otherwise returns the checked value, so guards can be used
inline::

    self._events = tuple(contains_no_none_elements(events, "events must not contain None"))
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from testkit.core.errors import PreconditionViolationError

T = TypeVar("T")


def not_none(value: T | None, message: str) -> T:
    """Return *value* unless it is ``None``."""
    if value is None:
        raise PreconditionViolationError(message)
    return value


def not_blank(value: str | None, message: str) -> str:
    """Return *value* unless it is ``None`` or whitespace only."""
    if value is None or not value.strip():
        raise PreconditionViolationError(message)
    return value


def contains_no_none_elements(values: Iterable[T] | None, message: str) -> list[T]:
    """Materialize *values* into a list, rejecting ``None`` and ``None`` elements."""
    if values is None:
        raise PreconditionViolationError(message)
    items = list(values)
    if any(item is None for item in items):
        raise PreconditionViolationError(message)
    return items


def condition(predicate: bool, message: str) -> None:
    """Raise unless *predicate* holds."""
    if not predicate:
        raise PreconditionViolationError(message)


__all__ = ["not_none", "not_blank", "contains_no_none_elements", "condition"]
