"""Condition — a named, composable predicate.

A condition pairs a boolean test with a human-readable description.  The
description is what an assertion prints when the condition does not hold,
so compositions build theirs from their parts::

    all_of(engine(), started()).description
    # "all of:[is an engine, type is STARTED]"

``explain(value)`` walks a composition and returns the descriptions of the
leaf conditions that did not hold, which is what failure reports list
under "unmet".
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from testkit.core.preconditions import contains_no_none_elements, not_none

T = TypeVar("T")


class Condition(Generic[T]):
    """Boolean test over a single value, with a description.

    Parameters
    ----------
    predicate
        Callable returning truthy when the value satisfies the condition.
    description
        Description, optionally a ``%``-format string filled from *args*.
    """

    __slots__ = ("_predicate", "_description", "_children", "_combinator")

    def __init__(self, predicate: Callable[[T], Any], description: str, *args: Any) -> None:
        self._predicate = not_none(predicate, "predicate must not be None")
        not_none(description, "description must not be None")
        self._description = description % args if args else description
        self._children: tuple[Condition[Any], ...] = ()
        self._combinator: str | None = None

    @property
    def description(self) -> str:
        return self._description

    def matches(self, value: T) -> bool:
        return bool(self._predicate(value))

    __call__ = matches

    def explain(self, value: T) -> list[str]:
        """Descriptions of the leaf conditions that *value* does not satisfy."""
        if self.matches(value):
            return []
        if self._combinator == "all" and self._children:
            unmet: list[str] = []
            for child in self._children:
                unmet.extend(child.explain(value))
            return unmet or [self._description]
        return [self._description]

    def __and__(self, other: Condition[T]) -> Condition[T]:
        return all_of(self, other)

    def __or__(self, other: Condition[T]) -> Condition[T]:
        return any_of(self, other)

    def __invert__(self) -> Condition[T]:
        return not_(self)

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"Condition({self._description!r})"


def _composite(
    conditions: Sequence[Condition[Any]],
    combinator: str,
    predicate: Callable[[Any], bool],
) -> Condition[Any]:
    descriptions = ", ".join(c.description for c in conditions)
    composite: Condition[Any] = Condition(predicate, f"{combinator} of:[{descriptions}]")
    composite._children = tuple(conditions)
    composite._combinator = combinator
    return composite


def all_of(*conditions: Condition[T]) -> Condition[T]:
    """Condition holding only when every one of *conditions* holds."""
    items = contains_no_none_elements(conditions, "conditions must not contain None")
    return _composite(items, "all", lambda value: all(c.matches(value) for c in items))


def any_of(*conditions: Condition[T]) -> Condition[T]:
    """Condition holding when at least one of *conditions* holds."""
    items = contains_no_none_elements(conditions, "conditions must not contain None")
    return _composite(items, "any", lambda value: any(c.matches(value) for c in items))


def not_(condition: Condition[T]) -> Condition[T]:
    not_none(condition, "condition must not be None")
    return Condition(lambda value: not condition.matches(value), "not:<%s>", condition.description)


@dataclass(frozen=True)
class ConditionMismatch:
    """One entry in an aggregate assertion failure.

    ``index`` is ``None`` for the length mismatch entry; ``actual`` is ``None``
    for a position past the end of the observed sequence.
    """

    index: int | None
    expected: str
    actual: Any = None
    unmet: tuple[str, ...] = field(default=())

    def __str__(self) -> str:
        if self.index is None:
            return f"size: expected {self.expected} but observed {self.actual}"
        if self.actual is None:
            return f"[{self.index}] expected: {self.expected}\n      actual: <no event>"
        text = f"[{self.index}] expected: {self.expected}\n      actual: {self.actual}"
        if self.unmet:
            text += "\n      unmet: " + "; ".join(self.unmet)
        return text


__all__ = ["Condition", "ConditionMismatch", "all_of", "any_of", "not_"]
