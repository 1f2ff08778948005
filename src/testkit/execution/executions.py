"""Executions — a fluent, immutable query facade over Execution records.

Manifesto:
Assertions about a run usually start from a category ("failed tests",
"skipped containers") rather than from a single node.  Each filter here
returns a *new* facade with a longer label, so filters chain freely and
the label always says how the collection was derived.

ARCHITECTURE
────────────
::

    Executions(executions, category)
      ├── list() / stream() / count()      ─ read-only views
      ├── map(fn) / filter(pred)           ─ lazy iterators
      ├── skipped() / started()            ─ by termination kind
      ├── finished() / succeeded()
      │   aborted() / failed()             ─ by result status
      ├── assert_count(n)                  ─ ExecutionsAssertionError on mismatch
      └── debug(out=None)                  ─ "<category> Executions:" + one line each

Example::

    executions = Executions.from_events(recorder.events(), "All")
    assert executions.finished().failed().count() == 0
    executions.skipped().debug()
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TextIO, TypeVar

from testkit.core.errors import ExecutionsAssertionError
from testkit.core.preconditions import contains_no_none_elements, not_none
from testkit.core.settings import MissingStartPolicy, get_settings
from testkit.engine.results import Status
from testkit.execution.events import ExecutionEvent
from testkit.execution.models import Execution, TerminationInfo
from testkit.execution.reconstruct import create_executions

R = TypeVar("R")


class Executions:
    """Immutable, labelled collection of :class:`Execution` records."""

    __slots__ = ("_executions", "_category")

    def __init__(self, executions: Iterable[Execution], category: str) -> None:
        self._executions: tuple[Execution, ...] = tuple(
            contains_no_none_elements(executions, "Execution list must not be None or contain None elements")
        )
        self._category = not_none(category, "category must not be None")

    @classmethod
    def from_events(
        cls,
        events: Iterable[ExecutionEvent],
        category: str,
        missing_start_policy: MissingStartPolicy | None = None,
    ) -> Executions:
        """Reconstruct executions from *events* and wrap them."""
        return cls(create_executions(events, missing_start_policy), category)

    # --- Accessors -----------------------------------------------------------

    @property
    def category(self) -> str:
        return self._category

    def list(self) -> list[Execution]:
        """Copy of the executions; changing it does not affect this facade."""
        return list(self._executions)

    def stream(self) -> Iterator[Execution]:
        return iter(self._executions)

    def map(self, mapper: Callable[[Execution], R]) -> Iterator[R]:
        """Shortcut for ``map(mapper, executions.stream())``."""
        not_none(mapper, "Mapping function must not be None")
        return (mapper(execution) for execution in self._executions)

    def filter(self, predicate: Callable[[Execution], bool]) -> Iterator[Execution]:
        """Shortcut for ``filter(predicate, executions.stream())``."""
        not_none(predicate, "Filter predicate must not be None")
        return (execution for execution in self._executions if predicate(execution))

    # --- Statistics ----------------------------------------------------------

    def count(self) -> int:
        return len(self._executions)

    # --- Built-in Filters ----------------------------------------------------

    def skipped(self) -> Executions:
        return self._by_termination(lambda info: info.is_skipped, "Skipped")

    def started(self) -> Executions:
        return self._by_termination(lambda info: info.is_not_skipped, "Started")

    def finished(self) -> Executions:
        return self._by_termination(lambda info: info.is_executed, "Finished")

    def aborted(self) -> Executions:
        return self._by_termination(lambda info: info.has_status(Status.ABORTED), "Aborted")

    def succeeded(self) -> Executions:
        return self._by_termination(lambda info: info.has_status(Status.SUCCESSFUL), "Successful")

    def failed(self) -> Executions:
        return self._by_termination(lambda info: info.has_status(Status.FAILED), "Failed")

    # --- Assertions ----------------------------------------------------------

    def assert_count(self, expected: int) -> Executions:
        """Raise :class:`ExecutionsAssertionError` unless there are *expected* executions."""
        actual = self.count()
        if actual != expected:
            raise ExecutionsAssertionError(
                f"Expected {expected} executions, got {actual}", self._category
            )
        return self

    # --- Diagnostics ---------------------------------------------------------

    def debug(self, out: TextIO | None = None) -> Executions:
        """Print all executions to *out* (standard output by default).

        Returns:
            This facade, for chaining.
        """
        stream = out if out is not None else sys.stdout
        indent = get_settings().debug_indent
        print(f"{self._category} Executions:", file=stream)
        for execution in self._executions:
            print(f"{indent}{execution}", file=stream)
        return self

    # --- Internals -----------------------------------------------------------

    def _by_termination(self, predicate: Callable[[TerminationInfo], bool], label: str) -> Executions:
        return Executions(
            (e for e in self._executions if predicate(e.termination_info)),
            f"{self._category} {label}",
        )

    def __len__(self) -> int:
        return len(self._executions)

    def __iter__(self) -> Iterator[Execution]:
        return iter(self._executions)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Executions):
            return NotImplemented
        return self._category == other._category and self._executions == other._executions

    def __hash__(self) -> int:
        return hash((self._category, self._executions))

    def __repr__(self) -> str:
        return f"Executions(category={self._category!r}, count={len(self._executions)})"


__all__ = ["Executions"]
