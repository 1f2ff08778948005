"""Events facade and run results.

``ExecutionResults`` is what a recorded run hands back: every event, plus
views restricted to container nodes and to test nodes.  Each view exposes
its raw ``Events`` and the ``Executions`` reconstructed from them::

    ExecutionResults
    ├── all()         → FilteredResults("All")
    ├── containers()  → FilteredResults("Container")
    ├── tests()       → FilteredResults("Test")
    ├── events()      → all().events()
    └── engine_result

    FilteredResults
    ├── events()      → Events
    └── executions()  → Executions (same label)

    Events
    ├── list() / stream() / count() / map() / filter()
    ├── skipped() / started() / finished() / aborted() / succeeded() / failed()
    ├── dynamically_registered() / reporting_entry_published()
    ├── executions()
    ├── assert_events_match_exactly(*conditions)
    └── debug(out=None)
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TextIO, TypeVar

from testkit.core.preconditions import contains_no_none_elements, not_none
from testkit.core.settings import get_settings
from testkit.engine.results import Status, TestExecutionResult
from testkit.execution.events import EventPredicate, EventType, ExecutionEvent, by_payload, by_type
from testkit.execution.executions import Executions

R = TypeVar("R")


class Events:
    """Immutable, labelled collection of :class:`ExecutionEvent` values."""

    __slots__ = ("_events", "_category")

    def __init__(self, events: Iterable[ExecutionEvent], category: str) -> None:
        self._events: tuple[ExecutionEvent, ...] = tuple(
            contains_no_none_elements(events, "ExecutionEvent list must not be None or contain None elements")
        )
        self._category = not_none(category, "category must not be None")

    # --- Accessors -----------------------------------------------------------

    @property
    def category(self) -> str:
        return self._category

    def list(self) -> list[ExecutionEvent]:
        return list(self._events)

    def stream(self) -> Iterator[ExecutionEvent]:
        return iter(self._events)

    def map(self, mapper: Callable[[ExecutionEvent], R]) -> Iterator[R]:
        not_none(mapper, "Mapping function must not be None")
        return (mapper(event) for event in self._events)

    def filter(self, predicate: Callable[[ExecutionEvent], bool]) -> Iterator[ExecutionEvent]:
        not_none(predicate, "Filter predicate must not be None")
        return (event for event in self._events if predicate(event))

    def executions(self) -> Executions:
        """Executions reconstructed from these events, under the same label."""
        return Executions.from_events(self._events, self._category)

    # --- Statistics ----------------------------------------------------------

    def count(self) -> int:
        return len(self._events)

    # --- Built-in Filters ----------------------------------------------------

    def skipped(self) -> Events:
        return self._by(by_type(EventType.SKIPPED), "Skipped")

    def started(self) -> Events:
        return self._by(by_type(EventType.STARTED), "Started")

    def finished(self) -> Events:
        return self._by(by_type(EventType.FINISHED), "Finished")

    def aborted(self) -> Events:
        return self._by(_finished_with(Status.ABORTED), "Aborted")

    def succeeded(self) -> Events:
        return self._by(_finished_with(Status.SUCCESSFUL), "Successful")

    def failed(self) -> Events:
        return self._by(_finished_with(Status.FAILED), "Failed")

    def dynamically_registered(self) -> Events:
        return self._by(by_type(EventType.DYNAMIC_TEST_REGISTERED), "Dynamically Registered")

    def reporting_entry_published(self) -> Events:
        return self._by(by_type(EventType.REPORTING_ENTRY_PUBLISHED), "Reporting Entry Published")

    # --- Assertions ----------------------------------------------------------

    def assert_events_match_exactly(self, *conditions: Any) -> None:
        """See :func:`testkit.conditions.events.assert_events_match_exactly`."""
        from testkit.conditions.events import assert_events_match_exactly

        assert_events_match_exactly(self._events, *conditions)

    # --- Diagnostics ---------------------------------------------------------

    def debug(self, out: TextIO | None = None) -> Events:
        """Print all events to *out* (standard output by default)."""
        stream = out if out is not None else sys.stdout
        indent = get_settings().debug_indent
        print(f"{self._category} Events:", file=stream)
        for event in self._events:
            print(f"{indent}{event}", file=stream)
        return self

    # --- Internals -----------------------------------------------------------

    def _by(self, predicate: EventPredicate, label: str) -> Events:
        return Events((e for e in self._events if predicate(e)), f"{self._category} {label}")

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[ExecutionEvent]:
        return iter(self._events)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Events):
            return NotImplemented
        return self._category == other._category and self._events == other._events

    def __hash__(self) -> int:
        return hash((self._category, self._events))

    def __repr__(self) -> str:
        return f"Events(category={self._category!r}, count={len(self._events)})"


def _finished_with(status: Status) -> EventPredicate:
    return by_payload(TestExecutionResult, lambda result: result.status is status)


class FilteredResults:
    """Events and executions for one subset of a run."""

    def __init__(self, events: Iterable[ExecutionEvent], category: str) -> None:
        self._events = Events(events, category)

    def events(self) -> Events:
        return self._events

    def executions(self) -> Executions:
        return self._events.executions()


class ExecutionResults:
    """Everything recorded during one run."""

    def __init__(
        self,
        events: Iterable[ExecutionEvent],
        engine_result: TestExecutionResult | None = None,
    ) -> None:
        items = contains_no_none_elements(
            events, "ExecutionEvent list must not be None or contain None elements"
        )
        self.engine_result = engine_result
        self._all = FilteredResults(items, "All")
        self._containers = FilteredResults(
            (e for e in items if e.test_descriptor.is_container), "Container"
        )
        self._tests = FilteredResults((e for e in items if e.test_descriptor.is_test), "Test")

    def all(self) -> FilteredResults:
        return self._all

    def containers(self) -> FilteredResults:
        return self._containers

    def tests(self) -> FilteredResults:
        return self._tests

    def events(self) -> Events:
        """Shortcut for ``all().events()``."""
        return self._all.events()

    def executions(self) -> Executions:
        """Shortcut for ``all().executions()``."""
        return self._all.executions()


__all__ = ["Events", "FilteredResults", "ExecutionResults"]
