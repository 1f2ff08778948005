"""Execution Events — immutable lifecycle notifications.

WHY
───
The engine reports what happens to each node as it happens.  Keeping
those reports as immutable values, in arrival order, is what lets both
consumers (the execution fold and the condition DSL) work from the same
history without coordinating.

ARCHITECTURE
────────────
::

    ExecutionEvent (frozen)
      ├── type             ─ STARTED / SKIPPED / FINISHED / DYNAMIC_TEST_REGISTERED / ...
      ├── test_descriptor  ─ which node
      ├── timestamp        ─ when (timezone-aware UTC)
      └── payload          ─ skip reason (str) | TestExecutionResult | read-only reporting entry | None
                             (compared for equality, left out of the hash)

    Events are append-only; never update or delete.

Related modules:
    recorder.py     — appends events as the engine reports them
    reconstruct.py  — folds events into Execution records
    conditions/     — predicates over single events
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType
from enum import Enum
from typing import Any, TypeVar

from testkit.core.errors import PreconditionViolationError
from testkit.core.preconditions import not_none
from testkit.engine.descriptors import TestDescriptor
from testkit.engine.results import TestExecutionResult

T = TypeVar("T")


def utcnow() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(UTC)


class EventType(str, Enum):
    """Kind of lifecycle notification."""

    DYNAMIC_TEST_REGISTERED = "dynamic_test_registered"
    STARTED = "started"
    SKIPPED = "skipped"
    FINISHED = "finished"
    REPORTING_ENTRY_PUBLISHED = "reporting_entry_published"

    @property
    def is_terminal(self) -> bool:
        return self in (EventType.SKIPPED, EventType.FINISHED)


@dataclass(frozen=True)
class ExecutionEvent:
    """One lifecycle notification for one node.

    Use the factory class methods rather than the constructor; they keep
    payload types consistent with the event type.

    Example:
        >>> event = ExecutionEvent.skipped(descriptor, "disabled via @Ignore")
        >>> event.payload_as(str)
        'disabled via @Ignore'
    """

    type: EventType
    test_descriptor: TestDescriptor
    timestamp: datetime = field(default_factory=utcnow)
    payload: Any = field(default=None, hash=False)

    def __post_init__(self) -> None:
        not_none(self.type, "event type must not be None")
        not_none(self.test_descriptor, "test descriptor must not be None")
        not_none(self.timestamp, "timestamp must not be None")

    # --- Factories ---------------------------------------------------------

    @classmethod
    def dynamic_test_registered(
        cls, test_descriptor: TestDescriptor, timestamp: datetime | None = None
    ) -> ExecutionEvent:
        return cls(EventType.DYNAMIC_TEST_REGISTERED, test_descriptor, timestamp or utcnow())

    @classmethod
    def started(
        cls, test_descriptor: TestDescriptor, timestamp: datetime | None = None
    ) -> ExecutionEvent:
        return cls(EventType.STARTED, test_descriptor, timestamp or utcnow())

    @classmethod
    def skipped(
        cls,
        test_descriptor: TestDescriptor,
        reason: str,
        timestamp: datetime | None = None,
    ) -> ExecutionEvent:
        return cls(EventType.SKIPPED, test_descriptor, timestamp or utcnow(), reason)

    @classmethod
    def finished(
        cls,
        test_descriptor: TestDescriptor,
        result: TestExecutionResult,
        timestamp: datetime | None = None,
    ) -> ExecutionEvent:
        not_none(result, "TestExecutionResult must not be None")
        return cls(EventType.FINISHED, test_descriptor, timestamp or utcnow(), result)

    @classmethod
    def reporting_entry_published(
        cls,
        test_descriptor: TestDescriptor,
        entry: dict[str, str],
        timestamp: datetime | None = None,
    ) -> ExecutionEvent:
        return cls(
            EventType.REPORTING_ENTRY_PUBLISHED,
            test_descriptor,
            timestamp or utcnow(),
            MappingProxyType(dict(entry)),
        )

    # --- Payload access ----------------------------------------------------

    def payload_or_none(self, payload_type: type[T]) -> T | None:
        """Return the payload if it is a *payload_type*, else ``None``."""
        if isinstance(self.payload, payload_type):
            return self.payload
        return None

    def payload_as(self, payload_type: type[T]) -> T:
        """Return the payload as *payload_type* or raise.

        Raises:
            PreconditionViolationError: If the payload is missing or of another type.
        """
        not_none(payload_type, "payload type must not be None")
        if not isinstance(self.payload, payload_type):
            raise PreconditionViolationError(
                f"Payload of {self.type.name} event is not a {payload_type.__name__}: "
                f"{self.payload!r}"
            ).with_context(node=str(self.test_descriptor.unique_id), event_type=self.type.name)
        return self.payload

    def __str__(self) -> str:
        text = f"{self.type.name} {self.test_descriptor} @ {self.timestamp.isoformat()}"
        if isinstance(self.payload, Mapping):
            text += f" payload={dict(self.payload)}"
        elif self.payload is not None:
            text += f" payload={self.payload}"
        return text


# ---------------------------------------------------------------------------
# Event predicates
# ---------------------------------------------------------------------------

EventPredicate = Callable[[ExecutionEvent], bool]


def by_type(event_type: EventType) -> EventPredicate:
    """Predicate matching events of *event_type*."""
    not_none(event_type, "event type must not be None")
    return lambda event: event.type is event_type


def by_test_descriptor(predicate: Callable[[TestDescriptor], bool]) -> EventPredicate:
    """Predicate applying *predicate* to the event's descriptor."""
    not_none(predicate, "descriptor predicate must not be None")
    return lambda event: predicate(event.test_descriptor)


def by_payload(payload_type: type[T], predicate: Callable[[T], bool]) -> EventPredicate:
    """Predicate applying *predicate* to a payload of *payload_type*.

    Events without a payload of that type never match.
    """
    not_none(payload_type, "payload type must not be None")
    not_none(predicate, "payload predicate must not be None")

    def _matches(event: ExecutionEvent) -> bool:
        payload = event.payload_or_none(payload_type)
        return payload is not None and bool(predicate(payload))

    return _matches


__all__ = [
    "EventType",
    "ExecutionEvent",
    "EventPredicate",
    "by_type",
    "by_test_descriptor",
    "by_payload",
    "utcnow",
]
