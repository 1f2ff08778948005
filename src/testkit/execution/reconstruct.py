"""Reconstruct Execution records from an ordered event sequence.

A single pass over the events, keeping the latest start timestamp per
node until that node's terminal event consumes it::

    STARTED   → starts[node] = timestamp           (overwrites)
    SKIPPED   → Execution.skipped(start or ts, ts)  then drop starts[node]
    FINISHED  → Execution.finished(start, ts)       then drop starts[node]
    other     → ignored

Executions come out in terminal-event order.  Nodes are not deduplicated:
a node that terminates twice yields two executions.

A ``FINISHED`` event without a recorded start is not an error.  For the
engine node it is a legitimate edge case; for any other node it is logged
at warning level and left for a downstream assertion to catch.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from testkit.core.logging import ensure_configured, get_logger
from testkit.core.preconditions import contains_no_none_elements
from testkit.core.settings import MissingStartPolicy, get_settings
from testkit.engine.descriptors import TestDescriptor
from testkit.engine.results import TestExecutionResult
from testkit.execution.events import EventType, ExecutionEvent
from testkit.execution.models import Execution

logger = get_logger(__name__)


def create_executions(
    events: Iterable[ExecutionEvent],
    missing_start_policy: MissingStartPolicy | None = None,
) -> list[Execution]:
    """Fold *events* into one Execution per terminal event.

    Args:
        events: Events in the order the engine reported them.
        missing_start_policy: How to fill the start of a ``FINISHED`` node that
            never started. Defaults to ``TestkitSettings.missing_start_policy``.

    Raises:
        PreconditionViolationError: If *events* is ``None`` or contains ``None``.
    """
    ensure_configured()
    items = contains_no_none_elements(
        events, "ExecutionEvent list must not be None or contain None elements"
    )
    policy = missing_start_policy or get_settings().missing_start_policy

    executions: list[Execution] = []
    starts: dict[TestDescriptor, datetime] = {}

    for event in items:
        descriptor = event.test_descriptor
        if event.type is EventType.STARTED:
            starts[descriptor] = event.timestamp
        elif event.type is EventType.SKIPPED:
            start = starts.pop(descriptor, None)
            executions.append(
                Execution.skipped(
                    descriptor,
                    start if start is not None else event.timestamp,
                    event.timestamp,
                    event.payload_or_none(str),
                )
            )
        elif event.type is EventType.FINISHED:
            start = starts.pop(descriptor, None)
            if start is None:
                start = _missing_start(event, policy)
            executions.append(
                Execution.finished(
                    descriptor,
                    start,
                    event.timestamp,
                    event.payload_as(TestExecutionResult),
                )
            )

    logger.debug(
        "executions_reconstructed",
        events=len(items),
        executions=len(executions),
        unterminated=len(starts),
    )
    return executions


def _missing_start(event: ExecutionEvent, policy: MissingStartPolicy) -> datetime | None:
    descriptor = event.test_descriptor
    log = logger.debug if descriptor.is_engine else logger.warning
    log(
        "terminal_event_without_start",
        node=str(descriptor.unique_id),
        event_type=event.type.name,
        policy=policy.value,
    )
    if policy is MissingStartPolicy.ABSENT:
        return None
    return event.timestamp


__all__ = ["create_executions"]
