"""Execution domain models.

Defines the reconstructed view of one node's run:
- TerminationInfo: how a node ended (skipped with a reason, or executed with a result)
- Execution: start/end/duration plus the termination info

Both are frozen; they are built only by :mod:`testkit.execution.reconstruct`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from testkit.core.errors import PreconditionViolationError
from testkit.core.preconditions import not_none
from testkit.engine.descriptors import TestDescriptor
from testkit.engine.results import Status, TestExecutionResult


@dataclass(frozen=True)
class TerminationInfo:
    """Tagged value: ``skipped(reason)`` or ``executed(result)``."""

    skipped: bool
    _skip_reason: str | None = field(default=None, repr=False)
    _execution_result: TestExecutionResult | None = field(default=None, repr=False)

    @classmethod
    def of_skipped(cls, reason: str | None) -> TerminationInfo:
        return cls(skipped=True, _skip_reason=reason)

    @classmethod
    def of_executed(cls, result: TestExecutionResult) -> TerminationInfo:
        not_none(result, "TestExecutionResult must not be None")
        return cls(skipped=False, _execution_result=result)

    @property
    def is_skipped(self) -> bool:
        return self.skipped

    @property
    def is_not_skipped(self) -> bool:
        return not self.skipped

    @property
    def is_executed(self) -> bool:
        return not self.skipped

    @property
    def skip_reason(self) -> str | None:
        """Reason the node was skipped.

        Raises:
            PreconditionViolationError: If the node was executed.
        """
        if not self.skipped:
            raise PreconditionViolationError("No skip reason: the node was executed")
        return self._skip_reason

    @property
    def execution_result(self) -> TestExecutionResult:
        """Result of the execution.

        Raises:
            PreconditionViolationError: If the node was skipped.
        """
        if self.skipped:
            raise PreconditionViolationError("No execution result: the node was skipped")
        assert self._execution_result is not None
        return self._execution_result

    def has_status(self, status: Status) -> bool:
        return not self.skipped and self.execution_result.status is status

    def __str__(self) -> str:
        if self.skipped:
            return f"skipped({self._skip_reason!r})"
        return f"executed({self._execution_result})"


@dataclass(frozen=True)
class Execution:
    """Immutable record of one node's run.

    ``duration`` is derived from ``start_instant`` and ``end_instant``; it is
    ``None`` only when the start is absent (see ``MissingStartPolicy.ABSENT``).
    """

    test_descriptor: TestDescriptor
    start_instant: datetime | None
    end_instant: datetime
    termination_info: TerminationInfo
    duration: timedelta | None = field(init=False)

    def __post_init__(self) -> None:
        not_none(self.test_descriptor, "test descriptor must not be None")
        not_none(self.end_instant, "end instant must not be None")
        not_none(self.termination_info, "termination info must not be None")
        duration = None
        if self.start_instant is not None:
            duration = self.end_instant - self.start_instant
        object.__setattr__(self, "duration", duration)

    @classmethod
    def finished(
        cls,
        test_descriptor: TestDescriptor,
        start_instant: datetime | None,
        end_instant: datetime,
        result: TestExecutionResult,
    ) -> Execution:
        return cls(test_descriptor, start_instant, end_instant, TerminationInfo.of_executed(result))

    @classmethod
    def skipped(
        cls,
        test_descriptor: TestDescriptor,
        start_instant: datetime,
        end_instant: datetime,
        reason: str | None,
    ) -> Execution:
        return cls(test_descriptor, start_instant, end_instant, TerminationInfo.of_skipped(reason))

    def __str__(self) -> str:
        start = self.start_instant.isoformat() if self.start_instant else "<none>"
        return (
            f"Execution[test_descriptor={self.test_descriptor}, "
            f"start_instant={start}, "
            f"end_instant={self.end_instant.isoformat()}, "
            f"duration={self.duration}, "
            f"termination_info={self.termination_info}]"
        )


__all__ = ["TerminationInfo", "Execution"]
