"""Terminal outcome of a finished node."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from testkit.core.preconditions import not_none


class Status(str, Enum):
    """Outcome category of a node that finished executing."""

    SUCCESSFUL = "successful"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass(frozen=True)
class TestExecutionResult:
    """Outcome of a finished node, optionally carrying the exception that caused it.

    Example:
        >>> TestExecutionResult.failed(AssertionError("expected 1"))
        TestExecutionResult(status=<Status.FAILED: 'failed'>, throwable=AssertionError('expected 1'))
    """

    __test__ = False

    status: Status
    throwable: BaseException | None = None

    @classmethod
    def successful(cls) -> TestExecutionResult:
        return cls(Status.SUCCESSFUL)

    @classmethod
    def aborted(cls, throwable: BaseException | None = None) -> TestExecutionResult:
        return cls(Status.ABORTED, throwable)

    @classmethod
    def failed(cls, throwable: BaseException | None = None) -> TestExecutionResult:
        return cls(Status.FAILED, throwable)

    def __post_init__(self) -> None:
        not_none(self.status, "status must not be None")

    @property
    def is_successful(self) -> bool:
        return self.status is Status.SUCCESSFUL

    def __str__(self) -> str:
        if self.throwable is None:
            return self.status.name
        return f"{self.status.name} ({type(self.throwable).__name__}: {self.throwable})"


__all__ = ["Status", "TestExecutionResult"]
