"""
Structured error types for testkit.

Provides a small hierarchy of typed errors carrying a category, structured
context and an optional chained cause.  Two families matter to callers:

- **Precondition violations:** programmer errors at a call boundary
  (``None`` where a value is required, a list holding ``None``).  Raised
  immediately and never recovered from.
- **Assertion failures:** raised by the condition DSL and the query
  facades.  They subclass ``AssertionError`` so pytest renders them as
  ordinary test failures.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      TestkitError                            │
        │  (category, context, cause)                                  │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  PreconditionViolationError   ConfigError                    │
        │  (PRECONDITION, ValueError)   (CONFIG)                       │
        │                                                              │
        │  ReconstructionError          TestkitAssertionError          │
        │  (RECONSTRUCTION)             (ASSERTION, AssertionError)    │
        │                                    │                         │
        │                       EventsMismatchError                    │
        │                       ExecutionsAssertionError               │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = PreconditionViolationError("events must not be None")
    >>> error.category
    <ErrorCategory.PRECONDITION: 'PRECONDITION'>

    >>> error = TestkitError("boom").with_context(node="[engine:e]")
    >>> error.context.node
    '[engine:e]'

Guardrails:
    ❌ DON'T: Raise bare ``AssertionError`` from assertion helpers
    ✅ DO: Raise a ``TestkitAssertionError`` subclass with structured data

Tags:
    error-handling, exception-hierarchy, error-context, testkit
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification."""

    PRECONDITION = "PRECONDITION"      # Invalid arguments at a call boundary
    CONFIG = "CONFIG"                  # Missing or invalid settings
    RECONSTRUCTION = "RECONSTRUCTION"  # Inconsistent event stream
    ASSERTION = "ASSERTION"            # Observed output differs from expectation
    INTERNAL = "INTERNAL"              # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        node: Rendered unique id of the node involved, if any
        event_type: Event type involved, if any
        category_label: Label of the event/execution collection involved
        metadata: Additional key-value pairs
    """

    node: str | None = None
    event_type: str | None = None
    category_label: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["node", "event_type", "category_label"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TestkitError(Exception):
    """
    Base exception for all testkit errors.

    Subclasses set ``default_category`` so callers and log processors can
    route on ``category`` without isinstance chains.
    """

    __test__ = False  # not a pytest test class

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TestkitError:
        """
        Add context to this error (fluent API).

        Usage:
            raise ReconstructionError("No start").with_context(node=str(uid))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CALLER ERRORS
# =============================================================================


class PreconditionViolationError(TestkitError, ValueError):
    """A required argument was ``None``, blank, or otherwise invalid."""

    default_category = ErrorCategory.PRECONDITION


class ConfigError(TestkitError):
    """Settings could not be loaded or hold an invalid value."""

    default_category = ErrorCategory.CONFIG


class ReconstructionError(TestkitError):
    """The event stream cannot be folded into executions."""

    default_category = ErrorCategory.RECONSTRUCTION


# =============================================================================
# ASSERTION ERRORS
# =============================================================================


class TestkitAssertionError(TestkitError, AssertionError):
    """Base class for assertion failures raised by testkit helpers."""

    default_category = ErrorCategory.ASSERTION


class EventsMismatchError(TestkitAssertionError):
    """
    Aggregate failure of an exact-sequence assertion.

    Carries every mismatch found, never only the first one.

    Attributes:
        failures: Structured mismatch records (``ConditionMismatch``)
        expected_count: Number of conditions supplied
        actual_count: Number of events observed
    """

    def __init__(
        self,
        failures: list[Any],
        *,
        expected_count: int,
        actual_count: int,
    ):
        self.failures = list(failures)
        self.expected_count = expected_count
        self.actual_count = actual_count
        lines = [f"Event sequence does not match ({len(self.failures)} failure(s)):"]
        lines.extend(f"  {failure}" for failure in self.failures)
        super().__init__("\n".join(lines))

    @property
    def length_mismatch(self) -> bool:
        return self.expected_count != self.actual_count

    @property
    def mismatched_indexes(self) -> list[int]:
        """Positions whose condition was not satisfied (length failure excluded)."""
        return [f.index for f in self.failures if f.index is not None]


class ExecutionsAssertionError(TestkitAssertionError):
    """Raised by ``Executions`` assertion helpers."""

    def __init__(self, message: str, category_label: str):
        super().__init__(
            f"{message}\n  Executions: {category_label}",
            context=ErrorContext(category_label=category_label),
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TestkitError",
    "PreconditionViolationError",
    "ConfigError",
    "ReconstructionError",
    "TestkitAssertionError",
    "EventsMismatchError",
    "ExecutionsAssertionError",
]
