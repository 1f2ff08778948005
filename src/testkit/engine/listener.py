"""Protocols at the seam between a test engine and the recorder.

The engine itself is not part of testkit.  Anything that can drive an
:class:`EngineExecutionListener` through a run satisfies :class:`TestEngine`
and can be passed to :meth:`ExecutionRecorder.execute`.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from testkit.engine.descriptors import TestDescriptor
from testkit.engine.results import TestExecutionResult


@runtime_checkable
class EngineExecutionListener(Protocol):
    """Receives one call per lifecycle transition, in engine order."""

    def dynamic_test_registered(self, test_descriptor: TestDescriptor) -> None: ...

    def execution_started(self, test_descriptor: TestDescriptor) -> None: ...

    def execution_skipped(self, test_descriptor: TestDescriptor, reason: str) -> None: ...

    def execution_finished(
        self,
        test_descriptor: TestDescriptor,
        result: TestExecutionResult,
    ) -> None: ...

    def reporting_entry_published(
        self,
        test_descriptor: TestDescriptor,
        entry: dict[str, str],
    ) -> None: ...


@runtime_checkable
class TestEngine(Protocol):
    """Executes a request, reporting every transition to *listener*."""

    @property
    def engine_id(self) -> str: ...

    def execute(self, request: Any, listener: EngineExecutionListener) -> None: ...


__all__ = ["EngineExecutionListener", "TestEngine"]
