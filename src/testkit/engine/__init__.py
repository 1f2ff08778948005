"""Engine-facing value types: node descriptors, outcomes, listener protocols."""

from testkit.engine.descriptors import NodeRole, Segment, TestDescriptor, UniqueId
from testkit.engine.listener import EngineExecutionListener, TestEngine
from testkit.engine.results import Status, TestExecutionResult

__all__ = [
    "NodeRole",
    "Segment",
    "TestDescriptor",
    "UniqueId",
    "EngineExecutionListener",
    "TestEngine",
    "Status",
    "TestExecutionResult",
]
