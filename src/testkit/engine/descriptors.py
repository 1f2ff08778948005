"""Node descriptors — the identity of engines, containers and tests.

The engine that produces lifecycle notifications owns these values; the
recorder, the reconstruction fold and the condition DSL only compare and
render them.

ARCHITECTURE
────────────
::

    TestDescriptor (frozen)
      ├── unique_id     ─ UniqueId: ordered (type, value) segments
      ├── display_name  ─ human-readable name
      ├── role          ─ NodeRole.ENGINE | CONTAINER | TEST
      └── parent_id     ─ UniqueId of the enclosing node (None for the engine)

    UniqueId renders as ``[engine:junit]/[class:Foo]/[method:bar()]``.

Example::

    engine = TestDescriptor.engine("sample")
    cls = engine.child("class", "pkg.FooTests", "FooTests", NodeRole.CONTAINER)
    test = cls.child("method", "bar()", "bar()", NodeRole.TEST)
    assert test.is_test and test.parent_id == cls.unique_id
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from testkit.core.preconditions import condition, not_blank, not_none

_SEGMENT_PATTERN = re.compile(r"\[([^:\]]+):([^\]]*)\]")
_UNIQUE_ID_PATTERN = re.compile(r"\[[^:\]]+:[^\]]*\](?:/\[[^:\]]+:[^\]]*\])*")


class NodeRole(str, Enum):
    """Role of a node in the test hierarchy."""

    ENGINE = "engine"
    CONTAINER = "container"
    TEST = "test"


@dataclass(frozen=True)
class Segment:
    """One ``type:value`` segment of a :class:`UniqueId`."""

    type: str
    value: str

    def __str__(self) -> str:
        return f"{self.type}:{self.value}"


@dataclass(frozen=True)
class UniqueId:
    """Ordered, immutable sequence of identifier segments."""

    segments: tuple[Segment, ...]

    @classmethod
    def for_engine(cls, engine_id: str) -> UniqueId:
        not_blank(engine_id, "engine_id must not be blank")
        return cls((Segment("engine", engine_id),))

    @classmethod
    def parse(cls, text: str) -> UniqueId:
        """Parse the ``[type:value]/[type:value]`` rendering back into a UniqueId.

        Raises:
            PreconditionViolationError: If *text* is blank or not entirely made
                of bracketed segments joined by ``/``.
        """
        not_blank(text, "unique id text must not be blank")
        condition(_UNIQUE_ID_PATTERN.fullmatch(text) is not None, f"Not a unique id: {text!r}")
        segments = tuple(
            Segment(match.group(1), match.group(2))
            for match in _SEGMENT_PATTERN.finditer(text)
        )
        return cls(segments)

    def append(self, segment_type: str, value: str) -> UniqueId:
        not_blank(segment_type, "segment type must not be blank")
        not_none(value, "segment value must not be None")
        return UniqueId(self.segments + (Segment(segment_type, value),))

    @property
    def engine_id(self) -> str | None:
        first = self.segments[0] if self.segments else None
        if first is not None and first.type == "engine":
            return first.value
        return None

    @property
    def last_segment(self) -> Segment:
        return self.segments[-1]

    def __str__(self) -> str:
        return "/".join(f"[{segment}]" for segment in self.segments)


@dataclass(frozen=True)
class TestDescriptor:
    """Immutable description of one node in the test hierarchy."""

    __test__ = False

    unique_id: UniqueId
    display_name: str
    role: NodeRole
    parent_id: UniqueId | None = field(default=None, compare=False)

    @classmethod
    def engine(cls, engine_id: str, display_name: str | None = None) -> TestDescriptor:
        return cls(
            unique_id=UniqueId.for_engine(engine_id),
            display_name=display_name or engine_id,
            role=NodeRole.ENGINE,
        )

    def child(
        self,
        segment_type: str,
        value: str,
        display_name: str,
        role: NodeRole,
    ) -> TestDescriptor:
        """Create a descriptor nested directly below this one."""
        return TestDescriptor(
            unique_id=self.unique_id.append(segment_type, value),
            display_name=display_name,
            role=role,
            parent_id=self.unique_id,
        )

    @property
    def is_engine(self) -> bool:
        return self.role is NodeRole.ENGINE

    @property
    def is_container(self) -> bool:
        # the engine node is a container of everything it runs
        return self.role in (NodeRole.ENGINE, NodeRole.CONTAINER)

    @property
    def is_test(self) -> bool:
        return self.role is NodeRole.TEST

    def __str__(self) -> str:
        return f"{self.role.value} '{self.display_name}' {self.unique_id}"


__all__ = ["NodeRole", "Segment", "UniqueId", "TestDescriptor"]
