"""
Shared pytest fixtures and configuration for testkit tests.

This module provides:
- Settings cache isolation
- A deterministic clock for recorder timestamps
- A small descriptor tree (engine → container → tests)

Usage:
    Fixtures are auto-discovered by pytest; request them as arguments.

    def test_something(tree, clock):
        ...
"""

from collections.abc import Generator
from dataclasses import dataclass
from pathlib import Path

import pytest

from tests._support import TickingClock
from testkit.core.logging import configure_logging
from testkit.core.settings import clear_settings_cache
from testkit.engine import NodeRole, TestDescriptor


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Drop cached settings and TESTKIT_* overrides around every test."""
    for key in ("TESTKIT_LOG_LEVEL", "TESTKIT_LOG_FORMAT", "TESTKIT_MISSING_START_POLICY", "TESTKIT_DEBUG_INDENT"):
        monkeypatch.delenv(key, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Clock + Descriptor Fixtures
# =============================================================================


@pytest.fixture
def clock() -> TickingClock:
    """Clock starting at 2026-01-01T00:00:00Z, one second per call."""
    return TickingClock()


@dataclass(frozen=True)
class Tree:
    """engine → container 'FooTests' → tests 'first()', 'second()', 'third()'."""

    engine: TestDescriptor
    container: TestDescriptor
    first: TestDescriptor
    second: TestDescriptor
    third: TestDescriptor


@pytest.fixture
def tree() -> Tree:
    engine = TestDescriptor.engine("sample", "Sample Engine")
    container = engine.child("class", "pkg.FooTests", "FooTests", NodeRole.CONTAINER)
    return Tree(
        engine=engine,
        container=container,
        first=container.child("method", "first()", "first()", NodeRole.TEST),
        second=container.child("method", "second()", "second()", NodeRole.TEST),
        third=container.child("method", "third()", "third()", NodeRole.TEST),
    )


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep debug-level structlog output out of captured stdout."""
    configure_logging(level="WARNING", json_format=False)
