"""
Test support utilities for testkit tests.

Engine doubles live in ``tests._support.engine``; this module holds small
helpers that don't fit as pytest fixtures.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta


class TickingClock:
    """Deterministic clock: each call returns the previous instant plus *step*."""

    def __init__(
        self,
        start: datetime = datetime(2026, 1, 1, tzinfo=UTC),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self._next = start
        self._step = step
        self.calls = 0

    def __call__(self) -> datetime:
        now = self._next
        self._next = now + self._step
        self.calls += 1
        return now


def at(seconds: int) -> datetime:
    """Fixed instant *seconds* after 2026-01-01T00:00:00Z."""
    return datetime(2026, 1, 1, tzinfo=UTC) + timedelta(seconds=seconds)
