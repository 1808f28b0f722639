# assetvault/clock.py
"""
Timestamp sources for the access log.

A clock is any zero-argument callable returning an int. The registry only
relies on successive calls never returning a smaller value.
"""

import time
from typing import Callable

Clock = Callable[[], int]


class SystemClock:
    """Wall-clock nanoseconds, clamped so they never go backwards."""

    def __init__(self):
        self._last = 0

    def __call__(self) -> int:
        now = time.time_ns()
        if now < self._last:
            now = self._last
        self._last = now
        return now


class LogicalClock:
    """Counter clock: 1, 2, 3, ... Deterministic, for tests and sessions."""

    def __init__(self, start: int = 1):
        self._next = start

    def __call__(self) -> int:
        value = self._next
        self._next += 1
        return value


CLOCK_KINDS = ("system", "logical")


def make_clock(kind: str = "system") -> Clock:
    """Build a clock by name ("system" or "logical")."""
    if kind == "system":
        return SystemClock()
    if kind == "logical":
        return LogicalClock()
    raise ValueError(f"Unknown clock kind: {kind!r} (expected one of {', '.join(CLOCK_KINDS)})")
