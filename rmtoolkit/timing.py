"""Monotonic timestamps and elapsed-time measurement."""

from __future__ import annotations

import enum
import time


class TimeUnit(enum.Enum):
    MICROSECONDS = 1_000
    MILLISECONDS = 1_000_000


def get_curr_time() -> int:
    """Current reading of a monotonic clock, in nanoseconds."""
    return time.monotonic_ns()


def count_time_duration(begin: int, end: int, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
    """Whole ``unit``s from ``begin`` to ``end``, truncated towards zero."""
    elapsed = end - begin
    whole = abs(elapsed) // unit.value
    return whole if elapsed >= 0 else -whole