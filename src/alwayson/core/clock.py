"""Clock sources and elapsed-time formatting.

Instants are integer milliseconds since the Unix epoch. The controller
never reads wall-clock time directly; a Clock is always injected.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from alwayson.core.exceptions import PreconditionError

_MS_PER_SECOND = 1000


class Clock(ABC):
    """Supplies the current instant."""

    @abstractmethod
    def now_ms(self) -> int:
        """Current instant in milliseconds since the epoch."""
        ...


class SystemClock(Clock):
    """Wall-clock time."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


class ManualClock(Clock):
    """Clock fixed at an instant and moved forward explicitly."""

    def __init__(self, start_ms: int = 0) -> None:
        if start_ms < 0:
            msg = f"Clock cannot start before the epoch: {start_ms}"
            raise PreconditionError(msg)
        self._now = start_ms

    def now_ms(self) -> int:
        return self._now

    def advance(self, duration_ms: int) -> int:
        """Move forward by duration_ms and return the new instant."""
        if duration_ms < 0:
            msg = f"Cannot advance clock by a negative duration: {duration_ms}ms"
            raise PreconditionError(msg)
        self._now += duration_ms
        return self._now

    def set(self, instant_ms: int) -> None:
        """Jump to instant_ms. Time never moves backwards."""
        if instant_ms < self._now:
            msg = f"Cannot move clock backwards: {instant_ms} < {self._now}"
            raise PreconditionError(msg)
        self._now = instant_ms


def format_elapsed(elapsed_ms: int) -> str:
    """Format elapsed whole seconds as HH:MM:SS.

    Partial seconds are truncated. Hours are not wrapped at 24.
    """
    if elapsed_ms < 0:
        msg = f"Elapsed time cannot be negative: {elapsed_ms}ms"
        raise PreconditionError(msg)
    total_seconds = elapsed_ms // _MS_PER_SECOND
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def next_boundary(instant_ms: int, interval_ms: int) -> int:
    """Return the first epoch-aligned multiple of interval_ms strictly after instant_ms."""
    return instant_ms + interval_ms - (instant_ms % interval_ms)
