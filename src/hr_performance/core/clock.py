"""Clock abstraction for fact timestamps.

WallClock: raw wall-clock time.
MonotonicClock: wall-clock time clamped so it never goes backwards.
SimClock: deterministic simulated time (tests, replays).

Workflows never call datetime.now() directly; they use an injected clock.
"""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class MonotonicClock:
    """Wall-clock time that is non-decreasing across calls.

    If the system clock is stepped backwards, the last issued timestamp is
    repeated until wall time catches up.
    """

    def __init__(self, source: IClock | None = None) -> None:
        self._source = source or WallClock()
        self._lock = threading.Lock()
        self._last: datetime | None = None

    def now(self) -> datetime:
        with self._lock:
            t = self._source.now()
            if self._last is not None and t < self._last:
                t = self._last
            self._last = t
            return t


class SimClock:
    """Simulated clock. Time advances only when explicitly set."""

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def set_time(self, t: datetime) -> None:
        """Advance time. Must be monotonically increasing."""
        if t < self._time:
            raise ValueError(
                f"SimClock cannot go backwards: {t} < {self._time}"
            )
        self._time = t

    def advance(self, seconds: float) -> None:
        """Advance time by *seconds*."""
        self.set_time(self._time + timedelta(seconds=seconds))
