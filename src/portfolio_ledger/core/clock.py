"""Clock abstraction for publish-time stamping.

WallClock: real wall-clock time (production)
FixedClock: deterministic time that only moves when told to (tests)

The stream publisher never calls datetime.now() directly; it asks its clock.
"""

from __future__ import annotations

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


class FixedClock:
    """Deterministic clock for tests.

    Time advances only when explicitly set.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def set_time(self, t: datetime) -> None:
        """Move the clock. Must be monotonically increasing."""
        if t < self._time:
            raise ValueError(
                f"FixedClock cannot go backwards: {t} < {self._time}"
            )
        self._time = t

    def advance_ms(self, ms: int) -> None:
        """Advance time by milliseconds."""
        self.set_time(self._time + timedelta(milliseconds=ms))
