"""Clock abstraction for debounce-sensitive code.

WallClock: real wall-clock time (production)
SimClock: deterministic simulated time (tests, replays)

The counter store never calls time.time() directly; it asks its clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...

    def now_ms(self) -> int:
        """Current time as milliseconds since epoch."""
        ...

    def epoch_seconds(self) -> int:
        """Current time as whole seconds since epoch."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def now_ms(self) -> int:
        return int(self.now().timestamp() * 1000)

    def epoch_seconds(self) -> int:
        return int(self.now().timestamp())


class SimClock:
    """Simulated clock for deterministic debounce behaviour.

    Time advances only when explicitly moved by the caller.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def now_ms(self) -> int:
        return int(self._time.timestamp() * 1000)

    def epoch_seconds(self) -> int:
        return int(self._time.timestamp())

    def set_time(self, t: datetime) -> None:
        """Move to *t*. Must be monotonically increasing."""
        if t < self._time:
            raise ValueError(
                f"SimClock cannot go backwards: {t} < {self._time}"
            )
        self._time = t

    def advance_ms(self, ms: int) -> None:
        self.set_time(self._time + timedelta(milliseconds=ms))

    def advance_seconds(self, seconds: int) -> None:
        self.set_time(self._time + timedelta(seconds=seconds))
