"""In-memory counter store.

Tracks ``(employer_incentive_id, user_id) -> (count, last_update)`` and
exposes an atomic increment-or-reset.

- A debounce window turns repeated occurrences inside ``interval`` seconds
  into no-ops (e.g. "at most once per day").
- Reaching ``max_count`` resets the record to ``(0, 0)`` and returns
  ``max_count``, so the counter re-arms itself after firing.

Thread-safety: one lock per key.  Callers on different keys never block
each other; callers on the same key serialize.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from incentive_engine.core.clock import IClock, WallClock
from incentive_engine.core.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

ONE_DAY_SECONDS = 60 * 60 * 24

CounterKey = tuple[int, int]


@dataclass
class CounterRecord:
    """Mutable cell guarded by its key's lock."""

    count: int = 0
    last_update: int = 0  # epoch seconds, 0 after a reset


class MemoryCounterStore:
    """Process-wide counter shared by every action that needs counting."""

    def __init__(
        self,
        interval: int = ONE_DAY_SECONDS,
        clock: IClock | None = None,
    ) -> None:
        if interval < 0:
            raise InvalidArgumentError(
                "interval must be greater than or equal to zero"
            )
        self._interval = interval
        self._clock = clock or WallClock()
        self._records: dict[CounterKey, CounterRecord] = {}
        self._locks: dict[CounterKey, threading.Lock] = {}
        # Guards creation of per-key locks only
        self._registry_lock = threading.Lock()

    @property
    def interval(self) -> int:
        return self._interval

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_count(self, subject_id: int, user_id: int) -> int:
        """Return the current count, 0 if the key was never incremented."""
        key = self._make_key(subject_id, user_id)
        with self._lock_for(key):
            record = self._records.get(key)
            return record.count if record is not None else 0

    def get_and_increment_count(
        self, subject_id: int, user_id: int, max_count: int = 0,
    ) -> int:
        """Increment the counter unless debounced; reset when reaching max.

        Returns the new count, the unchanged count inside the debounce
        window, or ``max_count`` when the counter fired and was reset.
        """
        key = self._make_key(subject_id, user_id)
        with self._lock_for(key):
            now = self._clock.epoch_seconds()
            record = self._records.get(key)

            if record is None:
                self._records[key] = CounterRecord(count=1, last_update=now)
                return 1

            if now - record.last_update < self._interval:
                logger.debug(
                    "Counter %s debounced (count=%d, %ds since last update)",
                    key, record.count, now - record.last_update,
                )
                return record.count

            if max_count > 0 and record.count + 1 >= max_count:
                record.count = 0
                record.last_update = 0
                logger.debug("Counter %s reached max=%d, reset", key, max_count)
                return max_count

            record.count += 1
            record.last_update = now
            return record.count

    def reset_count(self, subject_id: int, user_id: int) -> None:
        """Zero both count and timestamp.  No-op for unknown keys."""
        key = self._make_key(subject_id, user_id)
        with self._lock_for(key):
            record = self._records.get(key)
            if record is None:
                return
            record.count = 0
            record.last_update = 0

    # ------------------------------------------------------------------
    # Testing helpers
    # ------------------------------------------------------------------

    def get_record(self, subject_id: int, user_id: int) -> tuple[int, int] | None:
        """Snapshot ``(count, last_update)`` for a key, or ``None``."""
        key = self._make_key(subject_id, user_id)
        with self._lock_for(key):
            record = self._records.get(key)
            if record is None:
                return None
            return (record.count, record.last_update)

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @staticmethod
    def _make_key(subject_id: int, user_id: int) -> CounterKey:
        if subject_id < 1:
            raise InvalidArgumentError(
                "employer_incentive_id must be greater than zero"
            )
        if user_id < 1:
            raise InvalidArgumentError("user_id must be greater than zero")
        return (subject_id, user_id)

    def _lock_for(self, key: CounterKey) -> threading.Lock:
        lock = self._locks.get(key)
        if lock is None:
            with self._registry_lock:
                lock = self._locks.setdefault(key, threading.Lock())
        return lock
