"""In-memory FIFO incentive queue.

Producers (the existing log endpoints) call ``create_event`` + ``enqueue``;
the processor drains with ``dequeue``.  The queue could wrap a real
message system as long as FIFO order and single delivery hold.

Thread-safe: enqueue and dequeue are atomic under one lock, so shared
workers never receive the same event twice.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable

from incentive_engine.core.errors import IncentiveValidationError
from incentive_engine.core.interfaces import IEmployerIncentiveRepository
from incentive_engine.core.models import IncentiveEvent, is_valid_name

logger = logging.getLogger(__name__)

# (user_id, employer_id, employer_incentive_id, event_name) -> event
EventBuilder = Callable[[int, int, int, str], IncentiveEvent]


def build_incentive_event(
    user_id: int, employer_id: int, employer_incentive_id: int, event_name: str,
) -> IncentiveEvent:
    """Default event builder."""
    return IncentiveEvent(
        user_id=user_id,
        employer_id=employer_id,
        employer_incentive_id=employer_incentive_id,
        event_name=event_name,
    )


class MemoryIncentiveQueue:
    """Unbounded FIFO of pending events.  No deduplication."""

    def __init__(
        self,
        repository: IEmployerIncentiveRepository,
        event_builder: EventBuilder = build_incentive_event,
    ) -> None:
        self._repository = repository
        self._event_builder = event_builder
        self._queue: deque[IncentiveEvent] = deque()
        self._lock = threading.Lock()
        self._enqueued_total = 0

    def create_event(
        self, user_id: int, employer_id: int, event_name: str,
    ) -> IncentiveEvent:
        """Build a validated event targeting the employer's matching incentive.

        Raises:
            IncentiveValidationError: a field violates its constraints.
            RecordNotFoundError: the employer has not adopted an incentive
                named ``event_name``.
        """
        if user_id < 1:
            raise IncentiveValidationError("user_id must be greater than zero")
        if employer_id < 1:
            raise IncentiveValidationError("employer_id must be greater than zero")
        if not is_valid_name(event_name):
            raise IncentiveValidationError(
                "event name must be a non-empty alphanumeric string"
            )

        link = self._repository.get_for_employer_by_event(employer_id, event_name)
        event = self._event_builder(user_id, employer_id, link.id, event_name)
        event.validate()
        return event

    def enqueue(self, event: IncentiveEvent) -> None:
        """Validate *event* and append it to the tail."""
        event.validate()
        with self._lock:
            self._queue.append(event)
            self._enqueued_total += 1
        logger.debug(
            "Enqueued event %s (%s) for user=%d employer=%d",
            event.event_id, event.event_name, event.user_id, event.employer_id,
        )

    def dequeue(self) -> IncentiveEvent | None:
        """Remove and return the head, or ``None`` when empty."""
        with self._lock:
            if not self._queue:
                return None
            return self._queue.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    @property
    def enqueued_total(self) -> int:
        """Events accepted since construction."""
        with self._lock:
            return self._enqueued_total

    # ------------------------------------------------------------------
    # Testing helpers
    # ------------------------------------------------------------------

    def snapshot(self) -> list[IncentiveEvent]:
        """Pending events in delivery order, without removing them."""
        with self._lock:
            return list(self._queue)

    def clear(self) -> None:
        with self._lock:
            self._queue.clear()
