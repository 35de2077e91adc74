"""Incentive processor: drains the queue and evaluates each event.

Run by a task scheduler, separately from the producers that enqueue.

States: RUNNING while draining, IDLE once the queue is empty or the drain
stopped early.

- RecordNotFoundError / IncentiveValidationError for one event are
  recoverable: the event is logged, dead-lettered and skipped.
- The first award ends the drain and is returned to the caller.  Events
  still queued stay queued for the next run.
- Any other exception propagates.

Each run binds a fresh trace id (see ``observability.logger``); every
event-log record from that run carries it.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from incentive_engine.core.enums import ProcessorState
from incentive_engine.core.errors import IncentiveValidationError, RecordNotFoundError
from incentive_engine.core.interfaces import (
    IEmployerIncentiveRepository,
    IEventLog,
    IIncentiveQueue,
)
from incentive_engine.core.models import IncentiveEvent
from incentive_engine.core.outcomes import ActionOutcome, DeadLetter
from incentive_engine.observability import event_log as records
from incentive_engine.observability.logger import current_trace_id, drain_context

logger = logging.getLogger(__name__)

FailureCallback = Callable[[IncentiveEvent, Exception], None]

_RECOVERABLE = (RecordNotFoundError, IncentiveValidationError)


class IncentiveProcessor:
    """Drains an incentive queue against employer incentives."""

    def __init__(
        self,
        queue: IIncentiveQueue,
        repository: IEmployerIncentiveRepository,
        *,
        event_log: IEventLog | None = None,
        on_event_failure: FailureCallback | None = None,
    ) -> None:
        self._queue = queue
        self._repository = repository
        self._event_log = event_log
        self._on_event_failure = on_event_failure
        self._state = ProcessorState.IDLE

        # Observability
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: list[DeadLetter] = []
        self._processed_count = 0
        self._award_count = 0

    @property
    def state(self) -> ProcessorState:
        return self._state

    def run(self) -> ActionOutcome:
        """Drain until the queue is empty or an event earns an award.

        Returns the awarding outcome, or CONTINUE when the queue was
        exhausted without an award.
        """
        with drain_context() as trace_id:
            self._state = ProcessorState.RUNNING
            logger.debug("Drain %s started, %d queued", trace_id, len(self._queue))
            try:
                while True:
                    event = self._queue.dequeue()
                    if event is None:
                        return ActionOutcome.proceed()

                    outcome = self._process_one(event)
                    if outcome is not None and outcome.awarded:
                        self._award_count += 1
                        logger.info(
                            "Drain %s: award for user=%d employer=%d event=%s: %s "
                            "(%d events left in queue)",
                            trace_id,
                            event.user_id,
                            event.employer_id,
                            event.event_name,
                            outcome.reason,
                            len(self._queue),
                        )
                        return outcome
            finally:
                self._state = ProcessorState.IDLE

    def _process_one(self, event: IncentiveEvent) -> ActionOutcome | None:
        """Process one event.  Returns ``None`` when the event was skipped."""
        try:
            employer_incentive = self._repository.get_for_event(event)
            outcome = employer_incentive.process_event(event)
        except _RECOVERABLE as exc:
            self._on_failure(event, exc)
            return None

        self._processed_count += 1
        self._record(
            records.AWARDED if outcome.awarded else records.NO_AWARD,
            event,
            reason=outcome.reason,
        )
        return outcome

    # ------------------------------------------------------------------
    # Failure handling
    # ------------------------------------------------------------------

    def _on_failure(self, event: IncentiveEvent, exc: Exception) -> None:
        error_type = type(exc).__name__
        self._error_counts[error_type] += 1
        self._dead_letters.append(
            DeadLetter(
                event_id=event.event_id,
                employer_incentive_id=event.employer_incentive_id,
                error_type=error_type,
                error=str(exc),
            )
        )
        logger.warning(
            "Skipping event %s (%s) for user=%d employer=%d: %s: %s",
            event.event_id,
            event.event_name,
            event.user_id,
            event.employer_id,
            error_type,
            exc,
        )

        name = (
            records.SKIPPED_NOT_FOUND
            if isinstance(exc, RecordNotFoundError)
            else records.SKIPPED_INVALID
        )
        self._record(name, event, error=str(exc))

        if self._on_event_failure is not None:
            try:
                self._on_event_failure(event, exc)
            except Exception:
                logger.warning("on_event_failure callback failed", exc_info=True)

    def _record(self, name: str, event: IncentiveEvent, **context: object) -> None:
        if self._event_log is None:
            return
        self._event_log.record(
            name,
            event.user_id,
            event.employer_id,
            {
                "event_id": event.event_id,
                "event_name": event.event_name,
                "employer_incentive_id": event.employer_incentive_id,
                "trace_id": current_trace_id(),
                **context,
            },
        )

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def get_error_counts(self) -> dict[str, int]:
        """Return per-error-type skip counts."""
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[DeadLetter]:
        """Snapshot of skipped events."""
        return list(self._dead_letters)

    @property
    def processed_count(self) -> int:
        """Events evaluated without a recoverable failure."""
        return self._processed_count

    @property
    def award_count(self) -> int:
        return self._award_count

    def clear_dead_letters(self) -> list[DeadLetter]:
        """Drain the dead-letter list and return all entries."""
        drained = self._dead_letters[:]
        self._dead_letters.clear()
        return drained
