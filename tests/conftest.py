"""Shared fixtures for the incentive-engine test suite."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from incentive_engine.actions import ImmediateAction, ThresholdCountingAction
from incentive_engine.bootstrap import (
    DATA_LOGGED_5_DAYS,
    DEFAULT_INCENTIVES,
    DEFAULT_LINKS,
    USER_BIRTH,
)
from incentive_engine.core.clock import SimClock
from incentive_engine.core.models import Incentive, IncentiveEvent
from incentive_engine.core.outcomes import ActionOutcome
from incentive_engine.counter import MemoryCounterStore
from incentive_engine.observability.event_log import MemoryEventLog
from incentive_engine.queue import MemoryIncentiveQueue
from incentive_engine.repository import (
    MemoryEmployerIncentiveRepository,
    MemoryIncentiveRepository,
)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class RecordingAction:
    """Award action double that records calls and returns a fixed outcome."""

    action_type = "recording"

    def __init__(self, name: str, award: bool = False, calls: list | None = None,
                 error: Exception | None = None):
        self.name = name
        self.award = award
        self.calls = calls if calls is not None else []
        self.error = error

    def execute(self, event: IncentiveEvent) -> ActionOutcome:
        event.validate()
        self.calls.append(self.name)
        if self.error is not None:
            raise self.error
        if self.award:
            return ActionOutcome.award(self.name, event, self.action_type)
        return ActionOutcome.proceed()


# ---------------------------------------------------------------------------
# Clock / counter
# ---------------------------------------------------------------------------

@pytest.fixture
def sim_clock() -> SimClock:
    """Return a SimClock starting at 2024-06-01 00:00 UTC."""
    return SimClock(start=datetime(2024, 6, 1, tzinfo=timezone.utc))


@pytest.fixture
def counter(sim_clock) -> MemoryCounterStore:
    """Counter with no debounce window."""
    return MemoryCounterStore(interval=0, clock=sim_clock)


@pytest.fixture
def daily_counter(sim_clock) -> MemoryCounterStore:
    """Counter allowing one increment per day."""
    return MemoryCounterStore(interval=60 * 60 * 24, clock=sim_clock)


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------

@pytest.fixture
def persisted_incentive() -> Incentive:
    return Incentive(
        id=1,
        name=DATA_LOGGED_5_DAYS,
        description="The user has logged data five days in a row",
    )


@pytest.fixture
def make_event():
    """Factory for valid events with overridable fields."""

    def _make(**overrides) -> IncentiveEvent:
        defaults = dict(
            user_id=1,
            employer_id=1,
            employer_incentive_id=1,
            event_name=DATA_LOGGED_5_DAYS,
        )
        defaults.update(overrides)
        return IncentiveEvent(**defaults)

    return _make


# ---------------------------------------------------------------------------
# Repositories / queue
# ---------------------------------------------------------------------------

@pytest.fixture
def incentive_repo() -> MemoryIncentiveRepository:
    return MemoryIncentiveRepository(DEFAULT_INCENTIVES)


@pytest.fixture
def action_map(counter):
    return {
        DATA_LOGGED_5_DAYS: [ThresholdCountingAction(5, counter)],
        USER_BIRTH: [ImmediateAction()],
    }


@pytest.fixture
def employer_repo(incentive_repo, action_map) -> MemoryEmployerIncentiveRepository:
    return MemoryEmployerIncentiveRepository(DEFAULT_LINKS, incentive_repo, action_map)


@pytest.fixture
def incentive_queue(employer_repo) -> MemoryIncentiveQueue:
    return MemoryIncentiveQueue(employer_repo)


@pytest.fixture
def event_log() -> MemoryEventLog:
    return MemoryEventLog()


@pytest.fixture
def make_action():
    """Factory for ``RecordingAction`` doubles."""

    def _make(name: str, award: bool = False, calls: list | None = None,
              error: Exception | None = None) -> RecordingAction:
        return RecordingAction(name, award=award, calls=calls, error=error)

    return _make
