"""Protocol interfaces for the incentive engine.

All component boundaries are defined here as Protocol classes.
Backing stores (memory, SQL, message broker) can be swapped without
changing callers as long as the atomicity and ordering contracts hold.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .models import Incentive, IncentiveEvent
from .outcomes import ActionOutcome


# ---------------------------------------------------------------------------
# Counter store
# ---------------------------------------------------------------------------

@runtime_checkable
class ICounterStore(Protocol):
    """Per (employer incentive, user) occurrence counter.

    ``get_and_increment_count`` must be a single atomic read-modify-write
    per key.
    """

    def get_count(self, subject_id: int, user_id: int) -> int: ...

    def get_and_increment_count(
        self, subject_id: int, user_id: int, max_count: int = 0,
    ) -> int: ...

    def reset_count(self, subject_id: int, user_id: int) -> None: ...


# ---------------------------------------------------------------------------
# Award actions / employer incentives
# ---------------------------------------------------------------------------

@runtime_checkable
class IAwardAction(Protocol):
    """Strategy that inspects an event and decides whether to award."""

    @property
    def action_type(self) -> str: ...

    def execute(self, event: IncentiveEvent) -> ActionOutcome: ...


@runtime_checkable
class IEmployerIncentive(Protocol):
    """An employer's adoption of an incentive, bound to award actions."""

    @property
    def id(self) -> int: ...

    @property
    def employer_id(self) -> int: ...

    @property
    def incentive(self) -> Incentive: ...

    @property
    def actions(self) -> tuple[IAwardAction, ...]: ...

    def validate(self) -> None: ...

    def process_event(self, event: IncentiveEvent) -> ActionOutcome: ...


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------

@runtime_checkable
class IIncentiveRepository(Protocol):
    """Global incentives available for employers to adopt."""

    def create(self, name: str, description: str) -> Incentive: ...

    def get(self, incentive_id: int) -> Incentive: ...

    def get_active_incentives(self) -> list[Incentive]: ...

    def save(self, *incentives: Incentive) -> None: ...

    def set_active(self, incentive_id: int, active: bool) -> None: ...


@runtime_checkable
class IEmployerIncentiveRepository(Protocol):
    """Links between employers and incentives."""

    def create(self, employer_id: int, incentive: Incentive) -> IEmployerIncentive: ...

    def get(self, employer_incentive_id: int) -> IEmployerIncentive: ...

    def get_for_employer(self, employer_id: int) -> list[IEmployerIncentive]: ...

    def get_for_event(self, event: IncentiveEvent) -> IEmployerIncentive: ...

    def get_for_employer_by_event(
        self, employer_id: int, event_name: str,
    ) -> IEmployerIncentive: ...

    def save(self, *records: IEmployerIncentive) -> None: ...


# ---------------------------------------------------------------------------
# Queue
# ---------------------------------------------------------------------------

@runtime_checkable
class IIncentiveQueue(Protocol):
    """FIFO of pending incentive events."""

    def create_event(
        self, user_id: int, employer_id: int, event_name: str,
    ) -> IncentiveEvent: ...

    def enqueue(self, event: IncentiveEvent) -> None: ...

    def dequeue(self) -> IncentiveEvent | None: ...

    def __len__(self) -> int: ...


# ---------------------------------------------------------------------------
# Event log (audit sink)
# ---------------------------------------------------------------------------

@runtime_checkable
class IEventLog(Protocol):
    """Visitor notified about every event the processor handles."""

    def record(
        self,
        name: str,
        user_id: int,
        employer_id: int,
        context: dict[str, Any] | None = None,
    ) -> None: ...

