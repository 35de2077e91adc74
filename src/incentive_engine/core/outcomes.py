"""Result values returned by award actions and the processor.

An award is a control signal, not a failure. It is carried back to the
caller as an ``ActionOutcome`` so the drain loop can stop with an explicit
early return.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from .enums import OutcomeKind
from .ids import utc_now

if TYPE_CHECKING:
    from .models import IncentiveEvent


@dataclass(frozen=True)
class ActionOutcome:
    """Either CONTINUE (nothing happened yet) or AWARDED(reason)."""

    kind: OutcomeKind = OutcomeKind.CONTINUE
    reason: str = ""
    event: IncentiveEvent | None = None
    action_type: str = ""

    def __post_init__(self) -> None:
        if self.kind == OutcomeKind.AWARDED and not self.reason:
            raise ValueError("An awarded outcome requires a reason")

    @classmethod
    def proceed(cls) -> ActionOutcome:
        return _CONTINUE

    @classmethod
    def award(
        cls,
        reason: str,
        event: IncentiveEvent | None = None,
        action_type: str = "",
    ) -> ActionOutcome:
        return cls(
            kind=OutcomeKind.AWARDED,
            reason=reason,
            event=event,
            action_type=action_type,
        )

    @property
    def awarded(self) -> bool:
        return self.kind == OutcomeKind.AWARDED


_CONTINUE = ActionOutcome()


@dataclass(frozen=True)
class DeadLetter:
    """Record of an event the processor skipped."""

    event_id: str
    employer_incentive_id: int
    error_type: str
    error: str
    timestamp: datetime = field(default_factory=utc_now)
