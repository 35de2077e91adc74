"""Base award action class.

All award actions inherit from BaseAwardAction and implement evaluate().
Actions are shared, immutable strategy objects reused across many
employer incentives and events, so they hold no per-event state.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from incentive_engine.core.interfaces import ICounterStore
from incentive_engine.core.models import IncentiveEvent
from incentive_engine.core.outcomes import ActionOutcome


class BaseAwardAction(ABC):
    """Abstract base for all award actions.

    ``execute()`` validates the event, then delegates to ``evaluate()``.
    Validation failures propagate unmodified.
    """

    action_type: str = ""

    def __init__(self, award_reason: str | None = None) -> None:
        self._award_reason = award_reason or self.default_reason()

    @property
    def award_reason(self) -> str:
        return self._award_reason

    def execute(self, event: IncentiveEvent) -> ActionOutcome:
        event.validate()
        return self.evaluate(event)

    @abstractmethod
    def evaluate(self, event: IncentiveEvent) -> ActionOutcome:
        """Decide whether an already validated event triggers an award."""
        ...

    @classmethod
    @abstractmethod
    def from_params(
        cls,
        params: dict[str, Any],
        *,
        counter: ICounterStore | None = None,
    ) -> BaseAwardAction:
        """Build an instance from config params."""
        ...

    def default_reason(self) -> str:
        return self.action_type or type(self).__name__

    def get_parameters(self) -> dict[str, Any]:
        """Return current parameters for audit/logging."""
        return {"award_reason": self._award_reason}

    def _award(self, event: IncentiveEvent) -> ActionOutcome:
        return ActionOutcome.award(
            reason=self._award_reason,
            event=event,
            action_type=self.action_type,
        )

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_parameters().items())
        return f"{type(self).__name__}({params})"
