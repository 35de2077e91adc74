"""Immediate award action: a single occurrence triggers the award."""

from __future__ import annotations

from typing import Any

from incentive_engine.core.enums import ActionType
from incentive_engine.core.interfaces import ICounterStore
from incentive_engine.core.models import IncentiveEvent
from incentive_engine.core.outcomes import ActionOutcome

from .base import BaseAwardAction
from .registry import register_action


@register_action(ActionType.IMMEDIATE.value)
class ImmediateAction(BaseAwardAction):
    """Unconditionally awards every valid event."""

    def evaluate(self, event: IncentiveEvent) -> ActionOutcome:
        return self._award(event)

    @classmethod
    def from_params(
        cls,
        params: dict[str, Any],
        *,
        counter: ICounterStore | None = None,
    ) -> ImmediateAction:
        return cls(award_reason=params.get("award_reason"))
