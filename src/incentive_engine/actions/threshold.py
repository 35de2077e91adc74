"""Threshold-counting award action.

Awards once a user has performed the action ``actions_to_award`` times,
as counted by the shared counter store.  The counter's debounce window
decides what counts as a separate occurrence (e.g. "logged data on five
different days").
"""

from __future__ import annotations

import logging
from typing import Any

from incentive_engine.core.enums import ActionType
from incentive_engine.core.errors import ConfigError, InvalidArgumentError
from incentive_engine.core.interfaces import ICounterStore
from incentive_engine.core.models import IncentiveEvent
from incentive_engine.core.outcomes import ActionOutcome

from .base import BaseAwardAction
from .registry import register_action

logger = logging.getLogger(__name__)


@register_action(ActionType.THRESHOLD.value)
class ThresholdCountingAction(BaseAwardAction):
    """Signals an award when the counter reaches ``actions_to_award``.

    Parameters
    ----------
    actions_to_award:
        Occurrences required before awarding.  Must be at least 2; a single
        occurrence is what ``ImmediateAction`` is for.
    counter:
        Counter store keyed by ``(employer_incentive_id, user_id)``.
    award_reason:
        Reason attached to the awarded outcome.
    """

    def __init__(
        self,
        actions_to_award: int,
        counter: ICounterStore,
        award_reason: str | None = None,
    ) -> None:
        if actions_to_award < 2:
            raise InvalidArgumentError(
                "Minimum value of actions_to_award is 2"
            )
        self._actions_to_award = actions_to_award
        self._counter = counter
        super().__init__(award_reason)

    @property
    def actions_to_award(self) -> int:
        return self._actions_to_award

    def default_reason(self) -> str:
        return f"threshold-{self._actions_to_award}-reached"

    def evaluate(self, event: IncentiveEvent) -> ActionOutcome:
        current = self._counter.get_and_increment_count(
            event.employer_incentive_id,
            event.user_id,
            self._actions_to_award,
        )
        if current >= self._actions_to_award:
            return self._award(event)

        logger.debug(
            "Threshold not met for user=%d incentive=%d (%d/%d)",
            event.user_id,
            event.employer_incentive_id,
            current,
            self._actions_to_award,
        )
        return ActionOutcome.proceed()

    @classmethod
    def from_params(
        cls,
        params: dict[str, Any],
        *,
        counter: ICounterStore | None = None,
    ) -> ThresholdCountingAction:
        if counter is None:
            raise ConfigError("threshold action requires a counter store")
        if "actions_to_award" not in params:
            raise ConfigError("threshold action requires 'actions_to_award'")
        return cls(
            actions_to_award=int(params["actions_to_award"]),
            counter=counter,
            award_reason=params.get("award_reason"),
        )

    def get_parameters(self) -> dict[str, Any]:
        params = super().get_parameters()
        params["actions_to_award"] = self._actions_to_award
        return params
