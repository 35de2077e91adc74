"""Employer incentive aggregate.

Binds a persisted ``Incentive`` to an employer and an ordered, non-empty
list of award actions, and runs those actions for one event.

Actions run in construction order and stop at the first award or failure.
Side effects of actions that already ran (e.g. a counter increment) are
not rolled back; a durable backend should wrap ``process_event`` in a
unit of work.
"""

from __future__ import annotations

import logging
from typing import Iterable

from incentive_engine.core.errors import InvalidArgumentError
from incentive_engine.core.interfaces import IAwardAction
from incentive_engine.core.models import Incentive, IncentiveEvent
from incentive_engine.core.outcomes import ActionOutcome

logger = logging.getLogger(__name__)


class EmployerIncentive:
    """Immutable employer adoption of an incentive."""

    __slots__ = ("_id", "_employer_id", "_incentive", "_actions")

    def __init__(
        self,
        id: int,
        employer_id: int,
        incentive: Incentive,
        actions: Iterable[IAwardAction],
    ) -> None:
        actions = tuple(actions)
        if id < 1:
            raise InvalidArgumentError("id must be greater than zero")
        if employer_id < 1:
            raise InvalidArgumentError("employer_id must be greater than zero")
        if not actions:
            raise InvalidArgumentError("At least one action must be specified")

        incentive.validate()
        if not incentive.is_persisted:
            raise InvalidArgumentError(
                "Uncommitted incentives may not be attached to employer "
                "incentives. Save the incentive before creating this object"
            )

        self._id = id
        self._employer_id = employer_id
        self._incentive = incentive
        self._actions = actions

    @property
    def id(self) -> int:
        return self._id

    @property
    def employer_id(self) -> int:
        return self._employer_id

    @property
    def incentive(self) -> Incentive:
        return self._incentive

    @property
    def actions(self) -> tuple[IAwardAction, ...]:
        return self._actions

    def validate(self) -> None:
        # The attached incentive may come from a mutable implementation.
        self._incentive.validate()

    def process_event(self, event: IncentiveEvent) -> ActionOutcome:
        """Run each action in order until one awards.

        Returns the awarding outcome, or CONTINUE when no action awarded.
        Validation errors from this object, the event, or any action
        propagate to the caller.
        """
        self.validate()
        event.validate()

        for action in self._actions:
            outcome = action.execute(event)
            if outcome.awarded:
                logger.info(
                    "Employer incentive %d awarded user %d via %s: %s",
                    self._id,
                    event.user_id,
                    outcome.action_type or type(action).__name__,
                    outcome.reason,
                )
                return outcome
        return ActionOutcome.proceed()

    def __repr__(self) -> str:
        return (
            f"EmployerIncentive(id={self._id}, employer_id={self._employer_id}, "
            f"incentive={self._incentive.name!r}, actions={len(self._actions)})"
        )
