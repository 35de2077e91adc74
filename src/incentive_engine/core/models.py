"""Immutable value objects shared by every component.

Both models are frozen pydantic models.  Constructor violations raise
``InvalidArgumentError``; ``validate()`` re-checks the same invariants at
use time and raises ``IncentiveValidationError``.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import IncentiveValidationError, InvalidArgumentError
from .ids import new_id, utc_now

NAME_PATTERN = re.compile(r"^[A-Za-z0-9-]+$")


def is_valid_name(name: str) -> bool:
    """Names and event names are non-empty ``[A-Za-z0-9-]`` strings."""
    return bool(name) and NAME_PATTERN.match(name) is not None


def is_valid_id(value: Any) -> bool:
    """Positive int record id (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


# ---------------------------------------------------------------------------
# Incentive
# ---------------------------------------------------------------------------

class Incentive(BaseModel):
    """A named, described award program available for employers to adopt.

    ``id == 0`` means the incentive has not been persisted yet.
    """

    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str
    description: str
    active: bool = True

    @model_validator(mode="after")
    def _check_invariants(self) -> Incentive:
        problems = self._problems()
        if problems:
            raise InvalidArgumentError(problems[0])
        return self

    def _problems(self) -> list[str]:
        problems: list[str] = []
        if not is_valid_name(self.name):
            problems.append("Name must be a non-empty alphanumeric string")
        if not self.description.strip():
            problems.append("Description must not be empty")
        if self.id < 0:
            problems.append("id must be greater than or equal to zero")
        return problems

    @property
    def is_persisted(self) -> bool:
        return self.id >= 1

    def validate(self) -> None:
        problems = self._problems()
        if problems:
            raise IncentiveValidationError("; ".join(problems))


# ---------------------------------------------------------------------------
# IncentiveEvent
# ---------------------------------------------------------------------------

class IncentiveEvent(BaseModel):
    """A validated record of a user performing a named action.

    Created once by the queue's event factory, never mutated, consumed
    exactly once by the processor.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    employer_id: int
    employer_incentive_id: int
    event_name: str
    event_id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def _check_invariants(self) -> IncentiveEvent:
        problems = self._problems()
        if problems:
            raise InvalidArgumentError(problems[0])
        return self

    def _problems(self) -> list[str]:
        problems: list[str] = []
        if self.user_id < 1:
            problems.append("user_id must be greater than zero")
        if self.employer_id < 1:
            problems.append("employer_id must be greater than zero")
        if not is_valid_name(self.event_name):
            problems.append("event name must be a non-empty alphanumeric string")
        if self.employer_incentive_id < 1:
            problems.append("employer_incentive_id must be greater than zero")
        return problems

    def validate(self) -> None:
        problems = self._problems()
        if problems:
            raise IncentiveValidationError("; ".join(problems))
