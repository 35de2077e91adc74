"""Fixed-map employer-incentive repository.

Backed by a mapping owned by the instance:
``{employer_incentive_id: {"employer_id": ..., "incentive_id": ...}}``.
Malformed rows raise ``ConfigError`` at construction.

Each built ``EmployerIncentive`` gets the actions bound to its incentive's
name in ``action_map``.  Swapping an action implementation only requires a
different map.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable, Mapping, Sequence

from incentive_engine.core.errors import (
    ConfigError,
    DuplicateRecordError,
    InvalidArgumentError,
    RecordNotFoundError,
)
from incentive_engine.core.interfaces import (
    IAwardAction,
    IEmployerIncentive,
    IIncentiveRepository,
)
from incentive_engine.core.models import Incentive, IncentiveEvent, is_valid_id
from incentive_engine.domain.employer_incentive import EmployerIncentive

logger = logging.getLogger(__name__)

# (id, employer_id, incentive, actions) -> employer incentive
EmployerIncentiveBuilder = Callable[
    [int, int, Incentive, Sequence[IAwardAction]], IEmployerIncentive
]


def build_employer_incentive(
    id: int,
    employer_id: int,
    incentive: Incentive,
    actions: Sequence[IAwardAction],
) -> IEmployerIncentive:
    """Default employer incentive builder."""
    return EmployerIncentive(id, employer_id, incentive, actions)


class MemoryEmployerIncentiveRepository:
    """Links between employers and incentives."""

    def __init__(
        self,
        rows: Mapping[int, Mapping[str, Any]],
        incentive_repository: IIncentiveRepository,
        action_map: Mapping[str, Iterable[IAwardAction]],
        employer_incentive_builder: EmployerIncentiveBuilder = build_employer_incentive,
    ) -> None:
        self._rows = self._validate_rows(rows)
        self._incentives = incentive_repository
        self._action_map = self._validate_action_map(action_map)
        self._builder = employer_incentive_builder
        self._lock = threading.RLock()

    @staticmethod
    def _validate_rows(
        rows: Mapping[int, Mapping[str, Any]],
    ) -> dict[int, dict[str, Any]]:
        out: dict[int, dict[str, Any]] = {}
        for link_id, row in rows.items():
            if not is_valid_id(link_id):
                raise ConfigError(
                    f"Employer incentive row id must be a positive int: {link_id!r}"
                )
            for field in ("employer_id", "incentive_id"):
                if not is_valid_id(row.get(field)):
                    raise ConfigError(
                        f"Employer incentive row {link_id} needs a positive int '{field}'"
                    )
            out[link_id] = dict(row)
        return out

    @staticmethod
    def _validate_action_map(
        action_map: Mapping[str, Iterable[IAwardAction]],
    ) -> dict[str, tuple[IAwardAction, ...]]:
        out: dict[str, tuple[IAwardAction, ...]] = {}
        for name, actions in action_map.items():
            if not isinstance(name, str) or not name:
                raise InvalidArgumentError("Action map keys must be non-empty strings")
            actions = tuple(actions)
            if not actions:
                raise InvalidArgumentError(
                    f"Action map entry '{name}' must be a non-empty list"
                )
            for action in actions:
                if not isinstance(action, IAwardAction):
                    raise InvalidArgumentError(
                        f"Action map entry '{name}' contains a non-action: {action!r}"
                    )
            out[name] = actions
        return out

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def create(self, employer_id: int, incentive: Incentive) -> IEmployerIncentive:
        """Build a new, unpersisted link (id 0)."""
        return self._build(0, employer_id, incentive)

    def get(self, employer_incentive_id: int) -> IEmployerIncentive:
        with self._lock:
            row = self._rows.get(employer_incentive_id)
            if row is None:
                raise RecordNotFoundError("employer incentive", employer_incentive_id)
            row = dict(row)
        return self._build_row(employer_incentive_id, row)

    def get_for_employer(self, employer_id: int) -> list[IEmployerIncentive]:
        with self._lock:
            matches = [
                (link_id, dict(row))
                for link_id, row in sorted(self._rows.items())
                if row["employer_id"] == employer_id
            ]
        return [self._build_row(link_id, row) for link_id, row in matches]

    def get_for_employer_by_event(
        self, employer_id: int, event_name: str,
    ) -> IEmployerIncentive:
        for record in self.get_for_employer(employer_id):
            if record.incentive.name == event_name:
                return record
        raise RecordNotFoundError(
            "employer incentive", f"employer={employer_id} event={event_name}"
        )

    def get_for_event(self, event: IncentiveEvent) -> IEmployerIncentive:
        event.validate()
        return self.get(event.employer_incentive_id)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save(self, *records: IEmployerIncentive) -> None:
        """Update existing links.  New records raise ``DuplicateRecordError``."""
        for record in records:
            record.validate()
        with self._lock:
            for record in records:
                if record.id < 1:
                    raise DuplicateRecordError(
                        "New records may not be saved to a fixed-map repository"
                    )
                if record.id not in self._rows:
                    raise RecordNotFoundError("employer incentive", record.id)
                self._rows[record.id] = {
                    "employer_id": record.employer_id,
                    "incentive_id": record.incentive.id,
                }
                logger.debug("Saved employer incentive %d", record.id)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _build_row(self, link_id: int, row: Mapping[str, Any]) -> IEmployerIncentive:
        incentive = self._incentives.get(row["incentive_id"])
        return self._build(link_id, row["employer_id"], incentive)

    def _build(
        self, link_id: int, employer_id: int, incentive: Incentive,
    ) -> IEmployerIncentive:
        incentive.validate()
        actions = self._action_map.get(incentive.name)
        if actions is None:
            raise ConfigError(
                f"Incentive '{incentive.name}' does not have any associated actions"
            )
        record = self._builder(link_id, employer_id, incentive, actions)
        record.validate()
        return record
