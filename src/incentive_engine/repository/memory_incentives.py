"""Fixed-map incentive repository.

Backed by a mapping owned by the instance (passed in at construction):
``{incentive_id: {"name": ..., "description": ..., "active": ...}}``.
New records cannot be allocated; only existing rows can be updated.
Malformed rows raise ``ConfigError`` at construction.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Mapping

from incentive_engine.core.errors import (
    ConfigError,
    DuplicateRecordError,
    RecordNotFoundError,
)
from incentive_engine.core.models import Incentive, is_valid_id

logger = logging.getLogger(__name__)

# (id, name, description, active) -> Incentive
IncentiveBuilder = Callable[[int, str, str, bool], Incentive]


def build_incentive(id: int, name: str, description: str, active: bool) -> Incentive:
    """Default incentive builder."""
    return Incentive(id=id, name=name, description=description, active=active)


class MemoryIncentiveRepository:
    """Global incentives available for employers to adopt."""

    def __init__(
        self,
        rows: Mapping[int, Mapping[str, Any]],
        incentive_builder: IncentiveBuilder = build_incentive,
    ) -> None:
        self._rows = self._validate_rows(rows)
        self._builder = incentive_builder
        self._lock = threading.RLock()

    @staticmethod
    def _validate_rows(
        rows: Mapping[int, Mapping[str, Any]],
    ) -> dict[int, dict[str, Any]]:
        out: dict[int, dict[str, Any]] = {}
        for incentive_id, row in rows.items():
            if not is_valid_id(incentive_id):
                raise ConfigError(
                    f"Incentive row id must be a positive int: {incentive_id!r}"
                )
            for field in ("name", "description"):
                if not isinstance(row.get(field), str):
                    raise ConfigError(
                        f"Incentive row {incentive_id} needs a string '{field}'"
                    )
            if not isinstance(row.get("active", True), bool):
                raise ConfigError(
                    f"Incentive row {incentive_id} has a non-bool 'active'"
                )
            out[incentive_id] = dict(row)
        return out

    def create(self, name: str, description: str) -> Incentive:
        """Build a new, unpersisted incentive (id 0)."""
        return self._builder(0, name, description, True)

    def get(self, incentive_id: int) -> Incentive:
        with self._lock:
            row = self._rows.get(incentive_id)
            if row is None:
                raise RecordNotFoundError("incentive", incentive_id)
            return self._build(incentive_id, row)

    def get_active_incentives(self) -> list[Incentive]:
        with self._lock:
            return [
                self._build(incentive_id, row)
                for incentive_id, row in sorted(self._rows.items())
                if row.get("active", True)
            ]

    def save(self, *incentives: Incentive) -> None:
        """Update existing rows.  New records raise ``DuplicateRecordError``."""
        for incentive in incentives:
            incentive.validate()
        with self._lock:
            for incentive in incentives:
                if not incentive.is_persisted:
                    raise DuplicateRecordError(
                        "New records may not be saved to a fixed-map repository"
                    )
                if incentive.id not in self._rows:
                    raise RecordNotFoundError("incentive", incentive.id)
                self._rows[incentive.id] = {
                    "name": incentive.name,
                    "description": incentive.description,
                    "active": incentive.active,
                }
                logger.debug("Saved incentive %d (%s)", incentive.id, incentive.name)

    def set_active(self, incentive_id: int, active: bool) -> None:
        with self._lock:
            row = self._rows.get(incentive_id)
            if row is None:
                raise RecordNotFoundError("incentive", incentive_id)
            row["active"] = active

    def _build(self, incentive_id: int, row: Mapping[str, Any]) -> Incentive:
        return self._builder(
            incentive_id,
            row["name"],
            row["description"],
            bool(row.get("active", True)),
        )
