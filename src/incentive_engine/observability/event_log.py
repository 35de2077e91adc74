"""Event log sinks: audit visitors notified by the processor.

``StructlogEventLog`` emits one structured line per record.
``MemoryEventLog`` keeps records in a list for tests and debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from incentive_engine.core.ids import utc_now

from .logger import get_logger

# Record names emitted by the processor
AWARDED = "incentive.awarded"
NO_AWARD = "incentive.no_award"
SKIPPED_NOT_FOUND = "incentive.skipped.not_found"
SKIPPED_INVALID = "incentive.skipped.invalid"


@dataclass(frozen=True)
class EventLogRecord:
    name: str
    user_id: int
    employer_id: int
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)


class StructlogEventLog:
    """Writes audit records through structlog."""

    def __init__(self, logger_name: str = "incentive_engine.audit") -> None:
        self._log = get_logger(logger_name)

    def record(
        self,
        name: str,
        user_id: int,
        employer_id: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._log.info(name, user_id=user_id, employer_id=employer_id, **(context or {}))


class MemoryEventLog:
    """Keeps every record in memory."""

    def __init__(self) -> None:
        self._records: list[EventLogRecord] = []

    def record(
        self,
        name: str,
        user_id: int,
        employer_id: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        self._records.append(
            EventLogRecord(
                name=name,
                user_id=user_id,
                employer_id=employer_id,
                context=dict(context or {}),
            )
        )

    @property
    def records(self) -> list[EventLogRecord]:
        return list(self._records)

    def names(self) -> list[str]:
        return [r.name for r in self._records]

    def clear(self) -> None:
        self._records.clear()
