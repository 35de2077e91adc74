"""Wiring: build a ready-to-run engine from settings and seed tables.

Usage::

    engine = build_engine(load_settings("incentives.toml"))
    engine.trigger(user_id=1, employer_id=1, event_name="user-birth")
    outcome = engine.processor.run()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from incentive_engine.actions import create_action
from incentive_engine.core.clock import IClock, WallClock
from incentive_engine.core.config import (
    ActionBindingConfig,
    ActionParamConfig,
    Settings,
)
from incentive_engine.core.enums import ActionType
from incentive_engine.core.errors import ConfigError
from incentive_engine.core.interfaces import IAwardAction, ICounterStore, IEventLog
from incentive_engine.core.models import IncentiveEvent
from incentive_engine.counter import MemoryCounterStore
from incentive_engine.observability.event_log import StructlogEventLog
from incentive_engine.observability.logger import setup_logging
from incentive_engine.processor import IncentiveProcessor
from incentive_engine.queue import MemoryIncentiveQueue
from incentive_engine.repository import (
    MemoryEmployerIncentiveRepository,
    MemoryIncentiveRepository,
)

logger = logging.getLogger(__name__)

DATA_LOGGED_5_DAYS = "data-logged-5-sequential-days"
USER_BIRTH = "user-birth"

DEFAULT_INCENTIVES: dict[int, dict[str, Any]] = {
    1: {
        "name": DATA_LOGGED_5_DAYS,
        "description": "The user has logged data five days in a row",
        "active": True,
    },
    2: {
        "name": USER_BIRTH,
        "description": "The user has reported a birth",
        "active": True,
    },
}

DEFAULT_LINKS: dict[int, dict[str, int]] = {
    1: {"employer_id": 1, "incentive_id": 1},
    2: {"employer_id": 1, "incentive_id": 2},
}


def default_action_bindings() -> list[ActionBindingConfig]:
    return [
        ActionBindingConfig(
            incentive_name=DATA_LOGGED_5_DAYS,
            actions=[
                ActionParamConfig(
                    action_type=ActionType.THRESHOLD,
                    params={
                        "actions_to_award": 5,
                        "award_reason": "data-logged-5-days",
                    },
                ),
            ],
        ),
        ActionBindingConfig(
            incentive_name=USER_BIRTH,
            actions=[
                ActionParamConfig(
                    action_type=ActionType.IMMEDIATE,
                    params={"award_reason": "user-birth-recorded"},
                ),
            ],
        ),
    ]


@dataclass
class IncentiveEngine:
    """Every collaborator of one wired engine."""

    settings: Settings
    clock: IClock
    counter: ICounterStore
    incentives: MemoryIncentiveRepository
    employer_incentives: MemoryEmployerIncentiveRepository
    queue: MemoryIncentiveQueue
    processor: IncentiveProcessor
    event_log: IEventLog | None = None

    def trigger(self, user_id: int, employer_id: int, event_name: str) -> IncentiveEvent:
        """Create and enqueue an event (what a log endpoint would call)."""
        event = self.queue.create_event(user_id, employer_id, event_name)
        self.queue.enqueue(event)
        return event


def configure_logging(settings: Settings) -> None:
    """Apply the observability section of *settings* to logging."""
    setup_logging(
        level=settings.observability.log_level,
        format=settings.observability.log_format,
    )


def build_action_map(
    settings: Settings,
    counter: ICounterStore,
) -> dict[str, list[IAwardAction]]:
    """Instantiate the incentive-name -> actions map from settings."""
    bindings = settings.action_bindings()
    if not bindings:
        raise ConfigError("No action bindings configured")

    action_map: dict[str, list[IAwardAction]] = {}
    for incentive_name, action_configs in bindings.items():
        action_map[incentive_name] = [
            create_action(cfg.action_type.value, cfg.params, counter=counter)
            for cfg in action_configs
        ]
    return action_map


def build_engine(
    settings: Settings | None = None,
    incentive_rows: Mapping[int, Mapping[str, Any]] | None = None,
    link_rows: Mapping[int, Mapping[str, Any]] | None = None,
    *,
    clock: IClock | None = None,
    event_log: IEventLog | None = None,
) -> IncentiveEngine:
    """Wire counter, repositories, queue and processor together.

    Missing arguments fall back to the reference demo data: one employer
    with the "data-logged-5-sequential-days" and "user-birth" incentives.
    """
    settings = settings or Settings(actions=default_action_bindings())
    if not settings.actions:
        settings = settings.model_copy(update={"actions": default_action_bindings()})
    clock = clock or WallClock()

    counter = MemoryCounterStore(
        interval=settings.counter.debounce_interval_seconds,
        clock=clock,
    )
    action_map = build_action_map(settings, counter)

    incentives = MemoryIncentiveRepository(
        incentive_rows if incentive_rows is not None else DEFAULT_INCENTIVES
    )
    employer_incentives = MemoryEmployerIncentiveRepository(
        link_rows if link_rows is not None else DEFAULT_LINKS,
        incentives,
        action_map,
    )
    queue = MemoryIncentiveQueue(employer_incentives)

    if event_log is None and settings.observability.audit_events:
        event_log = StructlogEventLog()

    processor = IncentiveProcessor(queue, employer_incentives, event_log=event_log)

    logger.info(
        "Incentive engine ready: %d action bindings, debounce=%ds",
        len(action_map),
        settings.counter.debounce_interval_seconds,
    )
    return IncentiveEngine(
        settings=settings,
        clock=clock,
        counter=counter,
        incentives=incentives,
        employer_incentives=employer_incentives,
        queue=queue,
        processor=processor,
        event_log=event_log,
    )
