"""Enumerations used across the incentive engine."""

from enum import Enum


class OutcomeKind(str, Enum):
    CONTINUE = "continue"  # Condition not met, keep going
    AWARDED = "awarded"  # Trigger condition met


class ProcessorState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class ActionType(str, Enum):
    THRESHOLD = "threshold"  # Award after N debounced occurrences
    IMMEDIATE = "immediate"  # Award on the first occurrence
