"""Custom exception hierarchy for the incentive engine.

Awards are not exceptions. Actions return an ``ActionOutcome`` instead
(see ``core.outcomes``).
"""

from __future__ import annotations


class IncentiveError(Exception):
    """Base exception for all incentive engine errors."""


# --- Arguments / validation ---
class InvalidArgumentError(IncentiveError):
    """A constructor or counter-key precondition was violated."""


class IncentiveValidationError(IncentiveError):
    """A value object failed its invariant check when re-validated at use time."""


# --- Storage ---
class RecordNotFoundError(IncentiveError):
    """A repository lookup found no matching record."""

    def __init__(self, entity: str = "record", key: object = None):
        self.entity = entity
        self.key = key
        if key is None:
            super().__init__(f"{entity} not found")
        else:
            super().__init__(f"{entity} not found: {key!r}")


class DuplicateRecordError(IncentiveError):
    """A record cannot be stored because the backing map cannot allocate it."""


# --- Configuration ---
class ConfigError(IncentiveError):
    """Invalid or missing configuration."""
