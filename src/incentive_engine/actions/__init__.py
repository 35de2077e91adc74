"""Award actions: strategies that decide whether an event earns an award.

Importing this package registers every built-in action type.
"""

from incentive_engine.actions.base import BaseAwardAction
from incentive_engine.actions.immediate import ImmediateAction
from incentive_engine.actions.registry import create_action, list_actions, register_action
from incentive_engine.actions.threshold import ThresholdCountingAction

__all__ = [
    "BaseAwardAction",
    "ImmediateAction",
    "ThresholdCountingAction",
    "create_action",
    "list_actions",
    "register_action",
]
