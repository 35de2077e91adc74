"""Award action registry and factory.

Actions register themselves here. The bootstrap layer uses this to build
the incentive-name -> actions map from configuration.
"""

from __future__ import annotations

from typing import Any, Type

from incentive_engine.core.errors import ConfigError
from incentive_engine.core.interfaces import ICounterStore

from .base import BaseAwardAction

_REGISTRY: dict[str, Type[BaseAwardAction]] = {}


def register_action(action_type: str):
    """Decorator to register an award action class."""

    def decorator(cls: Type[BaseAwardAction]) -> Type[BaseAwardAction]:
        cls.action_type = action_type
        _REGISTRY[action_type] = cls
        return cls

    return decorator


def create_action(
    action_type: str,
    params: dict[str, Any] | None = None,
    *,
    counter: ICounterStore | None = None,
) -> BaseAwardAction:
    """Create an award action instance by type."""
    cls = _REGISTRY.get(getattr(action_type, "value", action_type))
    if cls is None:
        available = ", ".join(sorted(_REGISTRY.keys()))
        raise ConfigError(
            f"Unknown action type '{action_type}'. Available: {available}"
        )
    return cls.from_params(params or {}, counter=counter)


def list_actions() -> list[str]:
    """List all registered action types."""
    return sorted(_REGISTRY.keys())
