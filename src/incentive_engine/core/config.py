"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from .enums import ActionType
from .errors import ConfigError
from .models import is_valid_name


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class CounterConfig(BaseModel):
    # Minimum seconds between two effective increments for the same key
    debounce_interval_seconds: int = Field(default=60 * 60 * 24, ge=0)


class ActionParamConfig(BaseModel):
    action_type: ActionType
    params: dict[str, Any] = Field(default_factory=dict)


class ActionBindingConfig(BaseModel):
    """Ordered award actions attached to every adoption of one incentive."""

    incentive_name: str
    actions: list[ActionParamConfig] = Field(min_length=1)

    @field_validator("incentive_name")
    @classmethod
    def _name_format(cls, v: str) -> str:
        if not is_valid_name(v):
            raise ValueError("incentive_name must be a non-empty alphanumeric string")
        return v


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    audit_events: bool = True


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    counter: CounterConfig = Field(default_factory=CounterConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    actions: list[ActionBindingConfig] = Field(default_factory=list)

    model_config = {"env_prefix": "INCENTIVE_", "env_nested_delimiter": "__"}

    def action_bindings(self) -> dict[str, list[ActionParamConfig]]:
        """Incentive name -> ordered action configs."""
        out: dict[str, list[ActionParamConfig]] = {}
        for binding in self.actions:
            if binding.incentive_name in out:
                raise ConfigError(
                    f"Duplicate action binding for incentive "
                    f"'{binding.incentive_name}'"
                )
            out[binding.incentive_name] = list(binding.actions)
        return out


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            with open(path, "rb") as f:
                data = tomli.load(f)

    if overrides:
        data.update(overrides)

    return Settings(**data)
