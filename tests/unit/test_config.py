"""Test Settings loading and action binding validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from incentive_engine.core.config import (
    ActionBindingConfig,
    ActionParamConfig,
    Settings,
    load_settings,
)
from incentive_engine.core.enums import ActionType
from incentive_engine.core.errors import ConfigError


class TestSettingsDefaults:
    def test_default_settings(self):
        settings = Settings()
        assert settings.counter.debounce_interval_seconds == 86_400
        assert settings.observability.log_level == "INFO"
        assert settings.observability.log_format == "json"
        assert settings.actions == []

    def test_negative_debounce_rejected(self):
        with pytest.raises(ValidationError):
            Settings(counter={"debounce_interval_seconds": -1})

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("INCENTIVE_COUNTER__DEBOUNCE_INTERVAL_SECONDS", "0")
        assert Settings().counter.debounce_interval_seconds == 0


class TestActionBindings:
    def test_binding_requires_action(self):
        with pytest.raises(ValidationError):
            ActionBindingConfig(incentive_name="user-birth", actions=[])

    def test_binding_name_format(self):
        with pytest.raises(ValidationError, match="alphanumeric"):
            ActionBindingConfig(
                incentive_name="user birth",
                actions=[ActionParamConfig(action_type=ActionType.IMMEDIATE)],
            )

    def test_unknown_action_type_rejected(self):
        with pytest.raises(ValidationError):
            ActionParamConfig(action_type="teleport")

    def test_bindings_map(self):
        settings = Settings(
            actions=[
                {
                    "incentive_name": "user-birth",
                    "actions": [{"action_type": "immediate"}],
                },
            ],
        )
        bindings = settings.action_bindings()
        assert list(bindings) == ["user-birth"]
        assert bindings["user-birth"][0].action_type == ActionType.IMMEDIATE

    def test_duplicate_binding_raises(self):
        binding = {"incentive_name": "user-birth", "actions": [{"action_type": "immediate"}]}
        settings = Settings(actions=[binding, binding])
        with pytest.raises(ConfigError, match="Duplicate"):
            settings.action_bindings()


class TestLoadSettings:
    def test_missing_file_returns_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.toml")
        assert settings.counter.debounce_interval_seconds == 86_400

    def test_loads_toml(self, tmp_path):
        path = tmp_path / "incentives.toml"
        path.write_text(
            """
[counter]
debounce_interval_seconds = 3600

[observability]
log_format = "console"

[[actions]]
incentive_name = "data-logged-5-sequential-days"

[[actions.actions]]
action_type = "threshold"
params = { actions_to_award = 5 }
"""
        )
        settings = load_settings(path)
        assert settings.counter.debounce_interval_seconds == 3600
        assert settings.observability.log_format == "console"
        binding = settings.action_bindings()["data-logged-5-sequential-days"]
        assert binding[0].params == {"actions_to_award": 5}

    def test_overrides_win(self, tmp_path):
        settings = load_settings(None, overrides={"counter": {"debounce_interval_seconds": 5}})
        assert settings.counter.debounce_interval_seconds == 5
