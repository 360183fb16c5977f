from __future__ import annotations

import pytest
from pydantic import ValidationError

from backend.app import create_app
from backend.config import Settings, load_config


def test_defaults_without_environment():
    settings = load_config()

    assert settings["MONTE_CARLO_DEFAULT_ITERATIONS"] == 1000
    assert settings["LOG_LEVEL"] == "INFO"
    assert "Investments" in settings["ASSET_CATEGORIES"]


def test_environment_values_are_parsed_by_field_type(monkeypatch):
    monkeypatch.setenv("ASSET_PLANNER_MONTE_CARLO_MAX_ITERATIONS", "500")
    monkeypatch.setenv("ASSET_PLANNER_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("ASSET_PLANNER_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.MONTE_CARLO_MAX_ITERATIONS == 500
    assert settings.CORS_ORIGINS == ["http://a.test", "http://b.test"]
    assert settings.LOG_LEVEL == "DEBUG"


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("ASSET_PLANNER_MONTE_CARLO_MAX_YEARS", "20")

    settings = load_config({"MONTE_CARLO_MAX_YEARS": 10})

    assert settings["MONTE_CARLO_MAX_YEARS"] == 10


def test_non_setting_keys_pass_through_to_flask():
    settings = load_config({"TESTING": True})

    assert settings["TESTING"] is True
    assert settings["MONTE_CARLO_MAX_YEARS"] == 100


def test_bad_environment_value_names_the_field(monkeypatch):
    monkeypatch.setenv("ASSET_PLANNER_MONTE_CARLO_MAX_YEARS", "many")

    with pytest.raises(ValidationError, match="MONTE_CARLO_MAX_YEARS"):
        load_config()


def test_non_positive_limit_is_rejected():
    with pytest.raises(ValidationError, match="MONTE_CARLO_MAX_ITERATIONS"):
        load_config({"MONTE_CARLO_MAX_ITERATIONS": 0})


def test_unknown_log_level_is_rejected_before_the_app_starts():
    with pytest.raises(ValidationError, match="LOG_LEVEL"):
        create_app({"LOG_LEVEL": "chatty"})


def test_log_level_is_applied_to_the_app_logger():
    app = create_app({"LOG_LEVEL": "warning"})

    assert app.config["LOG_LEVEL"] == "WARNING"
    assert app.logger.level == 30


def test_app_uses_configured_categories():
    app = create_app({"ASSET_CATEGORIES": None})

    assert app.extensions["asset_store"].create_asset(
        {
            "name": "Anything",
            "initialAmount": 1,
            "category": "Whatever",
            "startDate": "2024-01-01",
            "returns": {"capitalGain": {"annualRate": 0.0}},
        }
    )
