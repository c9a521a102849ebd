#!/usr/bin/env python3
"""Tests for environment-based configuration."""

from pathlib import Path

import pytest

from household.core.config import Config, Environment, get_config, reload_config


class TestConfigFromEnvironment:
    """Test Config.from_environment."""

    def test_test_environment_defaults(self, monkeypatch, temp_dir):
        monkeypatch.setenv("HOUSEHOLD_DATA_DIR", str(temp_dir))
        config = Config.from_environment()

        assert config.environment == Environment.TEST
        assert config.data_dir == temp_dir
        assert config.analysis.timezone == "UTC"
        assert config.analysis.trend_months == 6
        assert config.analysis.summary_months == 3
        assert config.analysis.budget_warning_percent == 80
        assert config.current_user is None

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("HOUSEHOLD_TIMEZONE", "Europe/Berlin")
        monkeypatch.setenv("HOUSEHOLD_TREND_MONTHS", "12")
        monkeypatch.setenv("HOUSEHOLD_BUDGET_WARNING_PERCENT", "90")
        monkeypatch.setenv("HOUSEHOLD_USER", "alice")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config.from_environment()
        assert config.analysis.tzinfo.key == "Europe/Berlin"
        assert config.analysis.trend_months == 12
        assert config.analysis.budget_warning_percent == 90
        assert config.current_user == "alice"
        assert config.log_level == "DEBUG"

    def test_production_data_dir_is_resolved(self, monkeypatch):
        monkeypatch.setenv("HOUSEHOLD_ENV", "production")
        monkeypatch.setenv("HOUSEHOLD_DATA_DIR", "relative/data")
        config = Config.from_environment()
        assert config.data_dir.is_absolute()
        assert config.data_dir == Path("relative/data").resolve()


class TestConfigValidation:
    """Test Config.validate."""

    def test_valid_config_has_no_errors(self):
        assert Config.from_environment().validate() == []

    def test_invalid_values_are_reported(self, monkeypatch):
        monkeypatch.setenv("HOUSEHOLD_TIMEZONE", "Mars/Olympus")
        monkeypatch.setenv("HOUSEHOLD_TREND_MONTHS", "0")
        monkeypatch.setenv("HOUSEHOLD_BUDGET_WARNING_PERCENT", "150")

        errors = Config.from_environment().validate()
        assert any("timezone" in e for e in errors)
        assert any("TREND_MONTHS" in e for e in errors)
        assert any("WARNING_PERCENT" in e for e in errors)

    def test_get_config_raises_on_invalid(self, monkeypatch):
        monkeypatch.setenv("HOUSEHOLD_TREND_MONTHS", "-1")
        with pytest.raises(ValueError, match="Configuration validation failed"):
            reload_config()

        monkeypatch.delenv("HOUSEHOLD_TREND_MONTHS")
        assert reload_config().analysis.trend_months == 6

    def test_get_config_is_cached(self):
        first = reload_config()
        assert get_config() is first

    def test_to_dict(self):
        data = Config.from_environment().to_dict()
        assert data["environment"] == "test"
        assert data["analysis"]["trend_months"] == 6
