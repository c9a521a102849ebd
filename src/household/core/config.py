#!/usr/bin/env python3
"""
Configuration Management for Household Finances

Environment-based configuration with defaults and validation. Supports
development, test and production environments.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class AnalysisConfig:
    """Settings for the aggregation engine."""

    timezone: str = "UTC"
    trend_months: int = 6
    summary_months: int = 3
    budget_warning_percent: int = 80

    @property
    def tzinfo(self) -> ZoneInfo:
        """Timezone used to draw calendar-month boundaries."""
        return ZoneInfo(self.timezone)


@dataclass
class Config:
    """
    Main configuration class for the household finances application.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment
    data_dir: Path
    analysis: AnalysisConfig

    # Identity used to pick "my balance" out of a settlement
    current_user: str | None = None

    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("HOUSEHOLD_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_household"
            data_dir = Path(os.getenv("HOUSEHOLD_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("HOUSEHOLD_DATA_DIR", "./data")).expanduser().resolve()

        analysis = AnalysisConfig(
            timezone=os.getenv("HOUSEHOLD_TIMEZONE", "UTC"),
            trend_months=int(os.getenv("HOUSEHOLD_TREND_MONTHS", "6")),
            summary_months=int(os.getenv("HOUSEHOLD_SUMMARY_MONTHS", "3")),
            budget_warning_percent=int(os.getenv("HOUSEHOLD_BUDGET_WARNING_PERCENT", "80")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            analysis=analysis,
            current_user=os.getenv("HOUSEHOLD_USER") or None,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        try:
            ZoneInfo(self.analysis.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown timezone: {self.analysis.timezone}")

        if self.analysis.trend_months <= 0:
            errors.append("HOUSEHOLD_TREND_MONTHS must be positive")
        if self.analysis.summary_months <= 0:
            errors.append("HOUSEHOLD_SUMMARY_MONTHS must be positive")
        if not 0 < self.analysis.budget_warning_percent <= 100:
            errors.append("HOUSEHOLD_BUDGET_WARNING_PERCENT must be 1-100")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary."""
        return {
            "environment": self.environment.value,
            "data_dir": str(self.data_dir),
            "analysis": dict(self.analysis.__dict__),
            "current_user": self.current_user,
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
