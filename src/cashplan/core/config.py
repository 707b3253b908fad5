#!/usr/bin/env python3
"""
Configuration Management for the Cash-Flow Planner

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .dates import YearMonth

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class ProjectionConfig:
    """Defaults applied when a snapshot omits its planning settings."""

    default_start_month: str = "2025-02"
    default_horizon_months: int = 18
    payout_pct: float = 0.85


@dataclass
class SyncConfig:
    """
    Remote sync timing.

    The sync transport itself lives outside this package; these values are
    passed through to it unchanged.
    """

    heartbeat_seconds: int = 30
    poll_seconds: int = 15
    updated_by: str | None = None


@dataclass
class ChartConfig:
    """Balance chart rendering options."""

    output_dir: Path
    width: int = 12
    height: int = 6
    dpi: int = 150


@dataclass
class Config:
    """
    Main configuration class for the planner.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment

    # Core locations
    data_dir: Path
    snapshot_file: Path

    # Component configurations
    projection: ProjectionConfig
    sync: SyncConfig
    chart: ChartConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("CASHPLAN_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_cashplan"
            data_dir = Path(os.getenv("CASHPLAN_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("CASHPLAN_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        snapshot_env = os.getenv("CASHPLAN_SNAPSHOT_FILE")
        snapshot_file = Path(snapshot_env) if snapshot_env else data_dir / "workspace.json"

        projection = ProjectionConfig(
            default_start_month=os.getenv("CASHPLAN_DEFAULT_START_MONTH", "2025-02"),
            default_horizon_months=int(os.getenv("CASHPLAN_DEFAULT_HORIZON", "18")),
            payout_pct=float(os.getenv("CASHPLAN_PAYOUT_PCT", "0.85")),
        )

        sync = SyncConfig(
            heartbeat_seconds=int(os.getenv("CASHPLAN_SYNC_HEARTBEAT_SECONDS", "30")),
            poll_seconds=int(os.getenv("CASHPLAN_SYNC_POLL_SECONDS", "15")),
            updated_by=os.getenv("CASHPLAN_UPDATED_BY"),
        )

        chart = ChartConfig(
            output_dir=data_dir / "charts",
            width=int(os.getenv("CHART_WIDTH", "12")),
            height=int(os.getenv("CHART_HEIGHT", "6")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            snapshot_file=snapshot_file,
            projection=projection,
            sync=sync,
            chart=chart,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.projection.default_horizon_months < 1:
            errors.append("Default horizon must be at least one month")
        if not 0 <= self.projection.payout_pct <= 1:
            errors.append("Payout percentage must be between 0 and 1")
        if self.sync.heartbeat_seconds <= 0 or self.sync.poll_seconds <= 0:
            errors.append("Sync intervals must be positive")

        try:
            YearMonth.parse(self.projection.default_start_month)
        except ValueError as e:
            errors.append(f"Invalid default start month: {e}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # matplotlib is chatty at DEBUG
        logging.getLogger("matplotlib").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a JSON-friendly dictionary."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                result[field_name] = {
                    name: str(value) if isinstance(value, Path) else value
                    for name, value in field_value.__dict__.items()
                }
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()
