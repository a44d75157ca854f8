"""
Configuration management for LOTSTATS.

Loads settings from environment variables and YAML config files.
Uses pydantic for validation.

Priority order:
1. Environment variables (LOTSTATS_ prefix)
2. .env file
3. Field defaults

The statistical core never reads configuration - its defaults are the
constants in lotstats.core.constants. Settings and YAML configs only feed
the batch pipeline and command-line scripts.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lotstats.core.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MAX_WORKERS,
    DEFAULT_MIN_SAMPLE_SIZE,
)
from lotstats.core.exceptions import ConfigurationError
from lotstats.core.types import OutlierMethod, WeightMethod


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Paths and runtime knobs are loaded from .env file or environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOTSTATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Paths
    config_dir: Path = Field(
        default=Path("config"),
        description="Directory containing YAML config files",
    )
    output_dir: Path = Field(
        default=Path("output"),
        description="Directory for batch valuation results",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    # Batch processing
    max_workers: int = Field(
        default=DEFAULT_MAX_WORKERS,
        ge=1,
        description="Worker threads for batch valuation",
    )

    @field_validator("config_dir", "output_dir", mode="before")
    @classmethod
    def resolve_path(cls, v: str | Path) -> Path:
        """Convert string to Path and resolve."""
        return Path(v).resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str) -> str:
        """Ensure log level is uppercase."""
        return v.upper()


class ValuationConfig:
    """Valuation defaults loaded from valuation.yaml."""

    def __init__(self, config_path: Path):
        self._config = self._load_yaml(config_path)

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        """Load and parse YAML file."""
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        with open(path) as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValuationConfig":
        """Build a config directly from a mapping (no file)."""
        config = cls.__new__(cls)
        config._config = data
        return config

    @property
    def _valuation(self) -> dict[str, Any]:
        return self._config.get("valuation", {})

    @property
    def _outliers(self) -> dict[str, Any]:
        return self._config.get("outliers", {})

    @property
    def weight_method(self) -> WeightMethod:
        """Default value selection method."""
        raw = self._valuation.get("weight_method", WeightMethod.HYBRID.value)
        try:
            return WeightMethod(raw)
        except ValueError:
            raise ConfigurationError(f"Unknown weight_method: {raw}")

    @property
    def confidence_threshold(self) -> float:
        """Minimum filter confidence for the hybrid method to trust filtered data."""
        return float(
            self._valuation.get("confidence_threshold", DEFAULT_CONFIDENCE_THRESHOLD)
        )

    @property
    def skip_outlier_filtering(self) -> bool:
        """Whether to value raw prices without outlier filtering."""
        return bool(self._valuation.get("skip_outlier_filtering", False))

    @property
    def outlier_method(self) -> OutlierMethod:
        """Outlier strategy for standalone filtering."""
        raw = self._outliers.get("method", OutlierMethod.AUTO.value)
        try:
            method = OutlierMethod(raw)
        except ValueError:
            raise ConfigurationError(f"Unknown outlier method: {raw}")
        if method != OutlierMethod.AUTO and not method.is_strategy:
            raise ConfigurationError(f"Not a filtering strategy: {raw}")
        return method

    @property
    def min_sample_size(self) -> int:
        """Minimum prices before outlier filtering runs."""
        value = int(self._outliers.get("min_sample_size", DEFAULT_MIN_SAMPLE_SIZE))
        if value < 1:
            raise ConfigurationError(f"min_sample_size must be >= 1, got {value}")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


def load_config(config_type: str) -> ValuationConfig:
    """
    Load a specific configuration file.

    Args:
        config_type: Currently only "valuation"

    Returns:
        Appropriate config object
    """
    settings = get_settings()
    config_map = {
        "valuation": (settings.config_dir / "valuation.yaml", ValuationConfig),
    }

    if config_type not in config_map:
        raise ConfigurationError(
            f"Unknown config type: {config_type}. "
            f"Valid types: {list(config_map.keys())}"
        )

    path, config_class = config_map[config_type]
    return config_class(path)
