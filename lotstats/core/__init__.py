"""Core module containing types, configuration, and shared utilities."""

from lotstats.core.types import (
    MarketValueEstimate,
    OutlierMethod,
    OutlierResult,
    PriceStatistics,
    TrendDirection,
    TrendReport,
    ValueFactors,
    VolatilityLevel,
    WeightMethod,
)
from lotstats.core.config import Settings, ValuationConfig, get_settings, load_config
from lotstats.core.exceptions import (
    LotStatsError,
    ConfigurationError,
    InsufficientDataError,
    ValidationError,
)

__all__ = [
    # Types
    "MarketValueEstimate",
    "OutlierMethod",
    "OutlierResult",
    "PriceStatistics",
    "TrendDirection",
    "TrendReport",
    "ValueFactors",
    "VolatilityLevel",
    "WeightMethod",
    # Config
    "Settings",
    "ValuationConfig",
    "get_settings",
    "load_config",
    # Exceptions
    "LotStatsError",
    "ConfigurationError",
    "InsufficientDataError",
    "ValidationError",
]
