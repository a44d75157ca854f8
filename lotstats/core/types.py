"""
Core type definitions for LOTSTATS.

Defines enums and result dataclasses used throughout the system.
Every result is a frozen value created per call - nothing here is
mutated or persisted by the engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from lotstats.core.constants import VOLATILITY_LOW_CV, VOLATILITY_MEDIUM_CV


class OutlierMethod(str, Enum):
    """
    Outlier filtering strategies.

    AUTO is only valid as a request; results always carry the strategy
    that actually ran (or INSUFFICIENT_DATA when none could).
    """

    AUTO = "auto"
    MAD = "mad"
    IQR = "iqr"
    TRIMMED = "trimmed"
    INSUFFICIENT_DATA = "insufficient_data"

    @property
    def is_strategy(self) -> bool:
        """Whether this names a concrete filtering strategy."""
        return self in (OutlierMethod.MAD, OutlierMethod.IQR, OutlierMethod.TRIMMED)


class WeightMethod(str, Enum):
    """How the final market value is picked."""

    MEDIAN = "median"
    MEAN = "mean"
    HYBRID = "hybrid"


class TrendDirection(str, Enum):
    """
    Price trend labels.

    VOLATILE takes priority over any direction - a swinging series has
    no trustworthy direction.
    """

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    VOLATILE = "volatile"


class VolatilityLevel(str, Enum):
    """Price volatility levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_cv(cls, cv: float) -> "VolatilityLevel":
        """Convert coefficient of variation to level."""
        if cv < VOLATILITY_LOW_CV:
            return cls.LOW
        elif cv < VOLATILITY_MEDIUM_CV:
            return cls.MEDIUM
        else:
            return cls.HIGH


@dataclass(frozen=True)
class PriceStatistics:
    """Statistics snapshot of the ORIGINAL price array."""

    original_count: int
    filtered_count: int
    outlier_count: int
    variance: float
    standard_deviation: float
    coefficient_of_variation: float
    mad: float  # Median Absolute Deviation
    iqr: float  # Interquartile range (positional quartiles)

    @classmethod
    def counts_only(cls, count: int) -> "PriceStatistics":
        """Zeroed statistics for samples too small to analyze."""
        return cls(
            original_count=count,
            filtered_count=count,
            outlier_count=0,
            variance=0.0,
            standard_deviation=0.0,
            coefficient_of_variation=0.0,
            mad=0.0,
            iqr=0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "originalCount": self.original_count,
            "filteredCount": self.filtered_count,
            "outlierCount": self.outlier_count,
            "variance": self.variance,
            "standardDeviation": self.standard_deviation,
            "coefficientOfVariation": self.coefficient_of_variation,
            "mad": self.mad,
            "iqr": self.iqr,
        }


@dataclass(frozen=True)
class OutlierResult:
    """
    Result of outlier filtering.

    filtered_prices and outliers together hold exactly the input prices.
    """

    filtered_prices: tuple[float, ...]
    outliers: tuple[float, ...]
    method: OutlierMethod
    confidence: float  # 0.0 to 0.95
    statistics: PriceStatistics

    @property
    def removal_rate(self) -> float:
        """Fraction of prices classified as outliers."""
        total = len(self.filtered_prices) + len(self.outliers)
        if total == 0:
            return 0.0
        return len(self.outliers) / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "filteredPrices": list(self.filtered_prices),
            "outliers": list(self.outliers),
            "method": self.method.value,
            "confidence": self.confidence,
            "statistics": self.statistics.to_dict(),
        }


@dataclass(frozen=True)
class ValueFactors:
    """Inputs behind a market value, exposed for transparency."""

    median: float
    mean: float
    outlier_filtered: float
    sample_size: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "median": self.median,
            "mean": self.mean,
            "outlierFiltered": self.outlier_filtered,
            "sampleSize": self.sample_size,
        }


@dataclass(frozen=True)
class MarketValueEstimate:
    """Single market value with its confidence and provenance."""

    value: float  # Rounded to cents
    confidence: float  # 0.0 to 0.95
    method: str  # median | mean | outlier_filtered_<m> | median_fallback | no_data
    factors: ValueFactors

    @property
    def has_data(self) -> bool:
        """Whether the estimate is backed by any prices."""
        return self.factors.sample_size > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "value": self.value,
            "confidence": self.confidence,
            "method": self.method,
            "factors": self.factors.to_dict(),
        }


@dataclass(frozen=True)
class TrendReport:
    """Qualitative read on a chronologically ordered price series."""

    trend: TrendDirection
    volatility: VolatilityLevel
    seasonality: bool
    insights: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "trend": self.trend.value,
            "volatility": self.volatility.value,
            "seasonality": self.seasonality,
            "insights": list(self.insights),
        }
