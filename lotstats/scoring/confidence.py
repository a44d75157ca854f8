"""
Confidence scorer.

Derives a bounded confidence score for an outlier-filtered sample.

Formula (additive, then clamped to [0, 0.95]):
    0.5 base
    + sample size bonus    (highest matching tier only)
    + data quality         (kept / original ratio)
    + price stability      (coefficient of variation)
    + method reliability   (mad > iqr > trimmed)

The weights are heuristic, NOT fitted.
"""

from dataclasses import dataclass
from typing import Any

from lotstats.core.constants import (
    BASE_CONFIDENCE,
    CV_HIGH_VARIANCE,
    CV_HIGH_VARIANCE_PENALTY,
    CV_STABLE,
    CV_STABLE_BONUS,
    CV_VERY_STABLE,
    CV_VERY_STABLE_BONUS,
    DATA_QUALITY_GOOD,
    DATA_QUALITY_GOOD_BONUS,
    DATA_QUALITY_HIGH,
    DATA_QUALITY_HIGH_BONUS,
    DATA_QUALITY_POOR,
    DATA_QUALITY_POOR_PENALTY,
    MAX_CONFIDENCE,
    METHOD_ADJUSTMENTS,
    MIN_CONFIDENCE,
    SAMPLE_SIZE_TIERS,
)
from lotstats.core.types import OutlierMethod


def clamp_confidence(value: float) -> float:
    """Clamp to [0, 0.95]."""
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))


@dataclass(frozen=True)
class ConfidenceBreakdown:
    """Per-factor contributions to a confidence score."""

    base: float
    sample_size: float
    data_quality: float
    stability: float
    method: float

    @property
    def raw_total(self) -> float:
        """Unclamped sum of all contributions."""
        return self.base + self.sample_size + self.data_quality + self.stability + self.method

    @property
    def total(self) -> float:
        """Clamped confidence score."""
        return clamp_confidence(self.raw_total)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "base": self.base,
            "sampleSize": round(self.sample_size, 4),
            "dataQuality": round(self.data_quality, 4),
            "stability": round(self.stability, 4),
            "method": round(self.method, 4),
            "total": round(self.total, 4),
        }


def _sample_size_bonus(sample_size: int) -> float:
    for min_size, bonus in SAMPLE_SIZE_TIERS:
        if sample_size >= min_size:
            return bonus
    return 0.0


def _data_quality_adjustment(sample_size: int, filtered_count: int) -> float:
    ratio = filtered_count / sample_size if sample_size > 0 else 0.0
    if ratio >= DATA_QUALITY_HIGH:
        return DATA_QUALITY_HIGH_BONUS
    elif ratio >= DATA_QUALITY_GOOD:
        return DATA_QUALITY_GOOD_BONUS
    elif ratio < DATA_QUALITY_POOR:
        return DATA_QUALITY_POOR_PENALTY
    return 0.0


def _stability_adjustment(cv: float) -> float:
    if cv < CV_VERY_STABLE:
        return CV_VERY_STABLE_BONUS
    elif cv < CV_STABLE:
        return CV_STABLE_BONUS
    elif cv > CV_HIGH_VARIANCE:
        return CV_HIGH_VARIANCE_PENALTY
    return 0.0


def confidence_breakdown(
    sample_size: int,
    filtered_count: int,
    variance: float,
    standard_deviation: float,
    coefficient_of_variation: float,
    method: OutlierMethod | str,
) -> ConfidenceBreakdown:
    """
    Score each confidence factor separately.

    variance and standard_deviation are accepted for a complete statistics
    hand-off; stability is judged on the scale-free CV alone.

    Args:
        sample_size: Prices before filtering
        filtered_count: Prices kept after filtering
        variance: Population variance of the original sample
        standard_deviation: Standard deviation of the original sample
        coefficient_of_variation: CV of the original sample
        method: Strategy that produced filtered_count

    Returns:
        ConfidenceBreakdown with one entry per factor
    """
    method_key = OutlierMethod(method).value

    return ConfidenceBreakdown(
        base=BASE_CONFIDENCE,
        sample_size=_sample_size_bonus(sample_size),
        data_quality=_data_quality_adjustment(sample_size, filtered_count),
        stability=_stability_adjustment(coefficient_of_variation),
        method=METHOD_ADJUSTMENTS.get(method_key, 0.0),
    )


def score_confidence(
    sample_size: int,
    filtered_count: int,
    variance: float,
    standard_deviation: float,
    coefficient_of_variation: float,
    method: OutlierMethod | str,
) -> float:
    """
    Confidence score in [0, 0.95] for a filtered sample.

    See confidence_breakdown for the arguments.
    """
    return confidence_breakdown(
        sample_size=sample_size,
        filtered_count=filtered_count,
        variance=variance,
        standard_deviation=standard_deviation,
        coefficient_of_variation=coefficient_of_variation,
        method=method,
    ).total
