"""
Market value aggregator.

Combines the raw median, raw mean and the outlier-filtered median into a
single market value with a confidence score.

Methods:
    median  - raw median, no questions asked
    mean    - raw mean
    hybrid  - outlier-filtered median when the filter is confident enough,
              raw median otherwise (default)

Overall confidence:
    min(0.95, (filter_confidence + (n / 20) * 0.3) / 2)

When filtering is skipped (or n < 4) filter_confidence is 0, so overall
confidence stays low.
"""

import logging
import math
from typing import Any

from lotstats.core.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MIN_SAMPLE_SIZE,
    SAMPLE_SIZE_CONFIDENCE_DIVISOR,
    SAMPLE_SIZE_CONFIDENCE_WEIGHT,
    VALUE_DECIMALS,
)
from lotstats.core.exceptions import ValidationError
from lotstats.core.types import (
    MarketValueEstimate,
    OutlierResult,
    ValueFactors,
    WeightMethod,
)
from lotstats.guardrails.validators import validate_prices
from lotstats.outliers.filter import filter_outliers_smart
from lotstats.scoring.confidence import clamp_confidence
from lotstats.stats.primitives import mean, median


logger = logging.getLogger(__name__)


NO_DATA_METHOD = "no_data"
MEDIAN_FALLBACK_METHOD = "median_fallback"
FILTERED_METHOD_PREFIX = "outlier_filtered_"


def round_half_up(value: float, decimals: int = VALUE_DECIMALS) -> float:
    """Round with halves going up (not banker's rounding)."""
    factor = 10 ** decimals
    scaled = value * factor
    if math.isinf(scaled):
        # Too large to carry cents
        return value
    return math.floor(scaled + 0.5) / factor


def resolve_weight_method(weight_method: WeightMethod | str) -> WeightMethod:
    """Parse a requested weight method."""
    try:
        return WeightMethod(weight_method)
    except ValueError:
        raise ValidationError(
            "Unknown weight method",
            field="weight_method",
            value=weight_method,
        )


def overall_confidence(filter_confidence: float, sample_size: int) -> float:
    """Blend filter confidence with a linear sample-size term, clamped to [0, 0.95]."""
    size_term = (sample_size / SAMPLE_SIZE_CONFIDENCE_DIVISOR) * SAMPLE_SIZE_CONFIDENCE_WEIGHT
    return clamp_confidence((filter_confidence + size_term) / 2)


def estimate_market_value(
    prices: Any,
    outliers: OutlierResult | None,
    weight_method: WeightMethod | str = WeightMethod.HYBRID,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> MarketValueEstimate:
    """
    Estimate a market value from prices and the filter run behind it.

    Callers that report an OutlierResult alongside the value pass that
    same result here, so the two always describe one filter run.

    Args:
        prices: Observed prices (any order, duplicates allowed)
        outliers: Result of filtering these prices, or None when filtering
            was skipped. An insufficient_data result counts as no filter run.
        weight_method: "median", "mean" or "hybrid"
        confidence_threshold: Minimum filter confidence for hybrid to use
            the filtered median

    Returns:
        MarketValueEstimate with value rounded to cents

    Raises:
        ValidationError: Malformed prices or unknown weight method
    """
    sample = validate_prices(prices)
    method = resolve_weight_method(weight_method)
    n = len(sample)

    if n == 0:
        return MarketValueEstimate(
            value=0.0,
            confidence=0.0,
            method=NO_DATA_METHOD,
            factors=ValueFactors(median=0.0, mean=0.0, outlier_filtered=0.0, sample_size=0),
        )

    raw_median = median(sample)
    raw_mean = mean(sample)

    outlier_filtered = raw_median
    filter_confidence = 0.0
    filter_method = "none"

    if outliers is not None and outliers.method.is_strategy and outliers.filtered_prices:
        outlier_filtered = median(outliers.filtered_prices)
        filter_confidence = outliers.confidence
        filter_method = outliers.method.value

    if method == WeightMethod.MEDIAN:
        final_value = raw_median
        final_method = WeightMethod.MEDIAN.value
    elif method == WeightMethod.MEAN:
        final_value = raw_mean
        final_method = WeightMethod.MEAN.value
    elif filter_confidence >= confidence_threshold:
        final_value = outlier_filtered
        final_method = f"{FILTERED_METHOD_PREFIX}{filter_method}"
    else:
        final_value = raw_median
        final_method = MEDIAN_FALLBACK_METHOD

    logger.debug(
        f"Market value via {final_method}: {final_value:.2f} "
        f"(n={n}, filter_confidence={filter_confidence:.2f})"
    )

    return MarketValueEstimate(
        value=round_half_up(final_value),
        confidence=overall_confidence(filter_confidence, n),
        method=final_method,
        factors=ValueFactors(
            median=raw_median,
            mean=raw_mean,
            outlier_filtered=outlier_filtered,
            sample_size=n,
        ),
    )


def calculate_weighted_market_value(
    prices: Any,
    skip_outlier_filtering: bool = False,
    weight_method: WeightMethod | str = WeightMethod.HYBRID,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> MarketValueEstimate:
    """
    Estimate a single market value from observed prices.

    Runs the auto-selecting outlier filter itself when there are at
    least four prices and filtering is not skipped.

    Args:
        prices: Observed prices (any order, duplicates allowed)
        skip_outlier_filtering: Value raw prices only; the outlier filter
            never runs and filter confidence stays 0
        weight_method: "median", "mean" or "hybrid"
        confidence_threshold: Minimum filter confidence for hybrid to use
            the filtered median

    Returns:
        MarketValueEstimate with value rounded to cents

    Raises:
        ValidationError: Malformed prices or unknown weight method
    """
    sample = validate_prices(prices)
    resolve_weight_method(weight_method)

    outliers = None
    if not skip_outlier_filtering and len(sample) >= DEFAULT_MIN_SAMPLE_SIZE:
        outliers = filter_outliers_smart(sample)

    return estimate_market_value(
        sample,
        outliers,
        weight_method=weight_method,
        confidence_threshold=confidence_threshold,
    )
