"""
Smart outlier filter.

Validates a price sample, computes its statistics, picks (or honors) a
filtering strategy, applies it, and scores confidence in the result.

Samples smaller than min_sample_size are returned untouched with
method=insufficient_data - too few prices to call any of them unusual.
"""

import logging
from typing import Any

from lotstats.core.constants import (
    DEFAULT_CONFIDENCE_THRESHOLD,
    DEFAULT_MIN_SAMPLE_SIZE,
    INSUFFICIENT_DATA_CONFIDENCE,
)
from lotstats.core.exceptions import ValidationError
from lotstats.core.types import OutlierMethod, OutlierResult, PriceStatistics
from lotstats.guardrails.validators import validate_prices
from lotstats.outliers.strategies import apply_strategy, select_strategy
from lotstats.scoring.confidence import score_confidence
from lotstats.stats.primitives import describe


logger = logging.getLogger(__name__)


def resolve_method(method: OutlierMethod | str) -> OutlierMethod:
    """
    Parse a requested filtering method.

    Args:
        method: "auto", "mad", "iqr", "trimmed" or the matching enum

    Returns:
        OutlierMethod (AUTO or a concrete strategy)
    """
    try:
        resolved = OutlierMethod(method)
    except ValueError:
        raise ValidationError(
            "Unknown outlier method",
            field="method",
            value=method,
        )

    if resolved != OutlierMethod.AUTO and not resolved.is_strategy:
        raise ValidationError(
            "Not a filtering strategy",
            field="method",
            value=method,
        )
    return resolved


def filter_outliers_smart(
    prices: Any,
    method: OutlierMethod | str = OutlierMethod.AUTO,
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE,
) -> OutlierResult:
    """
    Remove outliers from a price sample.

    Strategy auto-selection (priority order):
    1. n >= 8 and CV > 0.8 -> MAD
    2. n >= 6              -> IQR
    3. otherwise           -> trimmed

    Args:
        prices: Observed prices (any order, duplicates allowed)
        method: "auto" or an explicit strategy that bypasses selection
        confidence_threshold: Accepted for call-site compatibility with the
            value aggregator; the filter itself does not gate on it
        min_sample_size: Below this size no filtering is attempted

    Returns:
        OutlierResult with kept/removed prices, method, confidence and
        statistics of the original sample

    Raises:
        ValidationError: Malformed prices or unknown method
    """
    sample = validate_prices(prices)
    requested = resolve_method(method)
    n = len(sample)

    if n == 0 or n < min_sample_size:
        return OutlierResult(
            filtered_prices=sample,
            outliers=(),
            method=OutlierMethod.INSUFFICIENT_DATA,
            confidence=INSUFFICIENT_DATA_CONFIDENCE,
            statistics=PriceStatistics.counts_only(n),
        )

    summary = describe(sample)

    if requested == OutlierMethod.AUTO:
        selected = select_strategy(n, summary.cv)
    else:
        selected = requested

    split = apply_strategy(selected, sample, summary)

    logger.debug(
        f"Outlier filter {selected.value}: kept {len(split.kept)}/{n}, "
        f"cv={summary.cv:.3f}, mad={summary.mad:.2f}, iqr={summary.iqr:.2f}"
    )

    confidence = score_confidence(
        sample_size=n,
        filtered_count=len(split.kept),
        variance=summary.variance,
        standard_deviation=summary.std,
        coefficient_of_variation=summary.cv,
        method=selected,
    )

    return OutlierResult(
        filtered_prices=split.kept,
        outliers=split.removed,
        method=selected,
        confidence=confidence,
        statistics=PriceStatistics(
            original_count=n,
            filtered_count=len(split.kept),
            outlier_count=len(split.removed),
            variance=summary.variance,
            standard_deviation=summary.std,
            coefficient_of_variation=summary.cv,
            mad=summary.mad,
            iqr=summary.iqr,
        ),
    )
