"""
Price trend analyzer.

Rule-based, deterministic read on a chronologically ordered price series
(first = oldest). Runs independently of outlier filtering, on raw prices.

Trend rules are evaluated in priority order - first match wins:
1. CV > 0.8               -> volatile (no trustworthy direction)
2. last > first * 1.1     -> increasing
3. last < first * 0.9     -> decreasing
4. otherwise              -> stable

Only the endpoints set the direction; the path between them does not.
"""

import logging
from typing import Any, Sequence

import numpy as np

from lotstats.core.constants import (
    INSIGHT_DECLINING,
    INSIGHT_HIGH_VOLATILITY,
    INSIGHT_INSUFFICIENT_DATA,
    INSIGHT_LOW_VOLATILITY,
    INSIGHT_SEASONAL,
    INSIGHT_UPWARD,
    INSIGHT_VOLATILE_TREND,
    SEASONALITY_MIN_AVG_CHANGE,
    SEASONALITY_MIN_DATES,
    TREND_DECREASE_RATIO,
    TREND_INCREASE_RATIO,
    TREND_MIN_SAMPLES,
    TREND_VOLATILE_CV,
)
from lotstats.core.types import TrendDirection, TrendReport, VolatilityLevel
from lotstats.guardrails.validators import (
    check_dates_alignment,
    validate_dates,
    validate_prices,
)
from lotstats.stats.primitives import coefficient_of_variation


logger = logging.getLogger(__name__)


TREND_INSIGHTS = {
    TrendDirection.INCREASING: INSIGHT_UPWARD,
    TrendDirection.DECREASING: INSIGHT_DECLINING,
    TrendDirection.VOLATILE: INSIGHT_VOLATILE_TREND,
}

VOLATILITY_INSIGHTS = {
    VolatilityLevel.HIGH: INSIGHT_HIGH_VOLATILITY,
    VolatilityLevel.LOW: INSIGHT_LOW_VOLATILITY,
}


def classify_trend(prices: Sequence[float], cv: float) -> TrendDirection:
    """
    Classify the direction of a price series.

    Args:
        prices: Chronological prices (at least one)
        cv: Coefficient of variation of the series

    Returns:
        TrendDirection
    """
    first, last = prices[0], prices[-1]

    if cv > TREND_VOLATILE_CV:
        return TrendDirection.VOLATILE
    elif last > first * TREND_INCREASE_RATIO:
        return TrendDirection.INCREASING
    elif last < first * TREND_DECREASE_RATIO:
        return TrendDirection.DECREASING
    else:
        return TrendDirection.STABLE


def average_relative_change(prices: Sequence[float]) -> float:
    """
    Mean of |p[i] - p[i-1]| / p[i-1] over consecutive prices.

    A step from a zero price counts as no change.
    """
    if len(prices) < 2:
        return 0.0

    arr = np.asarray(prices, dtype=np.float64)
    previous = arr[:-1]
    steps = np.abs(np.diff(arr))
    changes = np.divide(steps, previous, out=np.zeros_like(steps), where=previous != 0)
    return float(np.mean(changes))


def detect_seasonality(prices: Sequence[float], dates: Sequence[str] | None) -> bool:
    """
    Flag seasonal swings.

    Only evaluated with at least six dates; then a mean step-to-step
    change above 20% counts as a seasonal pattern.
    """
    if dates is None or len(dates) < SEASONALITY_MIN_DATES:
        return False
    return average_relative_change(prices) > SEASONALITY_MIN_AVG_CHANGE


def generate_insights(
    trend: TrendDirection,
    volatility: VolatilityLevel,
    seasonality: bool,
) -> tuple[str, ...]:
    """
    Build insights in fixed order: trend, volatility, seasonality.

    Stable trends and medium volatility add nothing.
    """
    insights = []

    if trend in TREND_INSIGHTS:
        insights.append(TREND_INSIGHTS[trend])

    if volatility in VOLATILITY_INSIGHTS:
        insights.append(VOLATILITY_INSIGHTS[volatility])

    if seasonality:
        insights.append(INSIGHT_SEASONAL)

    return tuple(insights)


def analyze_price_trends(prices: Any, dates: Any = None) -> TrendReport:
    """
    Analyze trend, volatility and seasonality of a price series.

    Args:
        prices: Prices in chronological order (oldest first)
        dates: Optional observation dates parallel to prices

    Returns:
        TrendReport with labels and ordered insights

    Raises:
        ValidationError: Malformed prices or dates
    """
    series = validate_prices(prices)
    date_values = validate_dates(dates)
    check_dates_alignment(series, date_values)

    if len(series) < TREND_MIN_SAMPLES:
        return TrendReport(
            trend=TrendDirection.STABLE,
            volatility=VolatilityLevel.LOW,
            seasonality=False,
            insights=(INSIGHT_INSUFFICIENT_DATA,),
        )

    cv = coefficient_of_variation(series)
    trend = classify_trend(series, cv)
    volatility = VolatilityLevel.from_cv(cv)
    seasonality = detect_seasonality(series, date_values)

    logger.debug(
        f"Trend {trend.value}, volatility {volatility.value}, "
        f"seasonality={seasonality} (n={len(series)}, cv={cv:.3f})"
    )

    return TrendReport(
        trend=trend,
        volatility=volatility,
        seasonality=seasonality,
        insights=generate_insights(trend, volatility, seasonality),
    )
