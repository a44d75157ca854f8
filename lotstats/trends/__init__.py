"""Price trend analysis module."""

from lotstats.trends.analyzer import (
    analyze_price_trends,
    average_relative_change,
    classify_trend,
    detect_seasonality,
    generate_insights,
)

__all__ = [
    "analyze_price_trends",
    "average_relative_change",
    "classify_trend",
    "detect_seasonality",
    "generate_insights",
]
