"""
LOTSTATS - Market-Value Statistics Engine

Turns noisy collections of observed market prices into:
- Market Value Estimate: one defensible price with a confidence score
- Outlier Report: which prices were kept and which were discarded
- Trend Report: direction, volatility and seasonality with insights

Pure computation. Fetching, storing and rendering prices happen elsewhere.
"""

__version__ = "0.1.0"
__author__ = "LOTSTATS Team"

from lotstats.core.types import (
    MarketValueEstimate,
    OutlierMethod,
    OutlierResult,
    TrendDirection,
    TrendReport,
    VolatilityLevel,
    WeightMethod,
)
from lotstats.outliers import filter_outliers_smart, filter_price_outliers
from lotstats.trends import analyze_price_trends
from lotstats.valuation import calculate_weighted_market_value

__all__ = [
    "MarketValueEstimate",
    "OutlierMethod",
    "OutlierResult",
    "TrendDirection",
    "TrendReport",
    "VolatilityLevel",
    "WeightMethod",
    "analyze_price_trends",
    "calculate_weighted_market_value",
    "filter_outliers_smart",
    "filter_price_outliers",
]
