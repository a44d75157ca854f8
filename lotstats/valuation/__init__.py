"""Market value aggregation module."""

from lotstats.valuation.aggregator import (
    calculate_weighted_market_value,
    estimate_market_value,
    overall_confidence,
    resolve_weight_method,
    round_half_up,
)

__all__ = [
    "calculate_weighted_market_value",
    "estimate_market_value",
    "overall_confidence",
    "resolve_weight_method",
    "round_half_up",
]
