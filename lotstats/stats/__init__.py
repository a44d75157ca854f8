"""
Statistics module for LOTSTATS.

Pure statistical primitives shared by the outlier filter, confidence
scorer, value aggregator and trend analyzer.
"""

from lotstats.stats.primitives import (
    Quartiles,
    SampleSummary,
    coefficient_of_variation,
    describe,
    mad,
    mean,
    median,
    quartiles,
    sort_prices,
    stddev,
    variance,
)

__all__ = [
    "Quartiles",
    "SampleSummary",
    "coefficient_of_variation",
    "describe",
    "mad",
    "mean",
    "median",
    "quartiles",
    "sort_prices",
    "stddev",
    "variance",
]
