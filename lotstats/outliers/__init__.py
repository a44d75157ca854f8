"""
Outlier filtering module for LOTSTATS.

Strategy selection and filtering of noisy price samples.
"""

from lotstats.outliers.filter import filter_outliers_smart, resolve_method
from lotstats.outliers.legacy import filter_price_outliers
from lotstats.outliers.strategies import (
    FilterSplit,
    apply_strategy,
    filter_iqr,
    filter_mad,
    filter_trimmed,
    select_strategy,
)

__all__ = [
    "filter_outliers_smart",
    "resolve_method",
    "filter_price_outliers",
    "FilterSplit",
    "apply_strategy",
    "filter_iqr",
    "filter_mad",
    "filter_trimmed",
    "select_strategy",
]
