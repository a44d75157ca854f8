"""
Backward-compatible outlier helpers.

Kept for callers written against the old single-list API.
"""

import logging
import warnings
from typing import Any

from lotstats.outliers.filter import filter_outliers_smart


logger = logging.getLogger(__name__)


def filter_price_outliers(prices: Any) -> tuple[float, ...]:
    """
    Return only the prices kept by the smart filter.

    .. deprecated::
        Use filter_outliers_smart, which also reports outliers,
        method, confidence and statistics.
    """
    message = "filter_price_outliers is deprecated. Use filter_outliers_smart instead."
    warnings.warn(message, DeprecationWarning, stacklevel=2)
    logger.warning(message)
    return filter_outliers_smart(prices).filtered_prices
