"""
Outlier filtering strategies.

Three strategies, chosen by one pure decision function:

1. MAD      - heavy-tailed samples (n >= 8 and CV > 0.8)
2. IQR      - ordinary samples (n >= 6)
3. TRIMMED  - small samples (fallback)

Selection is evaluated in that priority order - first match wins.
Every strategy splits the sample into kept/removed without altering
any value, so kept + removed is always the original multiset.
"""

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np

from lotstats.core.constants import (
    IQR_FENCE_MULTIPLIER,
    IQR_MIN_SAMPLE_SIZE,
    MAD_MIN_CV,
    MAD_MIN_SAMPLE_SIZE,
    MAD_THRESHOLD_MULTIPLIER,
    TRIM_FRACTION,
)
from lotstats.core.types import OutlierMethod
from lotstats.stats.primitives import SampleSummary, sort_prices


@dataclass(frozen=True)
class FilterSplit:
    """Prices kept and removed by one strategy."""

    kept: tuple[float, ...]
    removed: tuple[float, ...]


def select_strategy(sample_size: int, cv: float) -> OutlierMethod:
    """
    Pick a filtering strategy for a sample.

    Args:
        sample_size: Number of prices
        cv: Coefficient of variation of the sample

    Returns:
        OutlierMethod.MAD, IQR or TRIMMED
    """
    if sample_size >= MAD_MIN_SAMPLE_SIZE and cv > MAD_MIN_CV:
        return OutlierMethod.MAD
    elif sample_size >= IQR_MIN_SAMPLE_SIZE:
        return OutlierMethod.IQR
    else:
        return OutlierMethod.TRIMMED


def _split(prices: tuple[float, ...], keep: np.ndarray) -> FilterSplit:
    arr = np.asarray(prices, dtype=np.float64)
    return FilterSplit(
        kept=tuple(arr[keep].tolist()),
        removed=tuple(arr[~keep].tolist()),
    )


def filter_mad(prices: tuple[float, ...], summary: SampleSummary) -> FilterSplit:
    """
    Median Absolute Deviation filter.

    Keeps prices within 2.5 * MAD of the median. More robust than IQR
    for high-variance data. Input order is preserved.
    """
    threshold = MAD_THRESHOLD_MULTIPLIER * summary.mad
    deviations = np.abs(np.asarray(prices, dtype=np.float64) - summary.median)
    return _split(prices, deviations <= threshold)


def filter_iqr(prices: tuple[float, ...], summary: SampleSummary) -> FilterSplit:
    """
    Interquartile Range filter.

    Keeps prices inside the inclusive fences [q1 - 1.5*IQR, q3 + 1.5*IQR].
    Input order is preserved.
    """
    low, high = summary.quartiles.fences(IQR_FENCE_MULTIPLIER)
    arr = np.asarray(prices, dtype=np.float64)
    return _split(prices, (arr >= low) & (arr <= high))


def filter_trimmed(prices: tuple[float, ...], summary: SampleSummary) -> FilterSplit:
    """
    Trimmed filter.

    Sorts ascending and drops floor(n * 0.1) prices from each end,
    regardless of how extreme they are. Below 10 prices nothing is
    trimmed and every price is kept. Output is in sorted order.

    Note: a naive [trim:-trim] slice keeps nothing when trim is 0, which
    would send 4-5 price samples to the raw-median fallback (filter
    confidence 0.4). Keeping everything instead gives them
    outlier_filtered_trimmed at filter confidence 0.65; the median is the
    same either way.
    """
    ordered = sort_prices(prices).tolist()
    n = len(ordered)
    trim = math.floor(n * TRIM_FRACTION)

    if trim == 0:
        return FilterSplit(kept=tuple(ordered), removed=())

    return FilterSplit(
        kept=tuple(ordered[trim:n - trim]),
        removed=tuple(ordered[:trim] + ordered[n - trim:]),
    )


STRATEGIES: dict[OutlierMethod, Callable[[tuple[float, ...], SampleSummary], FilterSplit]] = {
    OutlierMethod.MAD: filter_mad,
    OutlierMethod.IQR: filter_iqr,
    OutlierMethod.TRIMMED: filter_trimmed,
}


def apply_strategy(
    method: OutlierMethod,
    prices: tuple[float, ...],
    summary: SampleSummary,
) -> FilterSplit:
    """Dispatch to the filter for a concrete strategy."""
    return STRATEGIES[method](prices, summary)
