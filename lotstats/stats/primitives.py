"""
Statistical primitives.

Median, mean, population variance, standard deviation, coefficient of
variation, MAD and positional quartiles. Pure math, no policy.

Conventions shared by every component:
- Empty input yields 0.0, never NaN.
- Variance is the population variance (divide by n).
- CV is 0.0 when the mean is 0 (all-zero samples read as perfectly stable).
- Quartiles are positional: sorted[floor(n * 0.25)] and sorted[floor(n * 0.75)].
  No interpolation - switching conventions changes IQR fences.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from lotstats.core.constants import Q1_POSITION, Q3_POSITION


def _as_array(values: Sequence[float]) -> NDArray[np.float64]:
    return np.asarray(values, dtype=np.float64)


def _overflow_safe(
    stat: Callable[[NDArray[np.float64]], Any],
    arr: NDArray[np.float64],
    power: int = 1,
) -> float:
    """
    Apply a statistic, rescaling the sample if numpy's sums overflow.

    Prices near the float ceiling overflow running sums. Such a sample is
    divided by its largest value and the result scaled back by
    scale ** power (1 for location and spread, 2 for variance).
    """
    with np.errstate(over="ignore", invalid="ignore"):
        result = float(stat(arr))
        if math.isfinite(result):
            return result

        scale = float(np.max(np.abs(arr)))
        result = float(stat(arr / scale))
        for _ in range(power):
            result *= scale
        return result


def sort_prices(values: Sequence[float]) -> NDArray[np.float64]:
    """Ascending stable sort, so ties land in the same positions every run."""
    return np.sort(_as_array(values), kind="stable")


def median(values: Sequence[float]) -> float:
    """
    Median of values.

    Even length averages the two middle elements, odd length takes the
    middle one.
    """
    if len(values) == 0:
        return 0.0
    return _overflow_safe(np.median, _as_array(values))


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean (0.0 for empty input)."""
    if len(values) == 0:
        return 0.0
    return _overflow_safe(np.mean, _as_array(values))


def variance(values: Sequence[float]) -> float:
    """
    Population variance (divide by n).

    Can be inf for samples whose true variance exceeds the float range;
    use stddev for a quantity that always stays finite.
    """
    if len(values) == 0:
        return 0.0
    return _overflow_safe(np.var, _as_array(values), power=2)


def stddev(values: Sequence[float]) -> float:
    """Population standard deviation."""
    if len(values) == 0:
        return 0.0
    return _overflow_safe(np.std, _as_array(values))


def cv_from(std: float, avg: float) -> float:
    """CV from precomputed moments; 0.0 when the mean is 0."""
    if avg == 0:
        return 0.0
    return std / avg


def coefficient_of_variation(values: Sequence[float]) -> float:
    """
    Coefficient of variation: stddev / mean.

    Returns 0.0 when the mean is 0 so NaN/Infinity never reach
    confidence or trend math.
    """
    return cv_from(stddev(values), mean(values))


def mad(values: Sequence[float], center: float | None = None) -> float:
    """
    Median Absolute Deviation.

    Args:
        values: Sample
        center: Precomputed median (computed when omitted)

    Returns:
        median(|x - center|)
    """
    if len(values) == 0:
        return 0.0
    arr = _as_array(values)
    if center is None:
        center = _overflow_safe(np.median, arr)
    return _overflow_safe(np.median, np.abs(arr - center))


@dataclass(frozen=True)
class Quartiles:
    """Positional quartiles of a sample."""

    q1: float
    q3: float

    @property
    def iqr(self) -> float:
        """Interquartile range."""
        return self.q3 - self.q1

    def fences(self, multiplier: float) -> tuple[float, float]:
        """Inclusive (low, high) bounds at q1 - k*iqr and q3 + k*iqr."""
        return self.q1 - multiplier * self.iqr, self.q3 + multiplier * self.iqr


def quartiles(values: Sequence[float]) -> Quartiles:
    """Positional quartiles: sorted[floor(n*0.25)], sorted[floor(n*0.75)]."""
    n = len(values)
    if n == 0:
        return Quartiles(q1=0.0, q3=0.0)

    ordered = sort_prices(values)
    q1 = ordered[math.floor(n * Q1_POSITION)]
    q3 = ordered[math.floor(n * Q3_POSITION)]
    return Quartiles(q1=float(q1), q3=float(q3))


@dataclass(frozen=True)
class SampleSummary:
    """All primitives for one sample, computed in a single pass."""

    count: int
    mean: float
    median: float
    variance: float
    std: float
    cv: float
    mad: float
    quartiles: Quartiles

    @property
    def iqr(self) -> float:
        """Interquartile range."""
        return self.quartiles.iqr


def describe(values: Sequence[float]) -> SampleSummary:
    """
    Compute every primitive for a sample.

    Args:
        values: Price sample (any order)

    Returns:
        SampleSummary over the sample as given
    """
    avg = mean(values)
    var = variance(values)
    std = stddev(values)
    med = median(values)

    return SampleSummary(
        count=len(values),
        mean=avg,
        median=med,
        variance=var,
        std=std,
        cv=cv_from(std, avg),
        mad=mad(values, med),
        quartiles=quartiles(values),
    )
