"""
Tests for statistical primitives.
"""

import pytest
import numpy as np

from lotstats.stats.primitives import (
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


class TestCentralTendency:
    """Tests for median and mean."""

    def test_median_odd_length(self):
        """Odd length takes the middle element."""
        assert median([3.0, 1.0, 2.0]) == 2.0

    def test_median_even_length(self):
        """Even length averages the two middle elements."""
        assert median([4.0, 1.0, 3.0, 2.0]) == 2.5

    def test_median_empty_is_zero(self):
        """Empty input should return 0, not NaN."""
        assert median([]) == 0.0

    def test_mean(self):
        """Plain arithmetic mean."""
        assert mean([10.0, 20.0, 30.0, 40.0, 50.0]) == 30.0

    def test_mean_empty_is_zero(self):
        """Empty input should return 0."""
        assert mean([]) == 0.0


class TestDispersion:
    """Tests for variance, standard deviation and CV."""

    def test_population_variance(self):
        """Variance divides by n, not n - 1."""
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        assert variance(values) == pytest.approx(4.0)
        assert stddev(values) == pytest.approx(2.0)

    def test_coefficient_of_variation(self):
        """CV is stddev over mean."""
        values = [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]
        assert coefficient_of_variation(values) == pytest.approx(0.4)

    def test_cv_zero_mean_is_zero(self):
        """All-zero samples read as perfectly stable."""
        assert coefficient_of_variation([0.0, 0.0, 0.0]) == 0.0

    def test_cv_of_constant_sample(self):
        """Identical prices have no dispersion."""
        assert coefficient_of_variation([7.0, 7.0, 7.0, 7.0]) == 0.0

    def test_mad(self):
        """MAD is the median of absolute deviations from the median."""
        values = [1.0, 1.0, 2.0, 2.0, 4.0, 6.0, 9.0]
        assert mad(values) == 1.0

    def test_mad_with_given_center(self):
        """A precomputed center should be used as given."""
        assert mad([1.0, 2.0, 3.0], center=0.0) == 2.0


class TestQuartiles:
    """Tests for positional quartiles."""

    def test_positional_indices(self):
        """q1 = sorted[floor(n/4)], q3 = sorted[floor(3n/4)]."""
        q = quartiles([80.0, 10.0, 30.0, 20.0, 60.0, 40.0, 70.0, 50.0])

        assert q.q1 == 30.0
        assert q.q3 == 70.0
        assert q.iqr == 40.0

    def test_no_interpolation(self):
        """Positional quartiles differ from numpy's interpolated percentile."""
        values = [10.0, 20.0, 30.0, 40.0, 50.0, 60.0, 70.0, 80.0]

        assert quartiles(values).q1 != np.percentile(values, 25)

    def test_odd_length(self):
        """Five values: indices 1 and 3."""
        q = quartiles([5.0, 1.0, 4.0, 2.0, 3.0])

        assert q.q1 == 2.0
        assert q.q3 == 4.0

    def test_fences(self):
        """Fences extend 1.5 IQR beyond the quartiles."""
        q = quartiles([80.0, 10.0, 30.0, 20.0, 60.0, 40.0, 70.0, 50.0])
        assert q.fences(1.5) == (-30.0, 130.0)

    def test_empty(self):
        """Empty input gives zero quartiles."""
        assert quartiles([]).iqr == 0.0


class TestDescribe:
    """Tests for the combined summary."""

    def test_summary_matches_primitives(self, linear_prices: list[float]):
        """describe() should agree with the individual functions."""
        summary = describe(linear_prices)

        assert summary.count == 5
        assert summary.mean == 30.0
        assert summary.median == 30.0
        assert summary.variance == pytest.approx(200.0)
        assert summary.cv == pytest.approx(coefficient_of_variation(linear_prices))
        assert summary.mad == 10.0
        assert summary.iqr == 20.0

    def test_sort_is_stable_and_ascending(self):
        """Sorting should be ascending and leave the input untouched."""
        values = [3.0, 1.0, 2.0, 1.0]
        ordered = sort_prices(values)

        assert ordered.tolist() == [1.0, 1.0, 2.0, 3.0]
        assert values == [3.0, 1.0, 2.0, 1.0]


class TestHugePrices:
    """Tests for finite prices near the float ceiling."""

    def test_constant_series_stays_finite(self):
        """Sums that overflow are rescaled instead of returning inf."""
        summary = describe([1e308, 1e308, 1e308])

        assert summary.mean == 1e308
        assert summary.median == 1e308
        assert summary.std == 0.0
        assert summary.variance == 0.0
        assert summary.cv == 0.0

    def test_even_median_and_spread(self):
        """Averaging the two middle values does not overflow."""
        values = [1e308, 1.5e308]

        assert median(values) == pytest.approx(1.25e308)
        assert stddev(values) == pytest.approx(0.25e308)
        assert coefficient_of_variation(values) == pytest.approx(0.2)
