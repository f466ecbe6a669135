"""
Tests for percentile estimation (linear interpolation between order statistics)
"""

import math
import random

import pytest

from windowstats.monitoring.percentiles import estimate_percentiles, format_percentile_key


class TestEstimatePercentiles:
    """Test estimate_percentiles()"""

    def test_median_of_odd_count_is_middle_element(self):
        result = estimate_percentiles([1.0, 2.0, 3.0, 4.0, 5.0], [50])
        assert result == {50.0: 3.0}

    def test_interpolates_between_neighbours(self):
        """index = 0.5 * 3 = 1.5 -> halfway between 20 and 30"""
        result = estimate_percentiles([10.0, 20.0, 30.0, 40.0], [50])
        assert result[50.0] == pytest.approx(25.0)

    def test_fractional_weight(self):
        """index = 0.9 * 4 = 3.6 -> 40 + 0.6 * (50 - 40)"""
        result = estimate_percentiles([10.0, 20.0, 30.0, 40.0, 50.0], [90])
        assert result[90.0] == pytest.approx(46.0)

    def test_extremes_map_to_min_and_max(self):
        values = [3.0, 7.0, 11.0, 19.0]
        result = estimate_percentiles(values, [0, 100])
        assert result[0.0] == 3.0
        assert result[100.0] == 19.0

    def test_out_of_range_ranks_skipped(self):
        """Ranks outside 0-100 are omitted, not an error"""
        result = estimate_percentiles([1.0, 2.0, 3.0], [-1, 50, 100.5, 250])
        assert list(result) == [50.0]

    def test_nan_rank_skipped(self):
        result = estimate_percentiles([1.0, 2.0, 3.0], [math.nan, 50])
        assert list(result) == [50.0]

    def test_empty_input_returns_empty_mapping(self):
        assert estimate_percentiles([], [0, 50, 100]) == {}

    def test_no_ranks_returns_empty_mapping(self):
        assert estimate_percentiles([1.0, 2.0], []) == {}

    @pytest.mark.parametrize("rank", [0, 25, 50, 99.9, 100])
    def test_single_element_resolves_every_rank(self, rank):
        result = estimate_percentiles([42.5], [rank])
        assert result[float(rank)] == 42.5

    def test_constant_values_return_the_constant(self):
        values = [0.1] * 7
        result = estimate_percentiles(values, [10, 33.3, 50, 87.5])
        assert all(v == 0.1 for v in result.values())

    def test_monotonic_in_rank(self):
        """For sorted input, p1 < p2 implies estimate(p1) <= estimate(p2)"""
        rng = random.Random(1234)
        ranks = [i / 4 for i in range(0, 401)]

        for size in (2, 3, 10, 57, 500):
            values = sorted(rng.gauss(100.0, 25.0) for _ in range(size))
            result = estimate_percentiles(values, ranks)
            estimates = [result[r] for r in ranks]

            assert all(a <= b for a, b in zip(estimates, estimates[1:]))
            assert estimates[0] == values[0]
            assert estimates[-1] == values[-1]

    def test_estimates_stay_within_bracketing_values(self):
        values = [1.0, 1.0 + 1e-12, 5.0, 1e9]
        result = estimate_percentiles(values, [i for i in range(101)])
        for estimate in result.values():
            assert values[0] <= estimate <= values[-1]

    def test_bracket_near_float_limits(self):
        """high - low overflows to inf; estimates must still interpolate"""
        values = [-1.5e308, 1.5e308]
        result = estimate_percentiles(values, [0, 25, 50, 75, 100])

        assert result[0.0] == -1.5e308
        assert result[25.0] == pytest.approx(-7.5e307)
        assert result[50.0] == pytest.approx(0.0, abs=1e292)
        assert result[75.0] == pytest.approx(7.5e307)
        assert result[100.0] == 1.5e308
        assert all(math.isfinite(v) for v in result.values())

    def test_near_limit_bracket_stays_monotonic(self):
        values = [-1.7e308, 1.7e308]
        ranks = [i / 2 for i in range(0, 201)]
        result = estimate_percentiles(values, ranks)
        estimates = [result[r] for r in ranks]

        assert all(a <= b for a, b in zip(estimates, estimates[1:]))

    def test_duplicate_ranks_collapse(self):
        result = estimate_percentiles([1.0, 2.0, 3.0], [50, 50.0])
        assert result == {50.0: 2.0}


class TestFormatPercentileKey:
    """Test format_percentile_key()"""

    @pytest.mark.parametrize(
        "rank,expected",
        [
            (50, "p50"),
            (95.0, "p95"),
            (99.9, "p99_9"),
            (12.5, "p12_5"),
            (0, "p0"),
            (100, "p100"),
        ],
    )
    def test_format(self, rank, expected):
        assert format_percentile_key(rank) == expected
