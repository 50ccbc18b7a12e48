"""
Tests for binning and accumulation.

Validates:
    1. Half-open bounds (low accepted into bin 0, high rejected)
    2. Bin indices always inside [0, bins)
    3. Conservation: sum of counters == accepted tuples
    4. Relative frequencies integrate to accepted / read
"""

import math

import numpy as np
import pytest

from histnd.core.config import DimensionSpec, HistogramConfig
from histnd.core.histogram import Histogram, bin_position, in_range
from histnd.core.odometer import Odometer


def _config(*dims, relative=False):
    return HistogramConfig(
        dimensions=tuple(DimensionSpec(*d) for d in dims),
        relative=relative,
    )


class TestBinPosition:
    """Coordinate -> bin index mapping."""

    def test_low_bound_is_bin_zero(self):
        dims = (DimensionSpec(-1.0, 1.0, 4),)
        assert bin_position((-1.0,), dims) == (0,)

    def test_high_bound_rejected(self):
        """A value equal to high is out of range, never clamped."""
        dims = (DimensionSpec(-1.0, 1.0, 4),)
        assert bin_position((1.0,), dims) is None
        assert not in_range((1.0,), dims)

    def test_interior(self):
        dims = (DimensionSpec(-1.0, 1.0, 4),)
        assert bin_position((0.0,), dims) == (2,)
        assert bin_position((-0.6,), dims) == (0,)
        assert bin_position((0.99,), dims) == (3,)

    def test_below_low_rejected(self):
        dims = (DimensionSpec(0.0, 1.0, 2),)
        assert bin_position((-1e-12,), dims) is None

    def test_rounding_near_high_stays_in_grid(self):
        """Largest double below high lands in the last bin."""
        dims = (DimensionSpec(0.0, 1.0, 3),)
        v = math.nextafter(1.0, 0.0)
        assert bin_position((v,), dims) == (2,)

    def test_any_dimension_out_of_range_rejects(self):
        dims = (DimensionSpec(0.0, 2.0, 2), DimensionSpec(0.0, 2.0, 2))
        assert bin_position((0.5, 2.0), dims) is None
        assert bin_position((0.5, 1.5), dims) == (0, 1)

    def test_nan_rejected(self):
        dims = (DimensionSpec(0.0, 1.0, 2),)
        assert bin_position((float('nan'),), dims) is None


class TestHistogram:
    """Accumulation and counters."""

    def test_one_dimensional_example(self):
        """[0, 10) with 2 bins, input 1,1,6,6,6 -> counts 2 and 3."""
        hist = Histogram(_config((0.0, 10.0, 2)))
        accepted = hist.extend([(1.0,), (1.0,), (6.0,), (6.0,), (6.0,)])

        assert accepted == 5
        assert hist.count((0,)) == 2
        assert hist.count((1,)) == 3
        assert hist.total_read == 5
        assert hist.rejected == 0

    def test_rejected_tuples_counted(self):
        hist = Histogram(_config((0.0, 10.0, 2)))
        assert hist.add((10.0,)) is False
        assert hist.add((-3.0,)) is False
        assert hist.add((0.0,)) is True

        assert hist.total_read == 3
        assert hist.rejected == 2
        assert hist.accepted == 1
        assert hist.store.total() == 1

    def test_observed_range_includes_rejected(self):
        hist = Histogram(_config((0.0, 10.0, 2), (0.0, 1.0, 1)))
        hist.extend([(1.0, 0.5), (42.0, -7.0), (-3.0, 0.2)])
        assert hist.observed_ranges() == [(-3.0, 42.0), (-7.0, 0.5)]

    def test_extra_values_ignored(self):
        hist = Histogram(_config((0.0, 10.0, 2)))
        assert hist.add((6.0, 99.0, 100.0)) is True
        assert hist.count((1,)) == 1

    def test_too_few_values(self):
        hist = Histogram(_config((0.0, 1.0, 1), (0.0, 1.0, 1)))
        with pytest.raises(ValueError):
            hist.add((0.5,))

    def test_occupied_range_updated_on_accept_only(self):
        hist = Histogram(_config((0.0, 10.0, 10)))
        hist.add((7.5,))
        hist.add((99.0,))
        assert hist.window(trim=True) == [(6, 8)]
        assert hist.window(trim=False) == [(0, 9)]

    def test_conservation_random(self):
        """Sum over the grid equals the number of accepted tuples."""
        rng = np.random.default_rng(42)
        data = rng.normal(size=(2000, 3))
        hist = Histogram(_config((-2.0, 2.0, 4), (-1.5, 2.5, 5), (-2.0, 1.0, 6)))
        accepted = hist.extend(map(tuple, data))

        assert hist.store.total() == accepted == hist.accepted
        assert hist.rejected == 2000 - accepted
        assert 0 < accepted < 2000

        for first, last in hist.occupied.padded(hist.config.shape):
            assert 0 <= first <= last

        for d, n in enumerate(hist.config.shape):
            assert 0 <= hist.occupied.min_seen[d] <= hist.occupied.max_seen[d] < n


class TestRelativeFrequency:
    """Density normalization."""

    def test_values(self):
        hist = Histogram(_config((0.0, 10.0, 2), relative=True))
        hist.extend([(1.0,), (1.0,), (6.0,), (6.0,), (6.0,), (20.0,)])
        # count / (bin width 5 * 6 tuples read)
        assert hist.relative_frequency((0,)) == pytest.approx(2 / 30)
        assert hist.relative_frequency((1,)) == pytest.approx(3 / 30)

    def test_integral_equals_accepted_fraction(self):
        rng = np.random.default_rng(7)
        data = rng.uniform(-1.0, 3.0, size=(500, 2))
        hist = Histogram(_config((0.0, 2.0, 8), (-0.5, 2.5, 3), relative=True))
        hist.extend(map(tuple, data))

        integral = sum(
            hist.relative_frequency(pos) * hist.config.bin_volume
            for pos in Odometer(hist.config.shape)
        )
        assert integral == pytest.approx(hist.accepted / hist.total_read)

    def test_empty_histogram(self):
        hist = Histogram(_config((0.0, 1.0, 2)))
        assert hist.relative_frequency((0,)) == 0.0
