"""
Tests for the flattened counter store.

Validates stride arithmetic (dimension 0 contiguous) and that index tuples
address independent counters.
"""

import pytest

from histnd.core.odometer import Odometer
from histnd.core.store import FlatArrayStore


class TestStrides:
    """Stride layout."""

    def test_strides_dimension_zero_fastest(self):
        """stride_0 = 1, stride_d = stride_{d-1} * shape_{d-1}."""
        store = FlatArrayStore([2, 3, 4])
        assert store.strides == (1, 2, 6)
        assert len(store) == 24

    def test_one_dimension(self):
        store = FlatArrayStore([7])
        assert store.strides == (1,)
        assert len(store) == 7

    def test_empty_shape_rejected(self):
        with pytest.raises(ValueError):
            FlatArrayStore([])


class TestAccess:
    """Read/write through index tuples."""

    def test_zero_initialized(self):
        store = FlatArrayStore([3, 3])
        assert store.total() == 0
        assert store.get((2, 2)) == 0

    def test_increment_then_get(self):
        store = FlatArrayStore([2, 3, 4])
        store.increment((1, 2, 3), amount=7)
        assert store.get((1, 2, 3)) == 7
        # Neighbours untouched
        assert store.get((0, 2, 3)) == 0
        assert store.get((1, 1, 3)) == 0
        assert store.total() == 7

    def test_every_position_is_distinct(self):
        """Each index tuple maps to its own counter."""
        shape = (2, 3, 4)
        store = FlatArrayStore(shape)
        value = 1
        for k in range(shape[2]):
            for j in range(shape[1]):
                for i in range(shape[0]):
                    store.increment((i, j, k), amount=value)
                    value += 1

        value = 1
        for k in range(shape[2]):
            for j in range(shape[1]):
                for i in range(shape[0]):
                    assert store.get((i, j, k)) == value
                    value += 1

    def test_increment_returns_new_value(self):
        store = FlatArrayStore([4])
        assert store.increment((2,)) == 1
        assert store.increment((2,)) == 2
        assert store.increment((2,), amount=3) == 5
        assert store.max() == 5

    def test_wrong_dimensionality(self):
        store = FlatArrayStore([2, 2])
        with pytest.raises(ValueError):
            store.get((1,))

    def test_large_grid_counts_exceed_int32(self):
        """Counters are 64-bit."""
        store = FlatArrayStore([2])
        store.increment((1,), amount=2**40)
        assert store.get((1,)) == 2**40


class TestOrderedValues:
    """Whole-grid reads in odometer order."""

    def test_matches_odometer_walk(self):
        """Dimension 0 varies fastest, like Odometer."""
        shape = (3, 2, 2)
        store = FlatArrayStore(shape)
        for n, pos in enumerate(Odometer(shape)):
            store.increment(pos, amount=n * n)

        values = store.ordered_values()
        assert values.tolist() == [store.get(pos) for pos in Odometer(shape)]

    def test_is_a_copy(self):
        store = FlatArrayStore([2])
        store.increment((0,))
        values = store.ordered_values()
        values[0] = 99
        assert store.get((0,)) == 1
