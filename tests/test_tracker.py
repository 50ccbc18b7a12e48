"""
Tests for the occupied-range tracker and its padding step.
"""

from histnd.core.tracker import OccupiedRange


class TestRecord:
    """Bounding box bookkeeping."""

    def test_initial_sentinel(self):
        tracker = OccupiedRange(2)
        assert tracker.is_empty()
        assert tracker.max_seen == [-1, -1]

    def test_bounding_box(self):
        tracker = OccupiedRange(2)
        tracker.record((3, 5))
        tracker.record((1, 7))
        tracker.record((2, 6))
        assert tracker.min_seen == [1, 5]
        assert tracker.max_seen == [3, 7]
        assert not tracker.is_empty()


class TestPadded:
    """One empty bin of border, clipped to the axis."""

    def test_single_interior_bin(self):
        """Only bin 7 of 10 occupied -> window [6, 8]."""
        tracker = OccupiedRange(1)
        tracker.record((7,))
        assert tracker.padded([10]) == [(6, 8)]

    def test_touching_edges(self):
        """No padding past the first or last bin."""
        tracker = OccupiedRange(2)
        tracker.record((0, 9))
        assert tracker.padded([10, 10]) == [(0, 1), (8, 9)]

    def test_full_axis(self):
        tracker = OccupiedRange(1)
        tracker.record((0,))
        tracker.record((4,))
        assert tracker.padded([5]) == [(0, 4)]

    def test_single_bin_axis(self):
        tracker = OccupiedRange(1)
        tracker.record((0,))
        assert tracker.padded([1]) == [(0, 0)]

    def test_empty_tracker_uses_full_axis(self):
        """Nothing recorded -> every axis rendered in full."""
        tracker = OccupiedRange(3)
        assert tracker.padded([4, 1, 6]) == [(0, 3), (0, 0), (0, 5)]

    def test_padding_does_not_mutate(self):
        tracker = OccupiedRange(1)
        tracker.record((5,))
        tracker.padded([10])
        assert tracker.padded([10]) == [(4, 6)]
        assert tracker.min_seen == [5]
