"""
Occupied-Range Tracker

Per-dimension bounding box of every bin that received a count.

Starts at the (+inf, -1) sentinel. ``padded`` widens the box by one empty bin
on each side (never past the axis) to produce the inclusive window used when
leading and trailing empty bins are trimmed from the output.
"""

import math
from typing import List, Sequence, Tuple


class OccupiedRange:
    """Tightest bin-index box containing all recorded positions."""

    def __init__(self, ndim: int):
        self.min_seen: List[float] = [math.inf] * ndim
        self.max_seen: List[int] = [-1] * ndim

    def record(self, pos: Sequence[int]) -> None:
        for d, i in enumerate(pos):
            if i < self.min_seen[d]:
                self.min_seen[d] = i
            if i > self.max_seen[d]:
                self.max_seen[d] = i

    def is_empty(self) -> bool:
        """True until the first position is recorded."""
        return any(m == -1 for m in self.max_seen)

    def padded(self, shape: Sequence[int]) -> List[Tuple[int, int]]:
        """
        Inclusive rendering window per dimension.

        Keeps one empty bin of border where the axis allows it. A tracker that
        never recorded anything yields the full axis for every dimension.

        Args:
            shape: Bin count per dimension

        Returns:
            List of (first, last) bin indices, both inclusive
        """
        if self.is_empty():
            return [(0, n - 1) for n in shape]

        window = []
        for lo, hi, n in zip(self.min_seen, self.max_seen, shape):
            lo = int(lo)
            if lo > 0:
                lo -= 1
            if hi < n - 1:
                hi += 1
            window.append((lo, hi))
        return window
