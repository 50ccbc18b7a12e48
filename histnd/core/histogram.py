"""
Histogram Engine
================

Maps coordinate tuples onto the bin grid and accumulates counts.

A tuple is accepted iff low_d <= v_d < high_d for every dimension d (the upper
bound is exclusive). Accepted tuples increment exactly one counter and extend
the occupied range; rejected tuples are only tallied.

Usage:
    from histnd.core.histogram import Histogram

    hist = Histogram(config)
    hist.extend(records)
    hist.count((0,))
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from histnd.core.config import DimensionSpec, HistogramConfig
from histnd.core.store import FlatArrayStore
from histnd.core.tracker import OccupiedRange

logger = logging.getLogger(__name__)


def in_range(values: Sequence[float], dimensions: Sequence[DimensionSpec]) -> bool:
    """Half-open membership test over all dimensions."""
    for v, dim in zip(values, dimensions):
        if not (dim.low <= v < dim.high):
            return False
    return True


def bin_position(
    values: Sequence[float],
    dimensions: Sequence[DimensionSpec],
) -> Optional[Tuple[int, ...]]:
    """
    Bin index tuple for ``values``, or None when the tuple is out of range.

    Index per dimension is floor((v - low) / bin_width). Rounding in the
    division can land a value just below ``high`` on ``bins``; such indices
    are pulled back to the last bin.
    """
    if not in_range(values, dimensions):
        return None

    pos = []
    for v, dim in zip(values, dimensions):
        i = int(math.floor((v - dim.low) / dim.bin_width))
        pos.append(min(i, dim.bins - 1))
    return tuple(pos)


class Histogram:
    """
    N-dimensional counting histogram.

    Attributes:
        config: Grid and output configuration
        store: Flattened counter array
        occupied: Bounding box of non-empty bins
        total_read: Tuples seen, including rejected ones
        rejected: Tuples outside the grid
    """

    def __init__(self, config: HistogramConfig):
        self.config = config
        self.store = FlatArrayStore(config.shape)
        self.occupied = OccupiedRange(config.ndim)

        # Diagnostic only: raw extent of every value read
        self.observed_min = np.full(config.ndim, np.inf)
        self.observed_max = np.full(config.ndim, -np.inf)

        self.total_read = 0
        self.rejected = 0

    @property
    def accepted(self) -> int:
        return self.total_read - self.rejected

    def add(self, values: Sequence[float]) -> bool:
        """
        Count one tuple.

        Args:
            values: At least ``ndim`` coordinates; extra trailing values are ignored

        Returns:
            True if the tuple fell inside the grid
        """
        ndim = self.config.ndim
        if len(values) < ndim:
            raise ValueError(f"expected {ndim} values, got {len(values)}")
        values = values[:ndim]

        for d, v in enumerate(values):
            if v < self.observed_min[d]:
                self.observed_min[d] = v
            if v > self.observed_max[d]:
                self.observed_max[d] = v

        self.total_read += 1
        pos = bin_position(values, self.config.dimensions)
        if pos is None:
            self.rejected += 1
            return False

        self.store.increment(pos)
        self.occupied.record(pos)
        return True

    def extend(self, records: Iterable[Sequence[float]]) -> int:
        """Count every tuple from ``records``. Returns the number accepted."""
        accepted = 0
        for values in records:
            if self.add(values):
                accepted += 1
        return accepted

    def count(self, pos: Sequence[int]) -> int:
        return self.store.get(pos)

    def relative_frequency(self, pos: Sequence[int]) -> float:
        """
        Density estimate for one bin.

        count / (bin volume * tuples read). Rejected tuples stay in the
        denominator, so the integral over the grid is accepted / total_read.
        """
        if self.total_read == 0:
            return 0.0
        return self.store.get(pos) / (self.config.bin_volume * self.total_read)

    def observed_ranges(self) -> List[Tuple[float, float]]:
        return [
            (float(lo), float(hi))
            for lo, hi in zip(self.observed_min, self.observed_max)
        ]

    def window(self, trim: bool = False) -> List[Tuple[int, int]]:
        """Inclusive (first, last) bin per dimension for rendering."""
        if trim:
            return self.occupied.padded(self.config.shape)
        return [(0, n - 1) for n in self.config.shape]

    def to_frame(self, trim: bool = False):
        """Histogram as a polars DataFrame (see ``formatter.histogram_frame``)."""
        from histnd.core.formatter import histogram_frame
        return histogram_frame(self, trim=trim)
