"""
Flattened Array Store

One contiguous counter buffer addressed by an index tuple.

Element (i_0, ..., i_{D-1}) lives at sum(i_d * stride_d) with stride_0 = 1
and stride_d = stride_{d-1} * shape_{d-1}, so dimension 0 is contiguous.
Callers only ever see index tuples; the linear offset stays internal.
"""

import math
from typing import Sequence, Tuple

import numpy as np


class FlatArrayStore:
    """Zero-initialized int64 counters over an N-dimensional grid."""

    def __init__(self, shape: Sequence[int]):
        self.shape: Tuple[int, ...] = tuple(int(n) for n in shape)
        if not self.shape:
            raise ValueError("store needs at least one dimension")

        strides = []
        stride = 1
        for n in self.shape:
            strides.append(stride)
            stride *= n
        self.strides: Tuple[int, ...] = tuple(strides)

        # Python ints for the size; int64 counters regardless of per-axis size
        self._data = np.zeros(math.prod(self.shape), dtype=np.int64)

    def __len__(self) -> int:
        return self._data.size

    @property
    def ndim(self) -> int:
        return len(self.shape)

    def _offset(self, pos: Sequence[int]) -> int:
        if len(pos) != len(self.shape):
            raise ValueError(
                f"position has {len(pos)} indices, store has {len(self.shape)} dimensions"
            )
        offset = 0
        for i, stride in zip(pos, self.strides):
            offset += i * stride
        return offset

    def get(self, pos: Sequence[int]) -> int:
        return int(self._data[self._offset(pos)])

    def increment(self, pos: Sequence[int], amount: int = 1) -> int:
        """Add ``amount`` to the counter at ``pos`` and return the new value."""
        offset = self._offset(pos)
        self._data[offset] += amount
        return int(self._data[offset])

    def total(self) -> int:
        """Sum over all counters."""
        return int(self._data.sum())

    def max(self) -> int:
        return int(self._data.max())

    def ordered_values(self) -> np.ndarray:
        """Copy of every counter, dimension 0 fastest (odometer order)."""
        return self._data.copy()
