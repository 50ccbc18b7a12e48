"""
Histogram Configuration
=======================

Immutable description of the histogram grid and the requested output.

Built once (from the command line or a manifest) and passed by reference to
every component. Nothing here is mutated after construction.

Usage:
    from histnd.core.config import DimensionSpec, HistogramConfig, OutputMode

    config = HistogramConfig(
        dimensions=(DimensionSpec(0.0, 10.0, 2),),
        relative=True,
    )
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# Highest dimensionality accepted on the command line (documented in --help)
MAX_DIMENSIONS = 99


class OutputMode(str, Enum):
    """Rendering of the finished histogram."""
    TEXT = "text"      # gnuplot-style rows, blank-line separated blocks
    RAW8 = "raw8"      # 8-bit grayscale samples, 2-D only
    RAW16 = "raw16"    # 16-bit big-endian grayscale samples, 2-D only
    TABLE = "table"    # CSV table with header

    @property
    def is_raw(self) -> bool:
        return self in (OutputMode.RAW8, OutputMode.RAW16)


@dataclass(frozen=True)
class DimensionSpec:
    """One histogram axis covering the half-open interval [low, high)."""
    low: float
    high: float
    bins: int

    @property
    def bin_width(self) -> float:
        return (self.high - self.low) / self.bins

    def midpoint(self, index: int) -> float:
        """Center of bin ``index``."""
        return self.low + ((index + 0.5) * (self.high - self.low)) / self.bins

    def describe(self) -> str:
        return (
            f"[{self.low:f}, {self.high:f}), bin_count = {self.bins}, "
            f"bin_size = {self.bin_width:f}"
        )


@dataclass(frozen=True)
class HistogramConfig:
    """
    Full histogram configuration.

    Attributes:
        dimensions: One DimensionSpec per axis, in input column order
        relative: Report relative frequencies instead of raw counts
        output: Output rendering
        omit_empty: Trim leading/trailing empty bins (keeps one empty border)
        quiet: Suppress informational diagnostics
    """
    dimensions: Tuple[DimensionSpec, ...]
    relative: bool = False
    output: OutputMode = OutputMode.TEXT
    omit_empty: bool = False
    quiet: bool = False

    @property
    def ndim(self) -> int:
        return len(self.dimensions)

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(d.bins for d in self.dimensions)

    @property
    def size(self) -> int:
        """Total number of bins (product over all axes)."""
        return math.prod(self.shape)

    @property
    def bin_volume(self) -> float:
        """Product of all bin widths."""
        volume = 1.0
        for d in self.dimensions:
            volume *= d.bin_width
        return volume
