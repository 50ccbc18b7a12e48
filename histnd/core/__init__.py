"""
histnd.core — histogram engine (no file I/O).

    config      DimensionSpec, HistogramConfig, OutputMode
    store       FlatArrayStore: flattened counters addressed by index tuples
    tracker     OccupiedRange: bounding box of non-empty bins
    odometer    Odometer: ordered enumeration of index tuples
    histogram   Histogram: binning + accumulation
    formatter   text / raw / table rendering
"""

from histnd.core.config import DimensionSpec, HistogramConfig, OutputMode, MAX_DIMENSIONS
from histnd.core.store import FlatArrayStore
from histnd.core.tracker import OccupiedRange
from histnd.core.odometer import Odometer
from histnd.core.histogram import Histogram, bin_position, in_range

__all__ = [
    'DimensionSpec',
    'HistogramConfig',
    'OutputMode',
    'MAX_DIMENSIONS',
    'FlatArrayStore',
    'OccupiedRange',
    'Odometer',
    'Histogram',
    'bin_position',
    'in_range',
]
