"""
histnd — N-dimensional histograms of numeric tuple streams.

Public API:
    from histnd import Histogram, HistogramConfig, DimensionSpec, run
    run(config, lines, binary_sink)

Layers:
    histnd.core        Engine — binning, flattened counters, odometer, rendering (no I/O)
    histnd.io          Line scanner, output sinks, histogram.yaml manifest
    histnd.validation  Configuration checks and error types
    histnd.run         Orchestration (import, then output) and the command line
"""

from histnd.core import DimensionSpec, Histogram, HistogramConfig, OutputMode
from histnd.run import run

__all__ = ["DimensionSpec", "Histogram", "HistogramConfig", "OutputMode", "run"]
