"""
Output Formatter
================

Renders a filled Histogram.

Text mode:
    One line per bin: tab-separated bin midpoints (%f) followed by the count
    (%d) or the relative frequency (%e). Rows run with the LAST dimension
    fastest; every time that dimension wraps a blank line closes the block
    (gnuplot splot layout). Optionally restricted to the padded occupied
    window.

Raw mode:
    One grayscale sample per bin, dimension 0 fastest over the full grid,
    scaled so the fullest bin maps to full scale (255 or 65535). 16-bit
    samples are big-endian. An all-zero histogram renders as all-zero samples.

Table mode:
    The text-mode rows as a polars DataFrame, written as CSV by the writer.
"""

from typing import Dict, Iterator, List, Optional

import numpy as np
import polars as pl

from histnd.core.config import OutputMode
from histnd.core.histogram import Histogram
from histnd.core.odometer import Odometer


# Full-scale value and numpy dtype per raw depth
RAW_FORMATS = {
    OutputMode.RAW8: (255, np.dtype(np.uint8)),
    OutputMode.RAW16: (65535, np.dtype('>u2')),
}


def _text_odometer(hist: Histogram, trim: bool) -> Odometer:
    window = hist.window(trim)
    lower = [first for first, _ in window]
    upper = [last + 1 for _, last in window]
    return Odometer(upper, lower, last_fastest=True)


def format_row(hist: Histogram, pos) -> str:
    """One text row (with trailing newline) for bin ``pos``."""
    dims = hist.config.dimensions
    fields = [f"{dims[d].midpoint(i):f}" for d, i in enumerate(pos)]
    if hist.config.relative:
        fields.append(f"{hist.relative_frequency(pos):e}")
    else:
        fields.append(str(hist.count(pos)))
    return "\t".join(fields) + "\n"


def text_lines(hist: Histogram, trim: Optional[bool] = None) -> Iterator[str]:
    """
    Yield the text report line by line.

    Args:
        hist: Filled histogram
        trim: Restrict to the padded occupied window
              (default: ``hist.config.omit_empty``)
    """
    if trim is None:
        trim = hist.config.omit_empty

    odo = _text_odometer(hist, trim)
    while not odo.exhausted:
        yield format_row(hist, odo.position)
        odo.advance()
        if odo.carries:
            yield "\n"


def peak_value(hist: Histogram) -> int:
    """Largest counter over the full grid (0 for an empty histogram)."""
    return max(hist.store.max(), 0)


def raw_samples(
    hist: Histogram,
    mode: OutputMode,
    peak: Optional[int] = None,
) -> bytes:
    """
    Scaled grayscale samples for the whole grid.

    Args:
        hist: Filled histogram
        mode: OutputMode.RAW8 or OutputMode.RAW16
        peak: Precomputed ``peak_value(hist)``

    Returns:
        len(grid) * bytes_per_sample bytes, dimension 0 fastest
    """
    if mode not in RAW_FORMATS:
        raise ValueError(f"not a raw output mode: {mode}")
    full_scale, dtype = RAW_FORMATS[mode]

    if peak is None:
        peak = peak_value(hist)

    values = hist.store.ordered_values().astype(np.float64)

    if peak <= 0:
        scaled = np.zeros_like(values)
    else:
        # Round half up
        scaled = np.floor(values / peak * full_scale + 0.5)

    return scaled.astype(dtype).tobytes()


def histogram_frame(hist: Histogram, trim: bool = False) -> pl.DataFrame:
    """
    Histogram as a table, one row per bin in text-mode order.

    Columns: mid_0 .. mid_{D-1}, count, frequency.
    """
    dims = hist.config.dimensions
    columns: Dict[str, List] = {f"mid_{d}": [] for d in range(len(dims))}
    counts: List[int] = []
    frequencies: List[float] = []

    for pos in _text_odometer(hist, trim):
        for d, i in enumerate(pos):
            columns[f"mid_{d}"].append(dims[d].midpoint(i))
        counts.append(hist.count(pos))
        frequencies.append(hist.relative_frequency(pos))

    columns["count"] = counts
    columns["frequency"] = frequencies
    return pl.DataFrame(
        columns,
        schema={
            **{f"mid_{d}": pl.Float64 for d in range(len(dims))},
            "count": pl.Int64,
            "frequency": pl.Float64,
        },
    )
