"""
Writer — all output goes through here.

Every sink is a binary stream: text rows are ASCII-encoded, raw samples are
written as-is.
"""

from typing import BinaryIO, Iterable

import polars as pl


def write_text(lines: Iterable[str], sink: BinaryIO) -> int:
    """
    Write text rows to ``sink``.

    Returns:
        Number of lines written (block separators included)
    """
    n = 0
    for line in lines:
        sink.write(line.encode('ascii'))
        n += 1
    sink.flush()
    return n


def write_raw(samples: bytes, sink: BinaryIO) -> int:
    """Write raw grayscale samples. Returns the byte count."""
    sink.write(samples)
    sink.flush()
    return len(samples)


def write_table(df: pl.DataFrame, sink: BinaryIO) -> int:
    """
    Write ``df`` as CSV with a header row.

    Returns:
        Number of data rows written
    """
    if len(df.columns) == 0:
        return 0
    sink.write(df.write_csv().encode('ascii'))
    sink.flush()
    return df.height
