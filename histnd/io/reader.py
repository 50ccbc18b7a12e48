"""
Reader — line scanning for whitespace-separated numeric tuples.

Lines starting with '#' are comments. Every other line must begin with at
least ``ndim`` numbers; anything after them is ignored. Numbers are read
greedily as the longest floating-point prefix (strtod rules), so "1.5abc"
yields 1.5 and leaves "abc" for the next coordinate.

The first malformed line ends the import. Records already yielded stay valid.
"""

import logging
import re
from typing import Iterable, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

COMMENT_PREFIX = '#'


def parse_tuple(line: str, ndim: int) -> Optional[Tuple[float, ...]]:
    """
    Parse the leading ``ndim`` numbers of ``line``.

    Returns:
        Tuple of floats, or None if fewer than ``ndim`` numbers could be read
    """
    values = []
    offset = 0
    for _ in range(ndim):
        match = _FLOAT_PREFIX.match(line, offset)
        if match is None:
            return None
        values.append(float(match.group(1)))
        offset = match.end()
    return tuple(values)


def scan_records(lines: Iterable[str], ndim: int) -> Iterator[Tuple[float, ...]]:
    """
    Yield one tuple per data line until input ends or a line fails to parse.

    Args:
        lines: Text lines (e.g. an open file or sys.stdin)
        ndim: Coordinates per tuple
    """
    for line_nr, line in enumerate(lines, start=1):
        if line.startswith(COMMENT_PREFIX):
            continue

        values = parse_tuple(line, ndim)
        if values is None:
            logger.error("Error parsing this line (%d): '%s'", line_nr, line.rstrip('\n'))
            logger.error("Stopping import here ...")
            return

        yield values
