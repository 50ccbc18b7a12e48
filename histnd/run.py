"""
Histogram Runner
================

Two strictly sequential phases:
    1. import   scan tuples from the input, bin and count them
    2. output   render the filled histogram (text, raw8, raw16 or table)

Pure orchestration. Binning and rendering live in histnd.core; scanning and
sinks live in histnd.io.

Usage:
    python -m histnd -r -d 1 -l -5.0 -h 5.0 -w 10 < in.dat > out.dat
    python -m histnd -d2 -l0 -h2 -w4 -l-1 -h1 -w50 < 2d_in.dat > 2d_out.dat
    python -m histnd -r -d2 --raw8 -l0 -h1 -w1000 -l0 -h1 -w1000 < 2d.dat > img.raw
    python -m histnd -c histogram.yaml -i samples.dat
"""

import argparse
import logging
import sys
from contextlib import ExitStack
from typing import BinaryIO, Iterable, List, Optional

from histnd.core.config import DimensionSpec, HistogramConfig, OutputMode, MAX_DIMENSIONS
from histnd.core.formatter import peak_value, raw_samples, text_lines
from histnd.core.histogram import Histogram
from histnd.io.manifest import config_from_manifest, load_manifest
from histnd.io.reader import scan_records
from histnd.io.writer import write_raw, write_table, write_text
from histnd.validation import ConfigurationError, EmptyHistogramError, validate_config

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════
# PHASES
# ═══════════════════════════════════════════════════════════════

def accumulate(config: HistogramConfig, source: Iterable[str]) -> Histogram:
    """
    Import phase: count every tuple from ``source``.

    Raises:
        ConfigurationError: config is unusable (nothing is read)
        EmptyHistogramError: no tuple fell inside the grid
    """
    validate_config(config)
    verbose = not config.quiet

    if verbose:
        logger.info(
            "Using %d dimensions, relative = '%d' with:", config.ndim, int(config.relative)
        )
        for dim in config.dimensions:
            logger.info("  %s", dim.describe())

    hist = Histogram(config)
    hist.extend(scan_records(source, config.ndim))

    if verbose and hist.total_read > 0:
        ranges = ", ".join(f"[{lo:g}, {hi:g}]" for lo, hi in hist.observed_ranges())
        logger.info("Ranges of values read: %s", ranges)

    if hist.rejected > 0:
        logger.warning(
            "Lost '%d' tuples because they were out of the specified range", hist.rejected
        )

    if hist.accepted <= 0:
        raise EmptyHistogramError(hist.total_read)

    if verbose:
        logger.info(
            "Read '%d' tuples, '%d' were in the specified range",
            hist.total_read, hist.accepted,
        )

    return hist


def render(hist: Histogram, sink: BinaryIO) -> int:
    """
    Output phase: write ``hist`` to ``sink`` in the configured mode.

    Returns:
        Lines (text), bytes (raw) or rows (table) written
    """
    config = hist.config

    if config.output.is_raw:
        peak = peak_value(hist)
        if not config.quiet:
            logger.info("Maximum value found: '%d'", peak)
        return write_raw(raw_samples(hist, config.output, peak), sink)

    if config.output is OutputMode.TABLE:
        return write_table(hist.to_frame(trim=config.omit_empty), sink)

    return write_text(text_lines(hist, trim=config.omit_empty), sink)


def run(config: HistogramConfig, source: Iterable[str], sink: BinaryIO) -> Histogram:
    """Import ``source`` and render the result to ``sink``."""
    hist = accumulate(config, source)
    render(hist, sink)
    return hist


# ═══════════════════════════════════════════════════════════════
# COMMAND LINE
# ═══════════════════════════════════════════════════════════════

class _AxisAction(argparse.Action):
    """
    -l and -h describe the current axis, -w closes it.

    Mirrors the classic getopt interface: ``-l0 -h2 -w4 -l-1 -h1 -w50``
    describes two axes. Bounds not given for an axis stay 0.0.
    """

    def __call__(self, parser, namespace, values, option_string=None):
        axes = getattr(namespace, 'axes', None)
        if axes is None:
            axes = []
            namespace.axes = axes
        pending = getattr(namespace, 'pending_axis', None) or {}
        pending[self.dest] = values
        if self.dest == 'bins':
            axes.append(pending)
            pending = {}
        namespace.pending_axis = pending


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='histnd',
        description=(
            "Compute a histogram of a sequence of number tuples with dimensionality d, "
            "read until end of input. Results are printed as lines of the format\n"
            "  <bin midpoint d1> <bin midpoint d2> ... <bin midpoint dn> <count>\n"
            "(as gnuplot likes it)."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog=f"""
Specify one -l/-h/-w group per dimension (at most {MAX_DIMENSIONS} dimensions).

Examples:
  histnd -r -d 1 -l -5.0 -h 5.0 -w 10 < in.dat > out.dat
  histnd -d2 -l0 -h2 -w4 -l-1 -h1 -w50 < 2d_in.dat > 2d_out.dat

Raw images can be converted with ImageMagick, e.g.
  convert -flip -depth 8 -size 1000x1000 gray:test.raw test.pgm
(-flip brings bin (0, 0) to the lower left corner; the first input column is the x-axis)
""",
    )
    parser.add_argument('--help', action='help', help='Show this help message and exit')
    parser.add_argument('-d', '--dimensions', type=int, default=None,
                        help='Input data has this dimensionality (default: 1)')
    parser.add_argument('-l', '--low', type=float, action=_AxisAction, default=argparse.SUPPRESS,
                        help='Low bound of the current dimension (inclusive)')
    parser.add_argument('-h', '--high', type=float, action=_AxisAction, default=argparse.SUPPRESS,
                        help='High bound of the current dimension (exclusive)')
    parser.add_argument('-w', '--bins', type=int, action=_AxisAction, default=argparse.SUPPRESS,
                        help='Number of bins of the current dimension; starts the next dimension')
    parser.add_argument('-r', '--relative', action='store_true',
                        help='Compute relative frequencies rather than absolute ones')
    parser.add_argument('--raw8', action='store_true',
                        help='Raw 8-bit grayscale image output (needs -r and -d 2)')
    parser.add_argument('--raw16', action='store_true',
                        help='Raw 16-bit big-endian grayscale image output (needs -r and -d 2)')
    parser.add_argument('--table', action='store_true',
                        help='CSV table output with a header row')
    parser.add_argument('-o', '--omit-empty', action='store_true',
                        help='Omit leading and trailing empty bins (not with raw output)')
    parser.add_argument('-q', '--quiet', action='store_true', help='Be quiet')
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='histogram.yaml manifest (command-line values override it)')
    parser.add_argument('-i', '--input', metavar='FILE', help='[INPUT] Data file (default: stdin)')
    parser.add_argument('-O', '--output', metavar='FILE', help='[OUTPUT] Result file (default: stdout)')
    return parser


def _resolve_output(args: argparse.Namespace, base: OutputMode, errors: List[str]) -> OutputMode:
    if args.raw8 and args.raw16:
        errors.append("You cannot have both, raw8 and raw16, pick one!")
    if args.table and (args.raw8 or args.raw16):
        errors.append("--table cannot be combined with raw output")

    if args.raw8:
        return OutputMode.RAW8
    if args.raw16:
        return OutputMode.RAW16
    if args.table:
        return OutputMode.TABLE
    return base


def build_config(args: argparse.Namespace) -> HistogramConfig:
    """
    Merge command-line arguments over an optional manifest.

    Raises:
        ConfigurationError: dimension groups missing or conflicting switches
    """
    base: Optional[HistogramConfig] = None
    if args.config:
        base = config_from_manifest(load_manifest(args.config))

    errors: List[str] = []

    axes = getattr(args, 'axes', None) or []
    if axes:
        described = [
            DimensionSpec(
                low=axis.get('low', 0.0),
                high=axis.get('high', 0.0),
                bins=axis['bins'],
            )
            for axis in axes
        ]
    elif base is not None:
        described = list(base.dimensions)
    else:
        described = []

    if args.dimensions is not None:
        ndim = args.dimensions
    elif base is not None:
        ndim = len(described)
    else:
        ndim = 1

    if not 1 <= ndim <= MAX_DIMENSIONS:
        errors.append(
            f"Wrong dimensions specified: '{ndim}', should be between 1 and {MAX_DIMENSIONS}"
        )
    elif len(described) < ndim:
        errors.append(
            f"Wrong range arguments: {ndim} dimensions requested, "
            f"{len(described)} described (one -l/-h/-w group per dimension)"
        )

    output = _resolve_output(args, base.output if base else OutputMode.TEXT, errors)

    if errors:
        raise ConfigurationError(errors)

    return HistogramConfig(
        dimensions=tuple(described[:ndim]),
        relative=args.relative or (base.relative if base else False),
        output=output,
        omit_empty=args.omit_empty or (base.omit_empty if base else False),
        quiet=args.quiet or (base.quiet if base else False),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        format='%(message)s',
        level=logging.WARNING if args.quiet else logging.INFO,
    )

    try:
        config = validate_config(build_config(args))
    except ConfigurationError as e:
        for err in e.errors:
            logger.error(err)
        parser.print_usage(sys.stderr)
        return 1

    if config.quiet:
        logging.getLogger().setLevel(logging.WARNING)

    with ExitStack() as stack:
        # Undecodable bytes become U+FFFD and fail to parse like any other bad line
        if args.input:
            source = stack.enter_context(open(args.input, encoding='ascii', errors='replace'))
        else:
            source = sys.stdin
            if hasattr(source, 'reconfigure'):
                source.reconfigure(errors='replace')

        try:
            hist = accumulate(config, source)
        except EmptyHistogramError as e:
            logger.error(str(e))
            return 1

        if args.output:
            sink = stack.enter_context(open(args.output, 'wb'))
        else:
            sink = sys.stdout.buffer
        render(hist, sink)

    return 0


if __name__ == '__main__':
    sys.exit(main())
