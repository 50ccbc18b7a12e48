"""
Configuration Validation

Checks a HistogramConfig before any input is read.

PRINCIPLE: "Reject the configuration, not the data"

Usage:
    from histnd.validation import validate_config, ConfigurationError

    try:
        validate_config(config)
    except ConfigurationError as e:
        print(e.errors)
"""

import math
from typing import List

from histnd.core.config import HistogramConfig, MAX_DIMENSIONS


class ConfigurationError(Exception):
    """Raised when the histogram configuration is unusable."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Invalid configuration:\n" + "\n".join(
            f"  ERROR: {e}" for e in errors
        )
        super().__init__(message)


class EmptyHistogramError(Exception):
    """Raised when no input tuple fell inside the histogram grid."""

    def __init__(self, total_read: int = 0):
        self.total_read = total_read
        super().__init__("No input data received, giving up!")


def check_config(config: HistogramConfig) -> List[str]:
    """
    Collect every problem with ``config``.

    Returns:
        List of error messages. Empty list = valid.
    """
    errors = []
    ndim = config.ndim

    if ndim < 1 or ndim > MAX_DIMENSIONS:
        errors.append(
            f"Wrong dimensions specified: '{ndim}', "
            f"should be between 1 and {MAX_DIMENSIONS}"
        )

    for d, dim in enumerate(config.dimensions):
        if not (math.isfinite(dim.low) and math.isfinite(dim.high)):
            errors.append(f"dimension {d}: bounds must be finite, got [{dim.low:g}, {dim.high:g})")
        elif not math.isfinite(dim.high - dim.low):
            errors.append(f"dimension {d}: range [{dim.low:g}, {dim.high:g}) is too wide")
        elif not dim.low < dim.high:
            errors.append(
                f"dimension {d}: low bound {dim.low:g} must be below high bound {dim.high:g}"
            )
        if dim.bins < 1:
            errors.append(f"dimension {d}: bin count must be at least 1, got {dim.bins}")

    if config.output.is_raw:
        if ndim != 2:
            errors.append(f"{config.output.value} output needs exactly 2 dimensions, got {ndim}")
        if not config.relative:
            errors.append(f"{config.output.value} output needs relative mode (-r)")
        if config.omit_empty:
            errors.append(f"omitting empty bins does not work with {config.output.value} output")

    return errors


def validate_config(config: HistogramConfig) -> HistogramConfig:
    """Raise ConfigurationError unless ``config`` is valid; return it otherwise."""
    errors = check_config(config)
    if errors:
        raise ConfigurationError(errors)
    return config
