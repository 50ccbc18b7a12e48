"""
histnd Validation Module

Exports:
    - validate_config: Raise ConfigurationError for an unusable configuration
    - check_config: Same checks, returning the list of problems
    - ConfigurationError: Raised before any input is read
    - EmptyHistogramError: Raised when no tuple was accepted
"""

from .config_validation import (
    check_config,
    validate_config,
    ConfigurationError,
    EmptyHistogramError,
)

__all__ = [
    'check_config',
    'validate_config',
    'ConfigurationError',
    'EmptyHistogramError',
]
