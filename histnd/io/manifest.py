"""
Manifest — parse histogram.yaml into a HistogramConfig.

Example:
    dimensions:
      - {low: 0.0, high: 2.0, bins: 4}
      - {low: -1.0, high: 1.0, bins: 50}
    relative: true
    output: raw8        # text | raw8 | raw16 | table
    omit_empty: false
    quiet: false
"""

import yaml
from pathlib import Path
from typing import Any, Dict

from histnd.core.config import DimensionSpec, HistogramConfig, OutputMode
from histnd.validation import ConfigurationError


MANIFEST_NAME = 'histogram.yaml'


def load_manifest(path: str) -> Dict[str, Any]:
    """
    Load a histogram manifest.

    Tries:
        1. path itself (if it's a .yaml file)
        2. path/histogram.yaml
    """
    p = Path(path)

    if p.is_file() and p.suffix in ('.yaml', '.yml'):
        manifest_path = p
    else:
        manifest_path = p / MANIFEST_NAME

    if not manifest_path.exists():
        raise FileNotFoundError(f"No {MANIFEST_NAME} in {path}")

    with open(manifest_path) as f:
        manifest = yaml.safe_load(f) or {}

    if not isinstance(manifest, dict):
        raise ConfigurationError([f"{manifest_path}: expected a mapping at top level"])

    manifest['_manifest_path'] = str(manifest_path)
    return manifest


def get_dimensions(manifest: Dict[str, Any]) -> tuple:
    """DimensionSpecs from the manifest's ``dimensions`` list."""
    raw = manifest.get('dimensions') or []
    if not isinstance(raw, list):
        raise ConfigurationError(["'dimensions' must be a list of {low, high, bins} entries"])

    dims = []
    errors = []
    for d, entry in enumerate(raw):
        if not isinstance(entry, dict):
            errors.append(f"dimensions[{d}]: expected a mapping, got {entry!r}")
            continue
        missing = [k for k in ('low', 'high', 'bins') if k not in entry]
        if missing:
            errors.append(f"dimensions[{d}]: missing {', '.join(missing)}")
            continue
        bins = entry['bins']
        if isinstance(bins, bool) or not isinstance(bins, int):
            errors.append(f"dimensions[{d}]: bins must be an integer, got {bins!r}")
            continue
        try:
            dims.append(DimensionSpec(
                low=float(entry['low']),
                high=float(entry['high']),
                bins=bins,
            ))
        except (TypeError, ValueError) as e:
            errors.append(f"dimensions[{d}]: {e}")

    if errors:
        raise ConfigurationError(errors)
    return tuple(dims)


def get_output_mode(manifest: Dict[str, Any]) -> OutputMode:
    value = manifest.get('output', OutputMode.TEXT.value)
    try:
        return OutputMode(value)
    except ValueError:
        choices = ', '.join(m.value for m in OutputMode)
        raise ConfigurationError([f"unknown output '{value}' (choose from {choices})"])


def get_flag(manifest: Dict[str, Any], key: str) -> bool:
    """Boolean switch; YAML true/false only (a quoted "false" is rejected)."""
    value = manifest.get(key, False)
    if not isinstance(value, bool):
        raise ConfigurationError([f"'{key}' must be true or false, got {value!r}"])
    return value


def config_from_manifest(manifest: Dict[str, Any]) -> HistogramConfig:
    """Build an (unvalidated) HistogramConfig from a loaded manifest."""
    return HistogramConfig(
        dimensions=get_dimensions(manifest),
        relative=get_flag(manifest, 'relative'),
        output=get_output_mode(manifest),
        omit_empty=get_flag(manifest, 'omit_empty'),
        quiet=get_flag(manifest, 'quiet'),
    )
