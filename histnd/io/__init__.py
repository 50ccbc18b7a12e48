"""
histnd.io — input scanning, output sinks and manifest loading.
"""

from histnd.io.reader import parse_tuple, scan_records
from histnd.io.writer import write_text, write_raw, write_table
from histnd.io.manifest import load_manifest, config_from_manifest

__all__ = [
    'parse_tuple',
    'scan_records',
    'write_text',
    'write_raw',
    'write_table',
    'load_manifest',
    'config_from_manifest',
]
