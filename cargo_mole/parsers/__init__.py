"""
Cargo manifest and lock file parsers.
"""

from cargo_mole.parsers.lockfile import decode_lock, parse_lock
from cargo_mole.parsers.manifest import (
    decode_manifest,
    parse_manifest,
    parse_manifest_name,
)

__all__ = [
    "decode_lock",
    "decode_manifest",
    "parse_lock",
    "parse_manifest",
    "parse_manifest_name",
]
