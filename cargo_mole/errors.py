"""
Error types for cargo-mole.

Only ``MoleError`` crosses the scan boundary. Decode errors are raised by the
TOML schema decoders and absorbed by the parsers.
"""

from pathlib import Path


class MoleError(Exception):
    """Fatal error that aborts a scan."""


class FileReadError(MoleError):
    """A listed manifest or lock file could not be read."""

    def __init__(self, path: str | Path, error: Exception):
        self.path = str(path)
        self.error = error
        super().__init__(f"Failed to read {self.path}: {error}")


class DecodeError(ValueError):
    """TOML text is malformed or does not match the expected document shape."""


class ManifestDecodeError(DecodeError):
    """Cargo.toml could not be decoded."""


class LockDecodeError(DecodeError):
    """Cargo.lock could not be decoded."""
