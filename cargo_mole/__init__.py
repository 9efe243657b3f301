"""
cargo-mole: find which packages in a source tree depend on a given crate.
"""

__version__ = "0.1.0"
