"""
Discovery of Cargo.toml / Cargo.lock pairs in a directory tree.
"""

import os
from collections.abc import Iterable
from pathlib import Path

from cargo_mole.errors import MoleError
from cargo_mole.models import CargoFiles

MANIFEST_FILE = "Cargo.toml"
LOCK_FILE = "Cargo.lock"

# Cargo build output, skipped unless scanning deep
BUILD_DIRS = {"target"}


def _should_skip(name: str, deep: bool, excluded: set[str]) -> bool:
    if name in excluded:
        return True
    if deep:
        return False
    return name in BUILD_DIRS or name.startswith(".")


def _group_directory(directory: Path, filenames: Iterable[str]) -> CargoFiles | None:
    names = set(filenames)
    manifest = directory / MANIFEST_FILE if MANIFEST_FILE in names else None
    lock = directory / LOCK_FILE if LOCK_FILE in names else None
    if manifest is None and lock is None:
        return None
    return CargoFiles(manifest=manifest, lock=lock)


def collect_files(
    root: str | Path, deep: bool = False, exclude: Iterable[str] = ()
) -> dict[str, CargoFiles]:
    """
    Group Cargo manifests and lock files by the directory containing them.

    Args:
        root: Directory to walk, or a single Cargo.toml / Cargo.lock.
        deep: Also walk build output (``target``) and hidden directories.
        exclude: Directory names never walked into.

    Returns:
        Directory path mapped to the CargoFiles found there.

    Raises:
        MoleError: If root does not exist or is a file other than a Cargo file.
    """
    root = Path(root)
    if not root.exists():
        raise MoleError(f"Path not found: {root}")

    files: dict[str, CargoFiles] = {}

    if root.is_file():
        if root.name not in (MANIFEST_FILE, LOCK_FILE):
            raise MoleError(f"Not a Cargo manifest or lock file: {root}")
        directory = root.parent
        group = _group_directory(directory, os.listdir(directory))
        if group is not None:
            files[str(directory)] = group
        return files

    excluded = set(exclude)
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not _should_skip(d, deep, excluded))
        group = _group_directory(Path(dirpath), filenames)
        if group is not None:
            files[dirpath] = group

    return files
