"""
Correlates manifest declarations with lock file pins across package directories.
"""

from collections.abc import Mapping
from pathlib import Path

from cargo_mole.errors import FileReadError
from cargo_mole.models import CargoFiles, FoundDependency
from cargo_mole.parsers import parse_lock, parse_manifest, parse_manifest_name


def read_file(path: str | Path) -> str:
    """Read a listed file, raising FileReadError if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, e) from e


def parse(files: Mapping[str, CargoFiles], target_dep: str) -> list[FoundDependency]:
    """
    Collect every declaration and pin of ``target_dep`` in the grouped files.

    For each directory with a Cargo.toml, the manifest rows are collected and
    the owning package name is worked out. If the directory also has a
    Cargo.lock, its pins are reported under that name. A Cargo.lock without a
    Cargo.toml has no owner and is skipped.

    Args:
        files: Directory key mapped to the manifest/lock pair found there.
        target_dep: Dependency name to look for.

    Returns:
        FoundDependency rows sorted by path.

    Raises:
        FileReadError: If any listed file cannot be read. No rows are returned.
    """
    found: list[FoundDependency] = []

    for package in files.values():
        if package.manifest is None:
            continue

        manifest_path = str(package.manifest)
        manifest_contents = read_file(manifest_path)
        parsed = parse_manifest(manifest_contents, target_dep, manifest_path)

        if parsed:
            package_name = parsed[0].package_name
        else:
            package_name = parse_manifest_name(manifest_contents)

        found.extend(parsed)

        if package.lock is not None:
            lock_path = str(package.lock)
            lock_contents = read_file(lock_path)
            found.extend(parse_lock(lock_contents, target_dep, lock_path, package_name))

    found.sort(key=lambda dep: dep.path)
    return found
