"""Cargo.lock parser."""

try:
    import tomllib
except ImportError:  # pragma: no cover - fallback for Python < 3.11
    import tomli as tomllib  # type: ignore

from cargo_mole.errors import LockDecodeError
from cargo_mole.models import FoundDependency, LockEntry


def decode_lock(contents: str) -> list[LockEntry]:
    """
    Decode Cargo.lock text into its ``[[package]]`` entries.

    Raises:
        LockDecodeError: If the text is not TOML, has no ``package`` array, or
            an entry lacks a string name or version.
    """
    try:
        data = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as e:
        raise LockDecodeError(str(e)) from e

    packages = data.get("package")
    if not isinstance(packages, list):
        raise LockDecodeError("missing or invalid `package` array")

    entries = []
    for package in packages:
        if not isinstance(package, dict):
            raise LockDecodeError("invalid `package` entry, expected a table")
        name = package.get("name")
        version = package.get("version")
        if not isinstance(name, str) or not isinstance(version, str):
            raise LockDecodeError("`package` entry needs a string name and version")
        entries.append(LockEntry(name=name, version=version))
    return entries


def parse_lock(
    contents: str, target_dep: str, path: str, package_name: str
) -> list[FoundDependency]:
    """
    Find resolved versions of ``target_dep`` in a Cargo.lock.

    Rows carry ``package_name``, the package owning the lock file, rather than
    the locked entry's own name. Every matching entry is reported, so a crate
    locked at two versions yields two rows. An undecodable lock file yields
    no rows and no diagnostic.
    """
    try:
        entries = decode_lock(contents)
    except LockDecodeError:
        return []

    return [
        FoundDependency(package_name=package_name, dep_version=entry.version, path=path)
        for entry in entries
        if entry.name == target_dep
    ]
