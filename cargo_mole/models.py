"""
Data model shared by the file explorer, the parsers and the correlator.
"""

from pathlib import Path
from typing import NamedTuple

# Reported when a package name or a dependency version is unknown
PLACEHOLDER = "-"


class CargoFiles(NamedTuple):
    """Manifest and lock file found in one package directory."""

    manifest: str | Path | None = None
    lock: str | Path | None = None


class SimpleDependency(NamedTuple):
    """Dependency declared as a bare version string: ``serde = "1.0"``."""

    version: str


class DetailedDependency(NamedTuple):
    """Dependency declared as a table: ``serde = { version = "1.0" }``.

    ``version`` is None for path, git and workspace-inherited dependencies.
    """

    version: str | None = None


Dependency = SimpleDependency | DetailedDependency


class TargetSection(NamedTuple):
    """Dependencies declared under ``[target.<cfg>]``."""

    dependencies: dict[str, Dependency] | None = None
    dev_dependencies: dict[str, Dependency] | None = None


class ManifestDocument(NamedTuple):
    """The parts of a Cargo.toml that cargo-mole reads."""

    package_name: str | None = None
    dependencies: dict[str, Dependency] | None = None
    dev_dependencies: dict[str, Dependency] | None = None
    targets: dict[str, TargetSection] | None = None


class LockEntry(NamedTuple):
    """A resolved ``[[package]]`` entry of a Cargo.lock."""

    name: str
    version: str


class FoundDependency(NamedTuple):
    """One report row: who depends on the target, at which version, and where."""

    package_name: str
    dep_version: str
    path: str

    def as_row(self) -> list[str]:
        return [self.package_name, self.dep_version, self.path]


def dependency_version(dependency: Dependency) -> str:
    """Return the version to report for a dependency declaration."""
    match dependency:
        case SimpleDependency(version=version):
            return version
        case DetailedDependency(version=None):
            return PLACEHOLDER
        case DetailedDependency(version=version):
            return version
    raise TypeError(f"Unsupported dependency declaration: {dependency!r}")
