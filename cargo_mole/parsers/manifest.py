"""Cargo.toml parser."""

try:
    import tomllib
except ImportError:  # pragma: no cover - fallback for Python < 3.11
    import tomli as tomllib  # type: ignore

from rich.console import Console
from rich.markup import escape

from cargo_mole.errors import ManifestDecodeError
from cargo_mole.models import (
    PLACEHOLDER,
    Dependency,
    DetailedDependency,
    FoundDependency,
    ManifestDocument,
    SimpleDependency,
    TargetSection,
    dependency_version,
)

err_console = Console(stderr=True, soft_wrap=True)


def decode_manifest(contents: str) -> ManifestDocument:
    """
    Decode Cargo.toml text into a ManifestDocument.

    Only ``package.name``, the dependency tables and ``target.<cfg>`` sections
    are read. Everything else in the manifest is ignored.

    Raises:
        ManifestDecodeError: If the text is not TOML or a read section has
            the wrong shape.
    """
    try:
        data = tomllib.loads(contents)
    except tomllib.TOMLDecodeError as e:
        raise ManifestDecodeError(str(e)) from e

    package_name = None
    package = data.get("package")
    if package is not None:
        if not isinstance(package, dict):
            raise ManifestDecodeError("invalid type for `package`, expected a table")
        package_name = package.get("name")
        if not isinstance(package_name, str):
            raise ManifestDecodeError("missing or invalid `package.name`")

    targets = None
    target = data.get("target")
    if target is not None:
        if not isinstance(target, dict):
            raise ManifestDecodeError("invalid type for `target`, expected a table")
        targets = {}
        for cfg, section in target.items():
            if not isinstance(section, dict):
                raise ManifestDecodeError(
                    f"invalid type for `target.{cfg}`, expected a table"
                )
            targets[cfg] = TargetSection(
                dependencies=_decode_dependencies(
                    section.get("dependencies"), f"target.{cfg}.dependencies"
                ),
                dev_dependencies=_decode_dependencies(
                    section.get("dev-dependencies"), f"target.{cfg}.dev-dependencies"
                ),
            )

    return ManifestDocument(
        package_name=package_name,
        dependencies=_decode_dependencies(data.get("dependencies"), "dependencies"),
        dev_dependencies=_decode_dependencies(
            data.get("dev-dependencies"), "dev-dependencies"
        ),
        targets=targets,
    )


def _decode_dependencies(table: object, section: str) -> dict[str, Dependency] | None:
    if table is None:
        return None
    if not isinstance(table, dict):
        raise ManifestDecodeError(f"invalid type for `{section}`, expected a table")

    dependencies: dict[str, Dependency] = {}
    for name, value in table.items():
        if isinstance(value, str):
            dependencies[name] = SimpleDependency(value)
        elif isinstance(value, dict):
            version = value.get("version")
            if version is not None and not isinstance(version, str):
                raise ManifestDecodeError(
                    f"invalid type for `{section}.{name}.version`, expected a string"
                )
            dependencies[name] = DetailedDependency(version)
        else:
            raise ManifestDecodeError(
                f"invalid dependency `{section}.{name}`, "
                "expected a version string or a table"
            )
    return dependencies


def parse_manifest(contents: str, target_dep: str, path: str) -> list[FoundDependency]:
    """
    Find declarations of ``target_dep`` in a Cargo.toml.

    Scans ``dependencies`` and ``dev-dependencies``, then the same two tables
    of every ``target.<cfg>`` section. Each table yields at most one row.
    A manifest that cannot be decoded is reported on stderr and yields no rows.

    Args:
        contents: Manifest text.
        target_dep: Dependency name to look for.
        path: Manifest path, used for the report and diagnostics.

    Returns:
        List of FoundDependency rows, possibly empty.
    """
    try:
        manifest = decode_manifest(contents)
    except ManifestDecodeError as e:
        err_console.print(
            f'[yellow]Unparseable file: "{escape(path)}" {escape(str(e))}[/yellow]'
        )
        return []

    package_name = manifest.package_name or PLACEHOLDER
    tables = [manifest.dependencies, manifest.dev_dependencies]
    for section in (manifest.targets or {}).values():
        tables.extend([section.dependencies, section.dev_dependencies])

    found = []
    for dependencies in tables:
        row = _find_dependency(dependencies, target_dep, path, package_name)
        if row is not None:
            found.append(row)
    return found


def parse_manifest_name(contents: str) -> str:
    """Return the package name declared in a Cargo.toml, or ``"-"``."""
    try:
        manifest = decode_manifest(contents)
    except ManifestDecodeError:
        return PLACEHOLDER
    return manifest.package_name or PLACEHOLDER


def _find_dependency(
    dependencies: dict[str, Dependency] | None,
    target_dep: str,
    path: str,
    package_name: str,
) -> FoundDependency | None:
    if not dependencies:
        return None
    dependency = dependencies.get(target_dep)
    if dependency is None:
        return None
    return FoundDependency(
        package_name=package_name,
        dep_version=dependency_version(dependency),
        path=path,
    )
