"""
Tests for correlating manifests and lock files across package directories.
"""

from pathlib import Path

import pytest

from cargo_mole.correlator import parse, read_file
from cargo_mole.errors import FileReadError, MoleError
from cargo_mole.models import CargoFiles, FoundDependency


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def two_packages(tmp_path):
    """Package A uses foo (manifest and lock), package B does not."""
    a_manifest = _write(
        tmp_path / "a" / "Cargo.toml",
        '[package]\nname = "app"\n\n[dependencies]\nfoo = "2.0"\n',
    )
    a_lock = _write(
        tmp_path / "a" / "Cargo.lock",
        '[[package]]\nname = "app"\nversion = "0.1.0"\n\n'
        '[[package]]\nname = "foo"\nversion = "2.0.1"\n',
    )
    b_manifest = _write(
        tmp_path / "b" / "Cargo.toml",
        '[package]\nname = "other"\n\n[dependencies]\nbar = "1"\n',
    )
    files = {
        str(tmp_path / "b"): CargoFiles(manifest=b_manifest),
        str(tmp_path / "a"): CargoFiles(manifest=a_manifest, lock=a_lock),
    }
    return files, a_manifest, a_lock


def test_end_to_end(two_packages):
    """Manifest and lock rows of A are reported, B contributes nothing."""
    files, a_manifest, a_lock = two_packages

    found = parse(files, "foo")

    assert found == [
        FoundDependency("app", "2.0.1", str(a_lock)),
        FoundDependency("app", "2.0", str(a_manifest)),
    ]


def test_results_sorted_by_path(tmp_path):
    b_manifest = _write(
        tmp_path / "b" / "Cargo.toml", '[package]\nname = "b"\n'
    )
    b_lock = _write(
        tmp_path / "b" / "Cargo.lock",
        '[[package]]\nname = "foo"\nversion = "1.0.0"\n',
    )
    a_manifest = _write(
        tmp_path / "a" / "Cargo.toml",
        '[package]\nname = "a"\n\n[dependencies]\nfoo = "1"\n',
    )
    files = {
        "b": CargoFiles(manifest=b_manifest, lock=b_lock),
        "a": CargoFiles(manifest=a_manifest),
    }

    found = parse(files, "foo")

    assert [dep.path for dep in found] == [str(a_manifest), str(b_lock)]


def test_lock_owner_falls_back_to_manifest_name(tmp_path):
    """Without a manifest match, lock rows use the manifest's package name."""
    manifest = _write(tmp_path / "Cargo.toml", '[package]\nname = "service"\n')
    lock = _write(
        tmp_path / "Cargo.lock",
        '[[package]]\nname = "foo"\nversion = "0.3.0"\n\n'
        '[[package]]\nname = "foo"\nversion = "0.4.1"\n',
    )

    found = parse({str(tmp_path): CargoFiles(manifest=manifest, lock=lock)}, "foo")

    assert found == [
        FoundDependency("service", "0.3.0", str(lock)),
        FoundDependency("service", "0.4.1", str(lock)),
    ]


def test_workspace_root_lock_uses_placeholder_name(tmp_path):
    manifest = _write(tmp_path / "Cargo.toml", '[workspace]\nmembers = ["x"]\n')
    lock = _write(
        tmp_path / "Cargo.lock", '[[package]]\nname = "foo"\nversion = "1.2.3"\n'
    )

    found = parse({str(tmp_path): CargoFiles(manifest=manifest, lock=lock)}, "foo")

    assert found == [FoundDependency("-", "1.2.3", str(lock))]


def test_lock_without_manifest_is_ignored(tmp_path):
    lock = _write(
        tmp_path / "Cargo.lock", '[[package]]\nname = "foo"\nversion = "1.0.0"\n'
    )

    assert parse({str(tmp_path): CargoFiles(lock=lock)}, "foo") == []


def test_lock_without_manifest_is_never_read(tmp_path):
    missing_lock = tmp_path / "missing" / "Cargo.lock"
    assert parse({"x": CargoFiles(lock=missing_lock)}, "foo") == []


def test_unreadable_manifest_aborts_scan(two_packages, tmp_path):
    files, _, _ = two_packages
    files[str(tmp_path / "gone")] = CargoFiles(manifest=tmp_path / "gone" / "Cargo.toml")

    with pytest.raises(FileReadError) as exc_info:
        parse(files, "foo")

    assert "gone" in exc_info.value.path
    assert isinstance(exc_info.value, MoleError)


def test_unreadable_lock_aborts_scan(tmp_path):
    manifest = _write(tmp_path / "Cargo.toml", '[package]\nname = "app"\n')
    files = {str(tmp_path): CargoFiles(manifest=manifest, lock=tmp_path / "Cargo.lock")}

    with pytest.raises(FileReadError):
        parse(files, "foo")


def test_malformed_manifest_is_skipped(two_packages, tmp_path, capsys):
    files, a_manifest, a_lock = two_packages
    broken = _write(tmp_path / "broken" / "Cargo.toml", "[dependencies\nfoo = '1'")
    files[str(tmp_path / "broken")] = CargoFiles(manifest=broken)

    found = parse(files, "foo")

    assert [dep.path for dep in found] == [str(a_lock), str(a_manifest)]
    assert str(broken) in capsys.readouterr().err


def test_malformed_manifest_lock_uses_placeholder_name(tmp_path):
    manifest = _write(tmp_path / "Cargo.toml", "[package\n")
    lock = _write(
        tmp_path / "Cargo.lock", '[[package]]\nname = "foo"\nversion = "1.0.0"\n'
    )

    found = parse({str(tmp_path): CargoFiles(manifest=manifest, lock=lock)}, "foo")

    assert found == [FoundDependency("-", "1.0.0", str(lock))]


def test_malformed_lock_is_skipped(tmp_path):
    manifest = _write(
        tmp_path / "Cargo.toml", '[package]\nname = "app"\n\n[dependencies]\nfoo = "1"\n'
    )
    lock = _write(tmp_path / "Cargo.lock", "[[package]\n")

    found = parse({str(tmp_path): CargoFiles(manifest=manifest, lock=lock)}, "foo")

    assert found == [FoundDependency("app", "1", str(manifest))]


def test_string_paths_accepted(tmp_path):
    manifest = _write(
        tmp_path / "Cargo.toml", '[package]\nname = "app"\n\n[dependencies]\nfoo = "1"\n'
    )

    found = parse({"root": CargoFiles(manifest=str(manifest))}, "foo")

    assert found == [FoundDependency("app", "1", str(manifest))]


def test_empty_index():
    assert parse({}, "foo") == []


def test_read_file_missing(tmp_path):
    with pytest.raises(FileReadError):
        read_file(tmp_path / "nope.toml")


def test_read_file_invalid_utf8(tmp_path):
    path = tmp_path / "Cargo.toml"
    path.write_bytes(b"\xff\xfe\x00bad")

    with pytest.raises(FileReadError):
        read_file(path)
