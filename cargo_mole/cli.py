"""
Command-line interface for cargo-mole.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cargo_mole.config import get_excluded_dirs, is_deep_enabled, is_verbose_enabled
from cargo_mole.correlator import parse
from cargo_mole.errors import MoleError
from cargo_mole.file_explorer import collect_files
from cargo_mole.printer import HEADERS, print_table

# --- Typer App ---
app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def _config_root(path: Path) -> Path:
    return path if path.is_dir() else path.parent


@app.command()
def find(
    name: str = typer.Argument(
        ...,
        help="Name of the crate to look for (e.g. 'serde').",
    ),
    path: Path = typer.Option(
        Path("."),
        "--path",
        "-p",
        help="Directory to search, or a single Cargo.toml / Cargo.lock (default: current directory).",
    ),
    deep: bool | None = typer.Option(
        None,
        "--deep",
        "-d",
        help="Also search build output (target/) and hidden directories. If not specified, uses config file default.",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Directory name to skip. Can be given several times; added to the configured exclusions.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Print scan progress to stderr. If not specified, uses config file default.",
    ),
):
    """Find the packages in a Rust source tree that depend on NAME."""
    path = path.resolve()
    config_root = _config_root(path)

    try:
        if deep is None:
            deep = is_deep_enabled(config_root)
        if verbose is None:
            verbose = is_verbose_enabled(config_root)
        excluded = get_excluded_dirs(config_root) + list(exclude or [])

        if verbose:
            err_console.print(f"[dim]🔍 Searching {escape(str(path))}...[/dim]")
        files = collect_files(path, deep=deep, exclude=excluded)
        if verbose:
            err_console.print(f"[dim]Found {len(files)} package director(ies)[/dim]")

        found = parse(files, name)
    except (MoleError, ValueError) as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1) from None

    if verbose:
        err_console.print(f"[dim]Found {len(found)} match(es) for {escape(name)}[/dim]")

    print_table(HEADERS, [dep.as_row() for dep in found], console=console)
