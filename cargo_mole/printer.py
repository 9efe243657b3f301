"""
Report rendering.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.measure import Measurement
from rich.table import Table
from rich.text import Text

HEADERS = ["PACKAGE", "VERSION", "PATH"]

_COLUMN_STYLES = {"PACKAGE": "cyan", "VERSION": "magenta"}

# Upper bound used to measure a table's natural width
_MEASURE_WIDTH = 1 << 16


def build_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> Table:
    """Build a rich table with one column per header, rows kept in order."""
    table = Table(show_edge=False, header_style="bold")
    for header in headers:
        table.add_column(
            header,
            justify="left",
            style=_COLUMN_STYLES.get(header, ""),
            no_wrap=header == "PATH",
        )
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))
    return table


def table_width(console: Console, table: Table) -> int:
    """Return the width the table needs to render every cell on one line."""
    options = console.options.update_width(_MEASURE_WIDTH)
    return Measurement.get(console, options, table).maximum


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    console: Console | None = None,
) -> None:
    """Print the report table to the given console (stdout by default).

    The console is widened to the table's natural width so that no cell is
    folded or cropped, whether the output is a terminal or a pipe.
    """
    console = console or Console()
    table = build_table(headers, rows)
    console.width = max(console.width, table_width(console, table))
    console.print(table)
