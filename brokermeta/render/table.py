"""
Column-aligned plain text tables.

Cells are left aligned. Every column except the last is padded to the
width of its widest cell plus PADDING, and never narrower than MIN_WIDTH.
A leading column with an empty header and empty cells indents a table,
which is how nested tables are drawn under a heading line.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Sequence, TypeVar

T = TypeVar("T")

MIN_WIDTH = 6
PADDING = 2


@dataclass(frozen=True)
class Column(Generic[T]):
    """
    A table column.

    Attributes:
        header: Column heading
        value: Accessor producing the cell value for one row item
    """
    header: str
    value: Callable[[T], Any]


def format_cell(value: Any) -> str:
    """Format a cell value; ID lists render as "[1 2 3]"."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(format_cell(v) for v in value) + "]"
    return str(value)


class Table:
    """Accumulates rows and renders them as aligned text."""

    def __init__(self, *headers: str):
        self.headers = list(headers)
        self._rows: List[List[str]] = []

    def add_row(self, *cells: Any) -> None:
        if len(cells) != len(self.headers):
            raise ValueError(
                f"row has {len(cells)} cells, table has {len(self.headers)} columns"
            )
        self._rows.append([format_cell(c) for c in cells])

    def render(self) -> str:
        """
        Render the header and all rows.

        Returns:
            Table text, one line per row, each line newline terminated
        """
        lines = [self.headers] + self._rows
        widths = [
            max(MIN_WIDTH, max(len(line[i]) for line in lines) + PADDING)
            for i in range(len(self.headers) - 1)
        ]

        out = []
        for line in lines:
            text = "".join(cell.ljust(width) for cell, width in zip(line, widths))
            text += line[-1] if line else ""
            out.append(text.rstrip() + "\n")
        return "".join(out)


def build_table(columns: Sequence[Column[T]], items: Iterable[T]) -> Table:
    """
    Build a table from column descriptors.

    Args:
        columns: Ordered columns to emit
        items: Row items, in output order

    Returns:
        Populated table
    """
    table = Table(*[c.header for c in columns])
    for item in items:
        table.add_row(*[c.value(item) for c in columns])
    return table
