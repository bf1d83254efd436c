from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

"""Table store interface.

The workflow never touches a workbook directly; it goes through these four
operations. Positions are absolute sheet rows / columns, 0-based, and row 0 is
the header row of every table.

- read_all(table): the table's data range as a rectangular grid (header
  included). Trailing fully-empty rows are not part of the range.
- append_rows(table, rows): write ``rows`` right after the last non-empty row.
- clear_cells(table, row, num_rows, col, num_cols): blank a rectangle of
  cells to None; the rows themselves stay.
- delete_row(table, index): remove one row; rows below shift up by one.

Every call is applied immediately; there is no transaction.
"""

__all__ = [
    "Grid",
    "StoreError",
    "TableNotFoundError",
    "TableStore",
    "is_empty_cell",
    "split_header",
]

Grid = list[list[Any]]


class StoreError(Exception):
    """Raised when a table operation cannot be applied."""


class TableNotFoundError(StoreError):
    def __init__(self, table: str) -> None:
        super().__init__(f"table not found: '{table}'")
        self.table = table


@runtime_checkable
class TableStore(Protocol):
    def read_all(self, table: str) -> Grid: ...

    def append_rows(self, table: str, rows: Sequence[Sequence[Any]]) -> None: ...

    def clear_cells(self, table: str, row: int, num_rows: int, col: int, num_cols: int) -> None: ...

    def delete_row(self, table: str, index: int) -> None: ...


def is_empty_cell(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def split_header(grid: Grid) -> tuple[list[Any] | None, Grid]:
    """Split a grid read with read_all() into (header, data_rows)."""
    if not grid:
        return None, []
    return grid[0], grid[1:]
