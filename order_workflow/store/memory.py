from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .base import Grid, StoreError, TableNotFoundError, is_empty_cell

"""In-memory table store.

Holds each table as a list of rows. Used directly by tests and as the working
copy of WorkbookTableStore.
"""

__all__ = [
    "InMemoryTableStore",
]


def _used_row_count(grid: Grid) -> int:
    # 末尾の空行はデータ範囲に含めない
    count = len(grid)
    while count > 0 and all(is_empty_cell(v) for v in grid[count - 1]):
        count -= 1
    return count


def _used_col_count(rows: Grid) -> int:
    width = 0
    for row in rows:
        for i in range(len(row) - 1, -1, -1):
            if not is_empty_cell(row[i]):
                width = max(width, i + 1)
                break
    return width


class InMemoryTableStore:
    """TableStore backed by plain Python lists."""

    def __init__(self, tables: Mapping[str, Sequence[Sequence[Any]]] | None = None) -> None:
        self._tables: dict[str, Grid] = {
            name: [list(r) for r in rows] for name, rows in (tables or {}).items()
        }

    def table_names(self) -> list[str]:
        return list(self._tables)

    def has_table(self, table: str) -> bool:
        return table in self._tables

    def add_table(self, table: str, header: Sequence[Any] | None = None) -> None:
        if table in self._tables:
            raise StoreError(f"table already exists: '{table}'")
        self._tables[table] = [list(header)] if header is not None else []

    def _grid(self, table: str) -> Grid:
        try:
            return self._tables[table]
        except KeyError:
            raise TableNotFoundError(table) from None

    def read_all(self, table: str) -> Grid:
        grid = self._grid(table)
        used = grid[:_used_row_count(grid)]
        width = _used_col_count(used)
        return [(list(row) + [None] * width)[:width] for row in used]

    def append_rows(self, table: str, rows: Sequence[Sequence[Any]]) -> None:
        grid = self._grid(table)
        start = _used_row_count(grid)
        for offset, row in enumerate(rows):
            idx = start + offset
            if idx < len(grid):
                grid[idx] = list(row)
            else:
                grid.append(list(row))

    def clear_cells(self, table: str, row: int, num_rows: int, col: int, num_cols: int) -> None:
        if row < 0 or col < 0 or num_rows < 0 or num_cols < 0:
            raise StoreError(
                f"invalid range on '{table}': row={row} num_rows={num_rows} col={col} num_cols={num_cols}"
            )
        grid = self._grid(table)
        for r in range(row, min(row + num_rows, len(grid))):
            cells = grid[r]
            for c in range(col, min(col + num_cols, len(cells))):
                cells[c] = None

    def delete_row(self, table: str, index: int) -> None:
        grid = self._grid(table)
        if not 0 <= index < len(grid):
            raise StoreError(f"row {index} out of range on '{table}' ({len(grid)} rows)")
        del grid[index]
