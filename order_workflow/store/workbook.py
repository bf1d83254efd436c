from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from .base import Grid, StoreError
from .memory import InMemoryTableStore

"""Excel workbook table store.

Each sheet of an .xlsx file is one table. The whole workbook is read once with
pandas (header=None, so the header stays row 0 of the grid) and written back
after every mutation: a crash between two operations leaves the file exactly
as far along as the operations that completed, like edits to a live sheet.

Cell values are normalised on read:
- NaN / NaT / empty -> None
- numpy scalars -> Python scalars (numpy.bool_ -> bool for checkbox columns)
- pandas.Timestamp -> datetime
"""

__all__ = [
    "WorkbookTableStore",
    "frame_to_grid",
]


def _normalize_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, pd.Timestamp):
        return None if pd.isna(value) else value.to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and pd.isna(value):
        return None
    if value is pd.NaT:
        return None
    return value


def frame_to_grid(df: pd.DataFrame) -> Grid:
    """Convert a raw (header=None) sheet DataFrame into a list of rows."""
    grid: Grid = []
    for raw in df.astype(object).itertuples(index=False, name=None):
        grid.append([_normalize_cell(v) for v in raw])
    return grid


class WorkbookTableStore(InMemoryTableStore):
    """TableStore persisted to an .xlsx workbook via pandas + openpyxl."""

    def __init__(
        self,
        path: Path,
        tables: dict[str, Grid] | None = None,
        *,
        autosave: bool = True,
    ) -> None:
        super().__init__(tables)
        self.path = path
        self.autosave = autosave

    @classmethod
    def open(cls, path: Path, *, autosave: bool = True) -> WorkbookTableStore:
        if not path.exists():
            raise StoreError(f"workbook not found: {path}")
        try:
            frames = pd.read_excel(path, sheet_name=None, header=None, engine="openpyxl")
        except Exception as e:
            raise StoreError(f"failed to read workbook {path}: {e}") from e
        tables = {str(name): frame_to_grid(df) for name, df in frames.items()}
        return cls(path, tables, autosave=autosave)

    def save(self) -> None:
        try:
            with pd.ExcelWriter(self.path, engine="openpyxl") as writer:
                for name, grid in self._tables.items():
                    pd.DataFrame(grid).to_excel(writer, sheet_name=name, header=False, index=False)
        except Exception as e:
            raise StoreError(f"failed to write workbook {self.path}: {e}") from e

    def _persist(self) -> None:
        if self.autosave:
            self.save()

    def add_table(self, table: str, header: Sequence[Any] | None = None) -> None:
        super().add_table(table, header)
        self._persist()

    def append_rows(self, table: str, rows: Sequence[Sequence[Any]]) -> None:
        super().append_rows(table, rows)
        self._persist()

    def clear_cells(self, table: str, row: int, num_rows: int, col: int, num_cols: int) -> None:
        super().clear_cells(table, row, num_rows, col, num_cols)
        self._persist()

    def delete_row(self, table: str, index: int) -> None:
        super().delete_row(table, index)
        self._persist()
