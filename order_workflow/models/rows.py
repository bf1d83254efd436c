from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

"""Typed row records parsed at the table-store boundary.

Column 0 of a workflow sheet changes meaning as a row moves along:

- "Requested": approval checkbox (boolean)
- "Approved":  approval timestamp
- "Ordered":   sent / downloaded timestamp

Columns 1..N are the item attributes and are carried unchanged.
"""

__all__ = [
    "IntakeRow",
    "parse_intake_rows",
    "stamp_row",
]


def stamp_row(row: Sequence[Any], timestamp: datetime) -> list[Any]:
    """Return a copy of ``row`` with column 0 replaced by ``timestamp``."""
    return [timestamp, *row[1:]]


@dataclass(frozen=True)
class IntakeRow:
    """One data row of the "Requested" sheet.

    ``position`` is the 0-based index among the data rows (header excluded);
    it is the only link to the matching "Raw Responses" row.
    """
    position: int
    approved: bool
    values: tuple[Any, ...]  # columns 1..N

    @property
    def sheet_row(self) -> int:
        """Absolute sheet row (row 0 is the header)."""
        return self.position + 1

    def to_approved(self, timestamp: datetime) -> list[Any]:
        return [timestamp, *self.values]

    @staticmethod
    def from_cells(position: int, cells: Sequence[Any]) -> IntakeRow:
        # チェックボックスは bool True のみ承認扱い ("TRUE" 文字列や 1 は対象外)
        flag = cells[0] if cells else None
        return IntakeRow(
            position=position,
            approved=flag is True,
            values=tuple(cells[1:]),
        )


def parse_intake_rows(data_rows: Sequence[Sequence[Any]]) -> list[IntakeRow]:
    return [IntakeRow.from_cells(i, cells) for i, cells in enumerate(data_rows)]
