from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

"""ExportBatch: in-memory snapshot of the "Approved" sheet prepared for export.

Created by prepare_export(), consumed by the CSV writer or the HTTP sender and
then by finalize(). Never persisted.
"""

__all__ = [
    "ExportBatch",
]


@dataclass(frozen=True)
class ExportBatch:
    """Rows stamped with one shared timestamp plus the range they came from.

    ``start_row`` is the absolute sheet row of the first batch row in
    "Approved" (row 0 is the header), so finalize() clears exactly the range
    that was read.
    """
    rows: list[list[Any]]
    row_count: int
    col_count: int
    timestamp: datetime
    start_row: int = 1

    def __post_init__(self) -> None:
        if self.row_count != len(self.rows):
            raise ValueError(f"row_count={self.row_count} does not match {len(self.rows)} rows")
