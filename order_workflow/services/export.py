from __future__ import annotations

import logging

from ..config.loader import TableNames
from ..models.export_batch import ExportBatch
from ..models.rows import stamp_row
from ..store.base import TableStore, split_header
from .clock import Clock

"""Export preparer and order finalizer.

prepare_export() snapshots "Approved" without touching it; finalize() moves
that snapshot to "Ordered" and blanks the cells it came from. Nothing is
locked in between: finalize() assumes "Approved" was not edited after the
batch was read.
"""

__all__ = [
    "prepare_export",
    "finalize",
]

logger = logging.getLogger(__name__)


def prepare_export(store: TableStore, tables: TableNames, now: Clock) -> ExportBatch | None:
    """Read all "Approved" data rows and stamp them with one shared timestamp.

    Returns None when "Approved" has no data rows.
    """
    grid = store.read_all(tables.approved)
    _, data_rows = split_header(grid)
    if not data_rows:
        logger.debug("export: '%s' is empty", tables.approved)
        return None

    timestamp = now()
    rows = [stamp_row(r, timestamp) for r in data_rows]
    col_count = len(grid[0])  # read_all() は矩形を返す
    return ExportBatch(
        rows=rows,
        row_count=len(rows),
        col_count=col_count,
        timestamp=timestamp,
        start_row=1,
    )


def finalize(store: TableStore, tables: TableNames, batch: ExportBatch) -> None:
    """Append the batch to "Ordered", then clear its source cells in "Approved"."""
    store.append_rows(tables.ordered, batch.rows)
    store.clear_cells(tables.approved, batch.start_row, batch.row_count, 0, batch.col_count)
    logger.info(
        "finalized %d row(s): '%s' -> '%s'", batch.row_count, tables.approved, tables.ordered
    )
