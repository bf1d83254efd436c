from __future__ import annotations

import logging

from ..config.loader import TableNames
from ..models.action_result import ApprovalResult
from ..models.rows import parse_intake_rows
from ..store.base import TableStore, split_header
from .clock import Clock
from .errors import EmptyInputError, NoSelectionError

"""Approval selector: "Requested" (checked) -> "Approved".

Steps, in order:
1. read "Requested", split off the header
2. collect flagged rows as [timestamp, *attributes] (one timestamp per run)
3. no flagged row -> NoSelectionError (nothing written)
4. bulk append to "Approved"
5. clear column 0 of every "Requested" data row (all flags, not only the
   approved ones)
6. delete the positional counterparts from "Raw Responses", bottom-up

Rows of "Requested" and "Raw Responses" are matched by position only. If the
two sheets are out of sync the wrong raw rows are deleted; there is no key to
check against.

No rollback: if step 6 fails after 4/5, the approved rows stay in both
"Approved" and "Raw Responses".
"""

__all__ = [
    "approve_selected",
]

logger = logging.getLogger(__name__)


def approve_selected(store: TableStore, tables: TableNames, now: Clock) -> ApprovalResult:
    grid = store.read_all(tables.requested)
    _, data_rows = split_header(grid)
    if not data_rows:
        raise EmptyInputError(f"'{tables.requested}' has no data rows")

    intake = parse_intake_rows(data_rows)
    selected = [row for row in intake if row.approved]
    if not selected:
        raise NoSelectionError(f"no rows checked in '{tables.requested}'")

    timestamp = now()
    approved_rows = [row.to_approved(timestamp) for row in selected]
    logger.debug(
        "approve: %d/%d rows checked in '%s'", len(selected), len(intake), tables.requested
    )

    store.append_rows(tables.approved, approved_rows)

    # 全行のチェックをリセット (承認対象外の行も含む)
    store.clear_cells(tables.requested, 1, len(data_rows), 0, 1)

    for row in sorted(selected, key=lambda r: r.sheet_row, reverse=True):
        store.delete_row(tables.raw_responses, row.sheet_row)

    logger.info(
        "approved %d row(s): '%s' -> '%s'", len(selected), tables.requested, tables.approved
    )
    return ApprovalResult(moved_count=len(selected))
