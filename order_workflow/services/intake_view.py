from __future__ import annotations

import logging

from ..config.loader import TableNames
from ..store.base import TableStore, split_header

"""Rebuild "Requested" from "Raw Responses".

In a live spreadsheet "Requested" mirrors "Raw Responses" through a formula
with a checkbox column in front. A workbook file has no formulas, so the
mirror is rebuilt explicitly: every raw data row becomes [flag, *raw_row].

The checkbox column is positional, like in the sheet: the flag at position i
stays at position i whatever row now sits there. New positions start
unchecked (False).
"""

__all__ = [
    "FLAG_HEADER",
    "refresh_intake_view",
]

logger = logging.getLogger(__name__)

FLAG_HEADER = "Approved"


def refresh_intake_view(store: TableStore, tables: TableNames) -> int:
    """Rebuild the "Requested" data rows and return how many there are now."""
    raw_header, raw_rows = split_header(store.read_all(tables.raw_responses))
    req_header, req_rows = split_header(store.read_all(tables.requested))

    flags = [row[0] if row else None for row in req_rows]
    rebuilt = []
    for i, raw in enumerate(raw_rows):
        flag = flags[i] if i < len(flags) else None
        rebuilt.append([flag is True, *raw])

    # 下から削除してヘッダ以外を空にする
    for index in range(len(req_rows), 0, -1):
        store.delete_row(tables.requested, index)

    if req_header is None:
        store.append_rows(tables.requested, [[FLAG_HEADER, *(raw_header or [])]])
    if rebuilt:
        store.append_rows(tables.requested, rebuilt)

    logger.info("refreshed '%s' from '%s': %d row(s)", tables.requested, tables.raw_responses, len(rebuilt))
    return len(rebuilt)
