from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

from ..models.export_batch import ExportBatch

"""CSV rendering of an export batch.

Format:
- cells joined with "||" (free-form fields may contain commas)
- rows joined with "\\n", no trailing newline
- no header row
- booleans as "true" / "false"
- no quoting or escaping: a field containing "||" makes the line ambiguous

File name: Order_<YYYY-MM-DD>.csv
"""

__all__ = [
    "DELIMITER",
    "build_csv",
    "format_cell",
    "order_file_name",
    "write_csv",
]

logger = logging.getLogger(__name__)

DELIMITER = "||"
LINE_SEPARATOR = "\n"


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        # Excel 読込で int 列が float 化されるケース (例: 3.0 -> "3")
        return str(int(value))
    return str(value)


def build_csv(batch: ExportBatch) -> str:
    """Render ``batch.rows`` as ``||``-delimited lines.

    >>> from datetime import datetime
    >>> b = ExportBatch(rows=[["t1", "A", "B"], ["t2", "C", "D"]], row_count=2,
    ...                 col_count=3, timestamp=datetime(2024, 5, 1))
    >>> build_csv(b)
    't1||A||B\\nt2||C||D'
    """
    return LINE_SEPARATOR.join(
        DELIMITER.join(format_cell(v) for v in row) for row in batch.rows
    )


def order_file_name(day: date) -> str:
    return f"Order_{day.isoformat()}.csv"


def _free_path(directory: Path, file_name: str) -> Path:
    # ブラウザのダウンロードと同じく "Order_<date> (1).csv" ... と連番を付ける
    path = directory / file_name
    stem, suffix = path.stem, path.suffix
    n = 1
    while path.exists():
        path = directory / f"{stem} ({n}){suffix}"
        n += 1
    return path


def write_csv(batch: ExportBatch, directory: Path) -> Path:
    """Write the batch CSV into ``directory`` and return the file path.

    Earlier files are never replaced: a second export on the same day gets
    a numbered name (``Order_2024-05-01 (1).csv``).
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = _free_path(directory, order_file_name(batch.timestamp.date()))
    # "x": 既存ファイルを上書きしない
    with path.open("x", encoding="utf-8", newline="") as f:
        f.write(build_csv(batch))
    logger.debug("csv written: %s (%d rows)", path, batch.row_count)
    return path
