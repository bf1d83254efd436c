# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from datetime import datetime
from pathlib import Path

import pandas as pd
import pytest

from order_workflow.config.loader import TableNames
from order_workflow.logging.init import LOGGER_NAME, reset_logging
from order_workflow.services.clock import fixed_clock
from order_workflow.store.memory import InMemoryTableStore

FIXED_NOW = datetime(2024, 5, 1, 9, 30, 0)

REQUESTED_HEADER = ["Approved", "Item", "Qty", "Requester"]
RAW_HEADER = ["Item", "Qty", "Requester"]
APPROVED_HEADER = ["Approved at", "Item", "Qty", "Requester"]
ORDERED_HEADER = ["Ordered at", "Item", "Qty", "Requester"]


class RecordingStore(InMemoryTableStore):
    """InMemoryTableStore that records every mutating call."""

    def __init__(self, tables=None) -> None:
        super().__init__(tables)
        self.calls: list[tuple] = []

    def append_rows(self, table, rows):
        self.calls.append(("append_rows", table, len(rows)))
        super().append_rows(table, rows)

    def clear_cells(self, table, row, num_rows, col, num_cols):
        self.calls.append(("clear_cells", table, row, num_rows, col, num_cols))
        super().clear_cells(table, row, num_rows, col, num_cols)

    def delete_row(self, table, index):
        self.calls.append(("delete_row", table, index))
        super().delete_row(table, index)


def seed_tables() -> dict[str, list[list[object]]]:
    return {
        "Requested": [
            REQUESTED_HEADER,
            [True, "Widget", 2, "alice"],
            [False, "Gadget", 1, "bob"],
            [True, "Bolt", 10, "carol"],
        ],
        "Raw Responses": [
            RAW_HEADER,
            ["Widget", 2, "alice"],
            ["Gadget", 1, "bob"],
            ["Bolt", 10, "carol"],
        ],
        "Approved": [APPROVED_HEADER],
        "Ordered": [ORDERED_HEADER],
    }


def write_workbook(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Create a real .xlsx file, one sheet per table, no pandas header row."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _isolate_logging():
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("ORDER_WORKBOOK", raising=False)
        monkeypatch.delenv("ORDER_ENDPOINT_URL", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """workbook: ./data/orders.xlsx
output_directory: ./exports
timezone: UTC
endpoint:
  url: https://orders.example.com/upload
  timeout_seconds: 10
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "workflow.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_workbook(temp_workdir: Path) -> Path:
    return write_workbook(temp_workdir / "data" / "orders.xlsx", seed_tables())


@pytest.fixture()
def tables() -> TableNames:
    return TableNames()


@pytest.fixture()
def now():
    return fixed_clock(FIXED_NOW)


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore(seed_tables())
