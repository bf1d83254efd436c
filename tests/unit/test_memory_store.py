from __future__ import annotations

import pytest

from order_workflow.store.base import StoreError, TableNotFoundError, TableStore, split_header
from order_workflow.store.memory import InMemoryTableStore


def _store() -> InMemoryTableStore:
    return InMemoryTableStore(
        {
            "T": [
                ["h1", "h2", "h3"],
                ["a", "b"],
                ["c", "d", "e"],
            ]
        }
    )


def test_satisfies_table_store_protocol():
    assert isinstance(_store(), TableStore)


def test_read_all_is_rectangular():
    grid = _store().read_all("T")
    assert grid == [["h1", "h2", "h3"], ["a", "b", None], ["c", "d", "e"]]


def test_read_all_returns_copies():
    store = _store()
    store.read_all("T")[1][0] = "changed"
    assert store.read_all("T")[1][0] == "a"


def test_read_all_trims_trailing_empty_rows_and_columns():
    store = InMemoryTableStore({"T": [["h", None], ["x", ""], [None, None], ["", None]]})
    assert store.read_all("T") == [["h"], ["x"]]


def test_read_all_empty_table():
    store = InMemoryTableStore({"T": []})
    assert store.read_all("T") == []
    assert split_header(store.read_all("T")) == (None, [])


def test_unknown_table():
    with pytest.raises(TableNotFoundError, match="'Nope'"):
        _store().read_all("Nope")


def test_append_rows_after_last_row():
    store = _store()
    store.append_rows("T", [["f", "g", "h"], ["i", "j", "k"]])
    grid = store.read_all("T")
    assert grid[-2:] == [["f", "g", "h"], ["i", "j", "k"]]
    assert len(grid) == 5


def test_append_rows_reuses_cleared_trailing_rows():
    store = _store()
    store.clear_cells("T", 1, 2, 0, 3)
    assert store.read_all("T") == [["h1", "h2", "h3"]]
    store.append_rows("T", [["x", "y", "z"]])
    assert store.read_all("T") == [["h1", "h2", "h3"], ["x", "y", "z"]]


def test_append_nothing_is_noop():
    store = _store()
    store.append_rows("T", [])
    assert len(store.read_all("T")) == 3


def test_clear_cells_keeps_rows():
    store = _store()
    store.clear_cells("T", 1, 1, 0, 1)
    assert store.read_all("T") == [["h1", "h2", "h3"], [None, "b", None], ["c", "d", "e"]]


def test_clear_cells_beyond_grid_is_ignored():
    store = _store()
    store.clear_cells("T", 2, 10, 1, 10)
    assert store.read_all("T")[2] == ["c", None, None]


def test_clear_cells_negative_range():
    with pytest.raises(StoreError):
        _store().clear_cells("T", -1, 1, 0, 1)


def test_delete_row_shifts_rows_up():
    store = _store()
    store.delete_row("T", 1)
    assert store.read_all("T") == [["h1", "h2", "h3"], ["c", "d", "e"]]


def test_delete_row_out_of_range():
    with pytest.raises(StoreError, match="out of range"):
        _store().delete_row("T", 3)


def test_add_table():
    store = _store()
    store.add_table("New", ["a", "b"])
    assert store.read_all("New") == [["a", "b"]]
    with pytest.raises(StoreError, match="already exists"):
        store.add_table("New")
