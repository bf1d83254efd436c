from .base import Grid, StoreError, TableNotFoundError, TableStore, is_empty_cell, split_header
from .memory import InMemoryTableStore
from .workbook import WorkbookTableStore, frame_to_grid

__all__ = [
    "Grid",
    "StoreError",
    "TableNotFoundError",
    "TableStore",
    "is_empty_cell",
    "split_header",
    "InMemoryTableStore",
    "WorkbookTableStore",
    "frame_to_grid",
]
