"""Domain models for the order sheet workflow."""

from .action_result import ActionResult, ActionStatus, ApprovalResult
from .error_record import ErrorRecord
from .export_batch import ExportBatch
from .rows import IntakeRow, parse_intake_rows, stamp_row

__all__ = [
    # Row records
    "IntakeRow",
    "parse_intake_rows",
    "stamp_row",
    # Batches and results
    "ExportBatch",
    "ActionResult",
    "ActionStatus",
    "ApprovalResult",
    "ErrorRecord",
]
