from .actions import (
    ACTIONS,
    WorkflowContext,
    approve_checked_items,
    download_approved_items,
    refresh_requested,
    run_action,
    send_approved_items,
)
from .approval import approve_selected
from .csv_export import build_csv, order_file_name, write_csv
from .errors import EmptyInputError, NoSelectionError, SendError, WorkflowError
from .export import finalize, prepare_export
from .intake_view import refresh_intake_view
from .sender import send_batch

__all__ = [
    # Core operations
    "approve_selected",
    "prepare_export",
    "finalize",
    "build_csv",
    "order_file_name",
    "write_csv",
    "send_batch",
    "refresh_intake_view",
    # Menu actions
    "ACTIONS",
    "WorkflowContext",
    "approve_checked_items",
    "download_approved_items",
    "send_approved_items",
    "refresh_requested",
    "run_action",
    # Errors
    "WorkflowError",
    "EmptyInputError",
    "NoSelectionError",
    "SendError",
]
