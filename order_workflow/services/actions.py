from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from ..config.loader import ConfigError, WorkflowConfig
from ..logging.error_log import ErrorLogBuffer
from ..models.action_result import ActionResult, ActionStatus
from ..models.error_record import ErrorRecord
from ..store.base import StoreError, TableStore
from .approval import approve_selected
from .clock import Clock, local_clock
from .csv_export import build_csv, order_file_name, write_csv
from .errors import EmptyInputError, WorkflowError
from .export import finalize, prepare_export
from .intake_view import refresh_intake_view
from .sender import send_batch

"""Menu actions.

Each action is a no-argument trigger (given its context) that runs to
completion and returns an ActionResult. This is the error boundary: every
exception raised inside an action is converted into a message, logged, and
recorded in the error log. Nothing propagates to the caller.

- approve:  approve_selected() -> refresh_intake_view()
- download: prepare_export() -> write CSV -> finalize() (always, once written)
- send:     prepare_export() -> send_batch() -> finalize() only on HTTP 200
- refresh-requested: rebuild "Requested" from "Raw Responses"
"""

__all__ = [
    "ACTIONS",
    "WorkflowContext",
    "approve_checked_items",
    "download_approved_items",
    "send_approved_items",
    "refresh_requested",
    "run_action",
]

logger = logging.getLogger(__name__)


@dataclass
class WorkflowContext:
    store: TableStore
    config: WorkflowConfig
    now: Clock | None = None
    http_client: httpx.Client | None = None
    error_log: ErrorLogBuffer = field(default_factory=ErrorLogBuffer)

    def __post_init__(self) -> None:
        if self.now is None:
            self.now = local_clock(self.config.timezone)

    @property
    def output_directory(self) -> Path:
        return Path(self.config.output_directory)


class _Outcome:
    """Mutable fields filled in by an action body."""

    def __init__(self) -> None:
        self.message = ""
        self.moved_rows = 0
        self.artifact: Path | None = None
        self.server_response: str | None = None
        self.status = ActionStatus.SUCCESS
        self.error_type: str | None = None


def _error_type(exc: Exception) -> str:
    if isinstance(exc, WorkflowError):
        return exc.error_type
    if isinstance(exc, StoreError):
        return "STORE_ERROR"
    if isinstance(exc, ConfigError):
        return "CONFIG_ERROR"
    return "UNEXPECTED"


def _guard(
    ctx: WorkflowContext, action: str, table: str, body: Callable[[_Outcome], None]
) -> ActionResult:
    start = time.perf_counter()
    out = _Outcome()
    try:
        body(out)
    except EmptyInputError as e:
        out.status = ActionStatus.NOTHING_TO_DO
        out.error_type = e.error_type
        out.message = str(e)
        logger.info(f"{action}: nothing to do ({e})")
    except Exception as e:
        out.status = ActionStatus.FAILED
        out.error_type = _error_type(e)
        out.message = str(e)
        if out.error_type == "UNEXPECTED":
            logger.exception(f"{action}: unexpected failure: {e}")
        else:
            logger.error(f"{action}: {e}")
        ctx.error_log.append(ErrorRecord.create(action, table, out.error_type, str(e)))
    else:
        logger.info(out.message)
    return ActionResult(
        action=action,
        status=out.status,
        message=out.message,
        moved_rows=out.moved_rows,
        artifact=out.artifact,
        server_response=out.server_response,
        error_type=out.error_type,
        elapsed_seconds=time.perf_counter() - start,
    )


def approve_checked_items(ctx: WorkflowContext) -> ActionResult:
    """Menu: "Approve Checked Items"."""
    tables = ctx.config.tables

    def body(out: _Outcome) -> None:
        result = approve_selected(ctx.store, tables, ctx.now)
        # 数式がないので Requested を Raw Responses から再構築 (位置ずれ防止)
        refresh_intake_view(ctx.store, tables)
        out.moved_rows = result.moved_count
        out.message = f"{result.moved_count} item(s) moved to '{tables.approved}'"

    return _guard(ctx, "approve", tables.requested, body)


def download_approved_items(ctx: WorkflowContext) -> ActionResult:
    """Menu: "Download Approved Items as CSV"."""
    tables = ctx.config.tables

    def body(out: _Outcome) -> None:
        batch = prepare_export(ctx.store, tables, ctx.now)
        if batch is None:
            raise EmptyInputError(f"no approved items in '{tables.approved}'")
        out.artifact = write_csv(batch, ctx.output_directory)
        # ダウンロードは成果物を書き出した時点で成功とみなす
        finalize(ctx.store, tables, batch)
        out.moved_rows = batch.row_count
        out.message = f"downloaded {batch.row_count} item(s) to {out.artifact}"

    return _guard(ctx, "download", tables.approved, body)


def send_approved_items(ctx: WorkflowContext) -> ActionResult:
    """Menu: "Send Approved Items to Server".

    "Approved" is only finalized after a 200 reply; on any failure it is left
    as it was so the user can retry.
    """
    tables = ctx.config.tables

    def body(out: _Outcome) -> None:
        batch = prepare_export(ctx.store, tables, ctx.now)
        if batch is None:
            raise EmptyInputError(f"no approved items in '{tables.approved}'")
        endpoint = ctx.config.endpoint
        if endpoint is None:
            raise ConfigError("no endpoint configured (endpoint.url / ORDER_ENDPOINT_URL)")
        file_name = order_file_name(batch.timestamp.date())
        out.server_response = send_batch(build_csv(batch), endpoint, file_name, client=ctx.http_client)
        finalize(ctx.store, tables, batch)
        out.moved_rows = batch.row_count
        out.message = f"sent {batch.row_count} item(s); server response: {out.server_response}"

    return _guard(ctx, "send", tables.approved, body)


def refresh_requested(ctx: WorkflowContext) -> ActionResult:
    """Rebuild "Requested" from "Raw Responses" (workbook files have no formulas)."""
    tables = ctx.config.tables

    def body(out: _Outcome) -> None:
        count = refresh_intake_view(ctx.store, tables)
        out.moved_rows = count
        out.message = f"'{tables.requested}' now lists {count} item(s)"

    return _guard(ctx, "refresh-requested", tables.requested, body)


ACTIONS: dict[str, Callable[[WorkflowContext], ActionResult]] = {
    "approve": approve_checked_items,
    "download": download_approved_items,
    "send": send_approved_items,
    "refresh-requested": refresh_requested,
}


def run_action(name: str, ctx: WorkflowContext) -> ActionResult:
    try:
        action = ACTIONS[name]
    except KeyError:
        raise ValueError(f"unknown action: {name}") from None
    return action(ctx)
