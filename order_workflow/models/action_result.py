from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

"""Result models for the menu actions.

ActionStatus lifecycle per invocation: the action either completes
(SUCCESS), finds nothing to process (NOTHING_TO_DO, informational) or fails
(FAILED). Errors never leave the action; they are folded into the result.
"""

__all__ = [
    "ActionStatus",
    "ActionResult",
    "ApprovalResult",
]


class ActionStatus(Enum):
    SUCCESS = "success"
    NOTHING_TO_DO = "nothing_to_do"
    FAILED = "failed"


@dataclass(frozen=True)
class ApprovalResult:
    moved_count: int


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one menu action, shown to the user and summarised on one line."""
    action: str
    status: ActionStatus
    message: str
    moved_rows: int = 0
    artifact: Path | None = None  # download: written CSV
    server_response: str | None = None  # send: 200 body, verbatim
    error_type: str | None = None  # UPPER_SNAKE, FAILED / NOTHING_TO_DO only
    elapsed_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is not ActionStatus.FAILED
