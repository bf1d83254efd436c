from __future__ import annotations

"""Workflow error taxonomy.

All of these are caught at the action boundary (services.actions) and turned
into a user-facing message; none escapes a single action invocation.
"""

__all__ = [
    "WorkflowError",
    "EmptyInputError",
    "NoSelectionError",
    "SendError",
]


class WorkflowError(Exception):
    """Base class for expected workflow failures."""

    error_type = "WORKFLOW_ERROR"


class EmptyInputError(WorkflowError):
    """Nothing to process. Informational, not a fault."""

    error_type = "EMPTY_INPUT"


class NoSelectionError(WorkflowError):
    """Intake rows exist but none has its approval flag set."""

    error_type = "NO_SELECTION"


class SendError(WorkflowError):
    """The order upload failed.

    Carries ``status_code`` for non-200 replies; transport failures leave it
    None and chain the original httpx exception as ``__cause__``.
    """

    error_type = "SEND_FAILED"

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
