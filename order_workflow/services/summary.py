from __future__ import annotations

from ..models.action_result import ActionResult

"""SUMMARY line rendering for one menu action.

Format:
SUMMARY action={action} status={status} moved={rows} elapsed_sec={elapsed}
"""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(value: float) -> str:
    """Integers without a decimal point, tiny values without scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ActionResult) -> str:
    """Render the SUMMARY line of an action result.

    Examples:
        >>> from order_workflow.models.action_result import ActionStatus
        >>> r = ActionResult(action="send", status=ActionStatus.SUCCESS, message="ok",
        ...                  moved_rows=2, elapsed_seconds=1.5)
        >>> render_summary_line(r)
        'SUMMARY action=send status=success moved=2 elapsed_sec=1.5'
    """
    return (
        f"SUMMARY action={result.action} "
        f"status={result.status.value} "
        f"moved={result.moved_rows} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
