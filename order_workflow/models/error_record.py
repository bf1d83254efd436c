from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the action error log.

One record per failed menu action, serialized as a JSON line with a fixed key
set. ``table`` is the sheet the action was working on when it failed, or an
empty string when the failure is not tied to a single table (e.g. transport).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        action: Menu action name (approve / download / send / refresh-requested)
        table: Sheet name involved, "" when not applicable
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable failure description
    """
    timestamp: str  # ISO8601 UTC
    action: str
    table: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(action: str, table: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            action=action,
            table=table,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
