from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

"""Wall-clock source for row timestamps.

Timestamps written into the sheets are naive local datetimes in the configured
timezone (spreadsheet cells carry no offset, and openpyxl rejects tz-aware
values). Tests inject a fixed clock instead.
"""

__all__ = [
    "Clock",
    "local_clock",
    "fixed_clock",
]

Clock = Callable[[], datetime]


def local_clock(timezone: str = "UTC") -> Clock:
    tz = ZoneInfo(timezone)

    def now() -> datetime:
        return datetime.now(tz).replace(tzinfo=None, microsecond=0)

    return now


def fixed_clock(moment: datetime) -> Clock:
    return lambda: moment
