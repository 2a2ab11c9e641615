from __future__ import annotations

from datetime import date, datetime, timedelta

from ..core.constants import DATE_FORMAT, TIME_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, DATE_FORMAT).date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now()


def format_time(value: datetime) -> str:
    """12-hour clock time as shown on reports, e.g. 09:05 AM."""
    return value.strftime(TIME_FORMAT)


def format_duration(delta: timedelta) -> str:
    """Human readable duration, e.g. '1 hour 5 minutes'.

    Negative durations render as '0 minutes'.
    """
    total_minutes = max(int(delta.total_seconds() // 60), 0)
    hours, minutes = divmod(total_minutes, 60)

    minutes_part = f"{minutes} minute{'' if minutes == 1 else 's'}"
    if hours > 0:
        return f"{hours} hour{'' if hours == 1 else 's'} {minutes_part}"
    return minutes_part
