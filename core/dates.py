"""
Calendar-date helpers.

Assignment rows store dates as ISO strings (Supabase returns ``date`` and
``timestamptz`` columns that way). Everything that compares or groups dates
goes through ``to_calendar_date`` so time-of-day never takes part in equality.
"""

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]


def to_calendar_date(value: DateLike) -> date:
    """
    Normalise a date, datetime or ISO string to a ``datetime.date``.

    Args:
        value: ``date``, ``datetime`` or ISO-8601 string
            (``"2024-01-10"``, ``"2024-01-10T00:00:00Z"``)

    Returns:
        The calendar date component

    Raises:
        ValueError: If the string is not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")
    return date.fromisoformat(value.strip()[:10])


def add_days(start: DateLike, days: int) -> date:
    """Return the calendar date ``days`` after ``start``."""
    return to_calendar_date(start) + timedelta(days=days)


def iso(value: DateLike) -> str:
    """ISO calendar-date string (``YYYY-MM-DD``)."""
    return to_calendar_date(value).isoformat()
