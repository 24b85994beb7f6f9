"""Day-granularity calendar helpers.

Pure functions with no external dependencies. Weeks start on Sunday.
"""

from datetime import date, datetime, timedelta


def to_day(value: date | datetime) -> date:
    """Truncate a datetime to its calendar day; dates pass through unchanged."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    # date.weekday(): Monday == 0 ... Sunday == 6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def end_of_week(day: date) -> date:
    """Saturday on or after ``day``."""
    return start_of_week(day) + timedelta(days=6)


def days_between(later: date, earlier: date) -> int:
    """Whole days from ``earlier`` to ``later`` (negative when reversed)."""
    return (later - earlier).days


def each_day(start: date, end: date) -> list[date]:
    """Every calendar day in [start, end], both inclusive. Empty if start > end."""
    return [start + timedelta(days=offset) for offset in range(days_between(end, start) + 1)]
