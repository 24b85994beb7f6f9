"""Visible window derivation and week bucketing.

Pure functions -- deterministic, no side effects. ``today`` is always passed in.
"""

from collections.abc import Iterable
from datetime import date, timedelta

from blueprint_timeline.domain.calendar import days_between, each_day, end_of_week, start_of_week
from blueprint_timeline.domain.layout_rules import DEFAULT_RULES, LayoutRules
from blueprint_timeline.schemas.timeline import ColumnBucket, DateWindow, Phase, ScheduledItem


def item_dates(items: Iterable[ScheduledItem]) -> list[date]:
    """Every known start/due date across the items (inferred dates excluded)."""
    dates: list[date] = []
    for item in items:
        if item.start_date is not None:
            dates.append(item.start_date)
        if item.due_date is not None:
            dates.append(item.due_date)
    return dates


def phase_dates(phases: Iterable[Phase]) -> list[date]:
    """Start and end of every aggregated phase."""
    dates: list[date] = []
    for phase in phases:
        dates.append(phase.start_date)
        dates.append(phase.end_date)
    return dates


def derive_window(
    dates: Iterable[date],
    today: date,
    rules: LayoutRules = DEFAULT_RULES,
) -> DateWindow:
    """Compute the week-aligned window containing every date with padding.

    Args:
        dates: Known calendar days to contain
        today: Current day, only used when ``dates`` is empty
        rules: Padding constants

    Returns:
        DateWindow starting on a Sunday and ending on a Saturday.

    Rules:
        - No dates: from the week of today to the week of today + empty span
        - Otherwise: pad ``padding_before_days`` before the earliest date and
          ``padding_after_days`` after the latest, then widen to whole weeks
    """
    collected = list(dates)

    if not collected:
        return DateWindow(
            start=start_of_week(today),
            end=end_of_week(today + timedelta(days=rules.empty_span_days)),
        )

    min_date = min(collected)
    max_date = max(collected)

    return DateWindow(
        start=start_of_week(min_date - timedelta(days=rules.padding_before_days)),
        end=end_of_week(max_date + timedelta(days=rules.padding_after_days)),
    )


def total_days(window: DateWindow) -> int:
    """Inclusive day count of the window; the denominator for all percentages."""
    return days_between(window.end, window.start) + 1


def bucket_weeks(window: DateWindow) -> list[ColumnBucket]:
    """Partition the window into chronological Sunday-started week buckets.

    Only the first and last bucket can hold fewer than 7 days, and only when
    the window is not week aligned (explicit report windows).
    """
    buckets: list[ColumnBucket] = []
    current: ColumnBucket | None = None

    for day in each_day(window.start, window.end):
        week_start = start_of_week(day)
        if current is None or current.week_start_date != week_start:
            current = ColumnBucket(week_start_date=week_start, days=[])
            buckets.append(current)
        current.days.append(day)

    return buckets


def label_interval(day_count: int) -> int:
    """How many days apart header date labels are drawn."""
    if day_count <= 7:
        return 1
    if day_count <= 14:
        return 2
    if day_count <= 30:
        return 3
    if day_count <= 60:
        return 5
    return 7


def label_days(window: DateWindow, interval: int) -> list[date]:
    """Days that get a header label: every ``interval``-th day plus the last one."""
    days = each_day(window.start, window.end)
    return [
        day for index, day in enumerate(days)
        if index % interval == 0 or index == len(days) - 1
    ]
