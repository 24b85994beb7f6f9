"""Effective-date inference and percentage geometry for timeline bars.

Pure functions -- no side effects. An item that cannot be resolved to any
date never reaches the percentage math.
"""

from dataclasses import dataclass
from datetime import date, timedelta

from blueprint_timeline.domain.calendar import days_between
from blueprint_timeline.domain.layout_rules import DEFAULT_RULES, LayoutRules
from blueprint_timeline.domain.timeline_window import total_days
from blueprint_timeline.schemas.timeline import BarGeometry, DateWindow, ScheduledItem

DONE_STATUS = "done"


@dataclass(frozen=True)
class EffectiveDates:
    """Start/end actually used for layout. ``start <= end`` always holds."""

    start: date
    end: date


def resolve_effective_dates(
    item: ScheduledItem,
    rules: LayoutRules = DEFAULT_RULES,
) -> EffectiveDates | None:
    """Resolve an item's possibly-partial dates into an effective pair.

    Args:
        item: Item with optional start_date/due_date
        rules: Lead-time and duration constants

    Returns:
        EffectiveDates, or None when the item has neither date (dateless).

    Rules, in order:
        - Both dates: used as given
        - Only due_date: start = due_date - lead days for the priority
        - Only start_date: end = start_date + default duration
        - Start after end: start = end - 1 day
    """
    if item.start_date is None and item.due_date is None:
        return None

    if item.start_date is not None and item.due_date is not None:
        start, end = item.start_date, item.due_date
    elif item.due_date is not None:
        end = item.due_date
        start = end - timedelta(days=rules.lead_days_for(item.priority))
    else:
        start = item.start_date
        end = start + timedelta(days=rules.default_duration_days)

    if start > end:
        start = end - timedelta(days=1)

    return EffectiveDates(start=start, end=end)


def compute_bar(
    item_id: str,
    effective: EffectiveDates,
    window: DateWindow,
    is_overdue: bool = False,
) -> BarGeometry | None:
    """Map an effective date pair onto the window as left/width percentages.

    The bar is clipped to the window, but the unclipped dates are reported.
    Returns None when the pair lies entirely outside the window, which can
    only happen with an explicit (non-derived) window.
    """
    display_start = max(effective.start, window.start)
    display_end = min(effective.end, window.end)
    if display_start > display_end:
        return None

    day_count = total_days(window)
    days_from_start = days_between(display_start, window.start)
    days_span = days_between(display_end, display_start) + 1  # one-day item spans 1

    return BarGeometry(
        item_id=item_id,
        left_percent=100 * days_from_start / day_count,
        width_percent=100 * days_span / day_count,
        effective_start=effective.start,
        effective_end=effective.end,
        is_overdue=is_overdue,
    )


def today_percent(today: date, window: DateWindow) -> float | None:
    """Position of the today marker, or None when today is outside the window."""
    if today < window.start or today > window.end:
        return None
    return 100 * days_between(today, window.start) / total_days(window)


def is_overdue(end: date, today: date, status: str | None) -> bool:
    """An unfinished item whose effective end has passed."""
    return end < today and status != DONE_STATUS
