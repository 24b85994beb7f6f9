"""TimelineLayoutEngine: turns scheduled items into render-ready timeline geometry.

Runs the three layout stages in order: window derivation, week bucketing,
then per-item (or per-phase) bar computation with fallback-date inference.
Stateless and synchronous; ``now`` is always injected so identical inputs
give identical output.
"""

from collections import Counter
from collections.abc import Mapping, Sequence
from datetime import date, datetime

import structlog

from blueprint_timeline.core.config import Settings, get_settings
from blueprint_timeline.core.exceptions import DuplicateItemIdError, InvalidWindowError
from blueprint_timeline.domain.bar_geometry import (
    EffectiveDates,
    compute_bar,
    is_overdue,
    resolve_effective_dates,
    today_percent,
)
from blueprint_timeline.domain.calendar import to_day
from blueprint_timeline.domain.layout_rules import DEFAULT_RULES, LayoutRules
from blueprint_timeline.domain.phases import aggregate_phases, group_members
from blueprint_timeline.domain.timeline_window import (
    bucket_weeks,
    derive_window,
    item_dates,
    label_days,
    label_interval,
    phase_dates,
    total_days,
)
from blueprint_timeline.schemas.timeline import (
    BarGeometry,
    DateWindow,
    LayoutMode,
    Phase,
    ScheduledItem,
    TimelineLayout,
)

logger = structlog.get_logger(__name__)

PHASE_BAR_PREFIX = "phase-"


def ensure_unique_ids(items: Sequence[ScheduledItem]) -> None:
    """Raise DuplicateItemIdError if any id occurs more than once.

    Boundary check for callers that accept items from outside; the engine
    itself does not require it.
    """
    counts = Counter(item.id for item in items)
    duplicates = [item_id for item_id, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateItemIdError(duplicates)


def ensure_valid_window(window: DateWindow | None) -> None:
    """Raise InvalidWindowError for an explicit window that ends before it starts."""
    if window is not None and window.start > window.end:
        raise InvalidWindowError(window.start, window.end)


class TimelineLayoutEngine:
    """Computes timeline layouts with a fixed set of inference rules.

    Takes the rules by injection so tests and report renderers can vary the
    heuristics without touching global settings.
    """

    def __init__(self, rules: LayoutRules | None = None):
        """Initialize with layout rules.

        Args:
            rules: Inference and padding constants (defaults to built-in values)
        """
        self.rules = rules or DEFAULT_RULES

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TimelineLayoutEngine":
        return cls(LayoutRules.from_settings(settings or get_settings()))

    def layout(
        self,
        items: Sequence[ScheduledItem],
        mode: LayoutMode | str,
        now: date | datetime,
        phase_names: Mapping[int, str] | None = None,
        window: DateWindow | None = None,
    ) -> TimelineLayout:
        """Lay out items (tasks mode) or their phases (phase mode).

        Args:
            items: Ordered input items
            mode: "phases" or "tasks"
            now: Current date/time; only its calendar day is used
            phase_names: Optional group key -> display name lookup
            window: Explicit window (report period). Derived when None;
                an inverted one has its ends swapped.

        Returns:
            TimelineLayout with window, columns, bars, today marker, dateless
            items, and phases (phase mode only).
        """
        mode = LayoutMode(mode)
        today = to_day(now)

        resolved: list[tuple[ScheduledItem, EffectiveDates]] = []
        dateless: list[ScheduledItem] = []
        for item in items:
            effective = resolve_effective_dates(item, self.rules)
            if effective is None:
                dateless.append(item)
            else:
                resolved.append((item, effective))

        phases: list[Phase] | None = None
        if mode == LayoutMode.PHASES:
            phases = aggregate_phases(items, phase_names, self.rules)
            known_dates = phase_dates(phases)
        else:
            known_dates = item_dates(items)

        if window is None:
            window = derive_window(known_dates, today, self.rules)
        elif window.start > window.end:
            # Inverted explicit window: lay out over the same days instead of failing
            logger.warning(
                "timeline_window_inverted",
                start=window.start.isoformat(),
                end=window.end.isoformat(),
            )
            window = DateWindow(start=window.end, end=window.start)

        columns = bucket_weeks(window)
        day_count = total_days(window)
        interval = label_interval(day_count)

        if mode == LayoutMode.PHASES:
            bars, out_of_range = self._phase_bars(phases, items, window, today)
        else:
            bars, out_of_range = self._task_bars(resolved, window, today)

        layout = TimelineLayout(
            mode=mode,
            window=window,
            total_days=day_count,
            columns=columns,
            bars=bars,
            today_percent=today_percent(today, window),
            dateless=dateless,
            phases=phases,
            label_interval=interval,
            label_days=label_days(window, interval),
            out_of_range=out_of_range,
        )

        logger.debug(
            "timeline_layout_computed",
            mode=mode.value,
            item_count=len(items),
            bar_count=len(bars),
            dateless_count=len(dateless),
            out_of_range_count=len(out_of_range),
            total_days=day_count,
        )

        return layout

    def _task_bars(
        self,
        resolved: list[tuple[ScheduledItem, EffectiveDates]],
        window: DateWindow,
        today: date,
    ) -> tuple[list[BarGeometry], list[str]]:
        bars: list[BarGeometry] = []
        out_of_range: list[str] = []
        for item, effective in resolved:
            bar = compute_bar(
                item.id,
                effective,
                window,
                is_overdue=is_overdue(effective.end, today, item.status),
            )
            if bar is None:
                out_of_range.append(item.id)
            else:
                bars.append(bar)
        return bars, out_of_range

    def _phase_bars(
        self,
        phases: list[Phase],
        items: Sequence[ScheduledItem],
        window: DateWindow,
        today: date,
    ) -> tuple[list[BarGeometry], list[str]]:
        members = group_members(items)
        bars: list[BarGeometry] = []
        out_of_range: list[str] = []
        for phase in phases:
            bar_id = f"{PHASE_BAR_PREFIX}{phase.group_key}"
            # A phase is overdue while any member is unfinished
            overdue = any(
                is_overdue(phase.end_date, today, member.status)
                for member in members.get(phase.group_key, [])
            )
            bar = compute_bar(
                bar_id,
                EffectiveDates(start=phase.start_date, end=phase.end_date),
                window,
                is_overdue=overdue,
            )
            if bar is None:
                out_of_range.append(bar_id)
            else:
                bars.append(bar)
        return bars, out_of_range


def build_timeline_layout(
    items: Sequence[ScheduledItem],
    mode: LayoutMode | str,
    now: date | datetime,
    phase_names: Mapping[int, str] | None = None,
    window: DateWindow | None = None,
    settings: Settings | None = None,
) -> TimelineLayout:
    """One-shot layout using rules from application settings."""
    engine = TimelineLayoutEngine.from_settings(settings)
    return engine.layout(items, mode, now, phase_names=phase_names, window=window)
