"""Phase aggregation over grouped items.

Pure domain functions. Phases are derived on every call and never stored;
only the group key carries identity across calls.
"""

from collections.abc import Iterable, Mapping

from blueprint_timeline.domain.bar_geometry import resolve_effective_dates
from blueprint_timeline.domain.layout_rules import DEFAULT_RULES, LayoutRules
from blueprint_timeline.schemas.timeline import Phase, ScheduledItem


def phase_name(group_key: int, names: Mapping[int, str] | None = None) -> str:
    """Display name from the lookup map, falling back to "Phase {n}"."""
    if names and names.get(group_key):
        return names[group_key]
    return f"Phase {group_key}"


def group_members(items: Iterable[ScheduledItem]) -> dict[int, list[ScheduledItem]]:
    """Grouped items keyed by group key, in input order. Ungrouped items are skipped."""
    grouped: dict[int, list[ScheduledItem]] = {}
    for item in items:
        if not item.is_grouped:
            continue
        grouped.setdefault(item.group_key, []).append(item)
    return grouped


def aggregate_phases(
    items: Iterable[ScheduledItem],
    names: Mapping[int, str] | None = None,
    rules: LayoutRules = DEFAULT_RULES,
) -> list[Phase]:
    """Aggregate grouped items into phases ordered by group key.

    Args:
        items: All items, grouped and ungrouped
        names: Optional group key -> display name lookup
        rules: Inference constants used to resolve member dates

    Returns:
        One Phase per group key that has at least one dated member.
        start_date/end_date span the members' effective dates; dateless
        members count toward item_count only.
    """
    phases: list[Phase] = []

    for group_key, members in sorted(group_members(items).items()):
        resolved = [
            effective for effective in (resolve_effective_dates(m, rules) for m in members)
            if effective is not None
        ]
        if not resolved:
            continue

        phases.append(Phase(
            group_key=group_key,
            name=phase_name(group_key, names),
            start_date=min(e.start for e in resolved),
            end_date=max(e.end for e in resolved),
            item_count=len(members),
            dated_item_count=len(resolved),
        ))

    return phases
