"""Display ordering of items into groups.

Display only: nothing here affects geometry.
"""

from collections.abc import Iterable, Mapping
from datetime import date

from blueprint_timeline.domain.bar_geometry import resolve_effective_dates
from blueprint_timeline.domain.layout_rules import DEFAULT_RULES, LayoutRules
from blueprint_timeline.domain.phases import phase_name
from blueprint_timeline.schemas.timeline import DisplayGroup, ScheduledItem

UNASSIGNED_GROUP_NAME = "Unassigned"


def order_group_items(
    items: list[ScheduledItem],
    rules: LayoutRules = DEFAULT_RULES,
) -> list[ScheduledItem]:
    """Dated items by effective due date ascending, then dateless in input order.

    The sort is stable, so items sharing a due date keep their input order.
    """
    dated: list[tuple[ScheduledItem, date]] = []
    dateless: list[ScheduledItem] = []
    for item in items:
        effective = resolve_effective_dates(item, rules)
        if effective is None:
            dateless.append(item)
        else:
            dated.append((item, effective.end))

    dated.sort(key=lambda pair: pair[1])
    return [item for item, _ in dated] + dateless


def group_for_display(
    items: Iterable[ScheduledItem],
    names: Mapping[int, str] | None = None,
    rules: LayoutRules = DEFAULT_RULES,
) -> list[DisplayGroup]:
    """Split items into display groups.

    Rules:
        - Ungrouped items (no group key, or 0) form the "Unassigned" group,
          listed first when non-empty
        - Other groups are ordered by display name, case-insensitively
          (group key breaks ties)
        - Within a group, see order_group_items
    """
    unassigned: list[ScheduledItem] = []
    grouped: dict[int, list[ScheduledItem]] = {}
    for item in items:
        if item.is_grouped:
            grouped.setdefault(item.group_key, []).append(item)
        else:
            unassigned.append(item)

    groups: list[DisplayGroup] = []
    if unassigned:
        groups.append(DisplayGroup(
            group_key=None,
            name=UNASSIGNED_GROUP_NAME,
            items=order_group_items(unassigned, rules),
        ))

    named = sorted(
        ((phase_name(key, names), key, members) for key, members in grouped.items()),
        key=lambda entry: (entry[0].casefold(), entry[1]),
    )
    for name, key, members in named:
        groups.append(DisplayGroup(
            group_key=key,
            name=name,
            items=order_group_items(members, rules),
        ))

    return groups
