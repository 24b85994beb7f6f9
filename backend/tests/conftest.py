"""Shared test fixtures for all test groups."""

from datetime import date

import pytest

from blueprint_timeline.domain.layout_rules import LayoutRules
from blueprint_timeline.schemas.timeline import ScheduledItem
from blueprint_timeline.services.timeline_service import TimelineLayoutEngine


@pytest.fixture
def make_item():
    """Factory for ScheduledItem with sensible defaults."""

    def _make(item_id: str = "t1", **fields) -> ScheduledItem:
        fields.setdefault("title", f"Task {item_id}")
        return ScheduledItem(id=item_id, **fields)

    return _make


@pytest.fixture
def rules():
    """Built-in layout rules."""
    return LayoutRules()


@pytest.fixture
def engine(rules):
    """Layout engine with built-in rules."""
    return TimelineLayoutEngine(rules)


@pytest.fixture
def june_items(make_item):
    """Mixed item set around June 2024."""
    return [
        make_item("a", start_date=date(2024, 6, 1), due_date=date(2024, 6, 5), group_key=1),
        make_item("b", start_date=date(2024, 6, 3), due_date=date(2024, 6, 10), group_key=1),
        make_item("c", due_date=date(2024, 6, 20), priority="critical", group_key=2),
        make_item("d", start_date=date(2024, 6, 12), group_key=2),
        make_item("e", group_key=2),
        make_item("f"),
    ]
