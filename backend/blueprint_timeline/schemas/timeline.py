"""Pydantic schemas for the timeline layout engine and its API.

Input items arrive with partial dates; output models are render-ready
geometry expressed as percentages of the visible window.
"""

from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class Priority(StrEnum):
    """Task priority. Only used to pick a fallback lead time."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LayoutMode(StrEnum):
    """Which entities are placed on the timeline."""

    PHASES = "phases"
    TASKS = "tasks"


class ScheduledItem(BaseModel):
    """A single schedulable item (task) placed on the timeline."""

    id: str
    title: str = ""
    start_date: date | None = None
    due_date: date | None = None
    priority: Priority | None = None
    group_key: int | None = Field(None, description="Phase number; None or 0 means ungrouped")
    status: str | None = Field(None, description="Task status, only used for the overdue flag")

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def truncate_to_day(cls, value):
        """Discard time of day so every comparison happens on calendar days."""
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value) > 10:
            return datetime.fromisoformat(value).date()
        return value

    @property
    def is_grouped(self) -> bool:
        return bool(self.group_key)


class DateWindow(BaseModel):
    """Visible calendar range, both ends inclusive."""

    start: date
    end: date


class ColumnBucket(BaseModel):
    """Contiguous days of one Sunday-started week inside the window."""

    week_start_date: date
    days: list[date] = Field(default_factory=list)


class BarGeometry(BaseModel):
    """Horizontal placement of one bar as percentages of the window width."""

    item_id: str
    left_percent: float = Field(..., ge=0, le=100)
    width_percent: float = Field(..., ge=0, le=100)
    effective_start: date = Field(..., description="Unclipped start, for tooltips")
    effective_end: date = Field(..., description="Unclipped end, for tooltips")
    is_overdue: bool = False


class Phase(BaseModel):
    """Aggregation of the items sharing a group key. Recomputed on every layout."""

    group_key: int
    name: str
    start_date: date
    end_date: date
    item_count: int = Field(..., description="All member items, dateless ones included")
    dated_item_count: int = Field(..., description="Members that contributed to start/end")


class TimelineLayout(BaseModel):
    """Render-ready output of one layout pass.

    List fields default to empty arrays (never null); phases is only
    populated in phase mode.
    """

    mode: LayoutMode
    window: DateWindow
    total_days: int = Field(..., ge=1)
    columns: list[ColumnBucket] = Field(default_factory=list)
    bars: list[BarGeometry] = Field(default_factory=list)
    today_percent: float | None = None
    dateless: list[ScheduledItem] = Field(default_factory=list)
    phases: list[Phase] | None = None
    label_interval: int = Field(1, ge=1, description="Show a header label every N days")
    label_days: list[date] = Field(default_factory=list)
    out_of_range: list[str] = Field(
        default_factory=list,
        description="Ids with no bar because they fall outside an explicit window",
    )


class DisplayGroup(BaseModel):
    """Items of one group, in display order."""

    group_key: int | None
    name: str
    items: list[ScheduledItem] = Field(default_factory=list)


class LayoutRequest(BaseModel):
    """Body of POST /api/timeline/layout."""

    items: list[ScheduledItem] = Field(default_factory=list)
    mode: LayoutMode = LayoutMode.PHASES
    phase_names: dict[int, str] = Field(default_factory=dict)
    now: datetime | None = Field(None, description="Defaults to the server clock (UTC)")
    window: DateWindow | None = Field(None, description="Fixed report period instead of a derived window")


class GroupingRequest(BaseModel):
    """Body of POST /api/timeline/groups."""

    items: list[ScheduledItem] = Field(default_factory=list)
    group_names: dict[int, str] = Field(default_factory=dict)


class GroupingResponse(BaseModel):
    groups: list[DisplayGroup] = Field(default_factory=list)
