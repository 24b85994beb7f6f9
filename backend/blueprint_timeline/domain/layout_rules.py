"""Tunable constants for fallback-date inference and window padding."""

from dataclasses import dataclass, field, fields

from blueprint_timeline.core.config import Settings
from blueprint_timeline.schemas.timeline import Priority

# Lead time assumed before a due date when no start was recorded
PRIORITY_LEAD_DAYS = {
    Priority.CRITICAL: 2,
    Priority.HIGH: 3,
    Priority.MEDIUM: 4,
    Priority.LOW: 5,
}
DEFAULT_LEAD_DAYS = 5

# Duration assumed after a start date when no due date was recorded
DEFAULT_DURATION_DAYS = 7

# Window padding: 1 week of history, 2 weeks of upcoming work
PADDING_BEFORE_DAYS = 7
PADDING_AFTER_DAYS = 14
EMPTY_SPAN_DAYS = 30


def _default_lead_table() -> dict[str, int]:
    return {str(priority): days for priority, days in PRIORITY_LEAD_DAYS.items()}


@dataclass(frozen=True)
class LayoutRules:
    """Immutable bundle of the heuristics a layout pass applies.

    Every day count must be non-negative; negative padding or spans could
    invert the derived window.
    """

    priority_lead_days: dict[str, int] = field(default_factory=_default_lead_table)
    default_lead_days: int = DEFAULT_LEAD_DAYS
    default_duration_days: int = DEFAULT_DURATION_DAYS
    padding_before_days: int = PADDING_BEFORE_DAYS
    padding_after_days: int = PADDING_AFTER_DAYS
    empty_span_days: int = EMPTY_SPAN_DAYS

    def __post_init__(self):
        negative = [
            f.name for f in fields(self)
            if f.name != "priority_lead_days" and getattr(self, f.name) < 0
        ]
        negative += [
            f"priority_lead_days[{priority}]"
            for priority, days in self.priority_lead_days.items() if days < 0
        ]
        if negative:
            raise ValueError(f"Layout rule values must be non-negative: {', '.join(negative)}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "LayoutRules":
        """Build rules from application settings (``timeline_*`` fields).

        The configured lead-day table is merged over the built-in one, so a
        partial override keeps the remaining priorities.
        """
        return cls(
            priority_lead_days={**_default_lead_table(), **settings.timeline_priority_lead_days},
            default_lead_days=settings.timeline_default_lead_days,
            default_duration_days=settings.timeline_default_duration_days,
            padding_before_days=settings.timeline_padding_before_days,
            padding_after_days=settings.timeline_padding_after_days,
            empty_span_days=settings.timeline_empty_span_days,
        )

    def lead_days_for(self, priority: str | None) -> int:
        if priority is None:
            return self.default_lead_days
        return self.priority_lead_days.get(str(priority), self.default_lead_days)


DEFAULT_RULES = LayoutRules()
