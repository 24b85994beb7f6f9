from datetime import date


class TimelineError(Exception):
    """Base exception for the timeline application."""

    pass


class DuplicateItemIdError(TimelineError):
    """Raised when an input set repeats an item id."""

    def __init__(self, item_ids: list[str]):
        self.item_ids = item_ids
        super().__init__(f"Duplicate item ids in input: {', '.join(item_ids)}")


class InvalidWindowError(TimelineError):
    """Raised when an explicit window ends before it starts."""

    def __init__(self, start: date, end: date):
        self.start = start
        self.end = end
        super().__init__(f"Window start {start.isoformat()} is after end {end.isoformat()}")
