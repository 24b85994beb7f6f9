"""Timeline layout API endpoints.

POST /api/timeline/layout - Gantt geometry for phases or tasks
POST /api/timeline/groups - Items split into display groups
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException

from blueprint_timeline.core.config import Settings, get_settings
from blueprint_timeline.core.exceptions import TimelineError
from blueprint_timeline.domain.display_grouping import group_for_display
from blueprint_timeline.domain.layout_rules import LayoutRules
from blueprint_timeline.schemas.timeline import (
    GroupingRequest,
    GroupingResponse,
    LayoutRequest,
    TimelineLayout,
)
from blueprint_timeline.services.timeline_service import (
    TimelineLayoutEngine,
    ensure_unique_ids,
    ensure_valid_window,
)

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.post("/layout", response_model=TimelineLayout)
async def compute_layout(
    request: LayoutRequest,
    settings: Settings = Depends(get_settings),
) -> TimelineLayout:
    """Compute timeline geometry for the submitted items.

    The clock is read once here when the caller does not pass ``now``;
    everything below is a pure function of the request.

    Returns 422 for duplicate item ids or an inverted explicit window.
    """
    try:
        ensure_unique_ids(request.items)
        ensure_valid_window(request.window)
    except TimelineError as e:
        logger.warning("timeline_items_rejected", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=422, detail=str(e))

    now = request.now or datetime.now(timezone.utc)
    engine = TimelineLayoutEngine.from_settings(settings)
    return engine.layout(
        request.items,
        request.mode,
        now,
        phase_names=request.phase_names,
        window=request.window,
    )


@router.post("/groups", response_model=GroupingResponse)
async def group_items(
    request: GroupingRequest,
    settings: Settings = Depends(get_settings),
) -> GroupingResponse:
    """Group items for list rendering: unassigned first, then by name."""
    try:
        ensure_unique_ids(request.items)
    except TimelineError as e:
        logger.warning("timeline_items_rejected", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=422, detail=str(e))

    groups = group_for_display(
        request.items,
        request.group_names,
        LayoutRules.from_settings(settings),
    )
    return GroupingResponse(groups=groups)
