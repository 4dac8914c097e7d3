from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from planner_api.auth import require_user_id
from planner_api import repositories
from planner_api.schemas import TaskWeekResponse
from planner_api.services import calendar_views
from timegrid.codec import local_today
from timegrid.errors import InvalidInput

router = APIRouter()


@router.get("/v1/tasks/week", response_model=TaskWeekResponse)
async def tasks_week(
    offset: int = Query(0),
    anchor: Optional[str] = Query(None, description="YYYY-MM-DD"),
    include_archived: bool = Query(False),
    utc_offset_minutes: Optional[int] = Query(None),
    user_id: str = Depends(require_user_id),
):
    try:
        tz = calendar_views.viewer_tz(utc_offset_minutes)
        anchor_value = anchor or local_today(tz).isoformat()
        start_utc, end_utc = calendar_views.rolling_range(anchor_value, offset, tz)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    records = await repositories.list_items(
        user_id, start_utc, end_utc, is_task=True, include_archived=include_archived
    )
    return jsonable_encoder(calendar_views.build_task_week(records, anchor_value, offset, tz))
