from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from planner_api.auth import require_user_id
from planner_api import repositories
from planner_api.schemas import MonthViewResponse, WeekViewResponse
from planner_api.services import calendar_views
from planner_api.settings import get_settings
from timegrid.codec import local_today
from timegrid.errors import InvalidInput

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/calendar/month", response_model=MonthViewResponse)
async def calendar_month(
    month: Optional[str] = Query(None, description="YYYY-MM"),
    utc_offset_minutes: Optional[int] = Query(None),
    user_id: str = Depends(require_user_id),
):
    settings = get_settings()
    try:
        tz = calendar_views.viewer_tz(utc_offset_minutes)
        if month:
            year, month_index = calendar_views.parse_month(month)
        else:
            today = local_today(tz)
            year, month_index = today.year, today.month - 1
        start_utc, end_utc = calendar_views.month_range(year, month_index, tz)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    records = await repositories.list_items(user_id, start_utc, end_utc)
    view = calendar_views.build_month_view(
        records, year, month_index, tz, settings.month_cell_max_visible
    )
    return jsonable_encoder(view)


@router.get("/v1/calendar/week", response_model=WeekViewResponse)
async def calendar_week(
    anchor: Optional[str] = Query(None, description="YYYY-MM-DD"),
    utc_offset_minutes: Optional[int] = Query(None),
    user_id: str = Depends(require_user_id),
):
    settings = get_settings()
    try:
        tz = calendar_views.viewer_tz(utc_offset_minutes)
        anchor_value = anchor or local_today(tz).isoformat()
        start_utc, end_utc = calendar_views.week_range(anchor_value, tz)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    records = await repositories.list_items(user_id, start_utc, end_utc)
    view = calendar_views.build_week_view(
        records,
        anchor_value,
        tz,
        settings.hour_row_height_px,
        settings.min_item_height_px,
        settings.span_policy,
    )
    return jsonable_encoder(view)
