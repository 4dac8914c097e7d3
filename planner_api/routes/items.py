from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from planner_api.auth import require_user_id
from planner_api.schemas import CompletePayload, ItemCreate, ItemFormResponse, ItemPatch, ItemRecord, ItemsResponse
from planner_api.services.calendar_views import viewer_tz, window_utc
from planner_api import repositories
from timegrid.codec import decode_local, encode_local, parse_date, parse_instant
from timegrid.errors import InvalidInput
from timegrid.importance import storage_label

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_order(start_datetime: str, end_datetime: str) -> None:
    if parse_instant(start_datetime) > parse_instant(end_datetime):
        raise InvalidInput("End must not be before start")


def _resolve_bound(
    date_value: Optional[str],
    time_value: Optional[str],
    current: Optional[str],
    tz,
) -> Optional[str]:
    """Encode a form bound, filling the missing half from the stored value."""
    if date_value is None and time_value is None:
        return None
    if date_value is None or time_value is None:
        current_date, current_time = decode_local(current, tz)
        date_value = date_value if date_value is not None else current_date
        time_value = time_value if time_value is not None else current_time
    return encode_local(date_value, time_value, tz)


async def _require_item(user_id: str, item_id: str) -> dict:
    record = await repositories.get_item(user_id, item_id)
    if not record:
        raise HTTPException(status_code=404, detail="Item not found")
    return record


@router.get("/v1/items", response_model=ItemsResponse)
async def list_items(
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    is_task: Optional[bool] = Query(None),
    include_archived: bool = Query(False),
    utc_offset_minutes: Optional[int] = Query(None),
    user_id: str = Depends(require_user_id),
):
    try:
        tz = viewer_tz(utc_offset_minutes)
        start_utc = end_utc = None
        if start:
            start_utc = window_utc(parse_date(start), parse_date(start), tz)[0]
        if end:
            end_utc = window_utc(parse_date(end), parse_date(end), tz)[1]
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    items = await repositories.list_items(user_id, start_utc, end_utc, is_task, include_archived)
    return {"items": jsonable_encoder(items)}


@router.get("/v1/items/{item_id}", response_model=ItemRecord)
async def get_item(item_id: str, user_id: str = Depends(require_user_id)):
    return await _require_item(user_id, item_id)


@router.get("/v1/items/{item_id}/form", response_model=ItemFormResponse)
async def get_item_form(
    item_id: str,
    utc_offset_minutes: Optional[int] = Query(None),
    user_id: str = Depends(require_user_id),
):
    record = await _require_item(user_id, item_id)
    try:
        tz = viewer_tz(utc_offset_minutes)
        start_date, start_time = decode_local(record["start_datetime"], tz)
        end_date, end_time = decode_local(record["end_datetime"], tz)
    except InvalidInput as exc:
        logger.warning("Stored item %s has unreadable timestamps: %s", item_id, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "id": record["id"],
        "title": record.get("event_name") or "",
        "description": record.get("Description") or "",
        "start_date": start_date,
        "start_time": start_time,
        "end_date": end_date,
        "end_time": end_time,
        "importance": storage_label(record.get("importance")),
        "is_task": bool(record.get("is_task")),
    }


@router.post("/v1/items", response_model=ItemRecord)
async def create_item(payload: ItemCreate, user_id: str = Depends(require_user_id)):
    try:
        tz = viewer_tz(payload.utc_offset_minutes)
        start_datetime = encode_local(payload.start_date, payload.start_time, tz)
        end_datetime = encode_local(payload.end_date, payload.end_time, tz)
        _check_order(start_datetime, end_datetime)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    try:
        record = await repositories.create_item(
            user_id,
            {
                "event_name": payload.title,
                "Description": payload.description,
                "start_datetime": start_datetime,
                "end_datetime": end_datetime,
                "importance": payload.importance,
                "is_task": payload.is_task,
                "complete": payload.complete,
            },
        )
        return jsonable_encoder(record)
    except Exception as exc:
        logger.exception("Failed to create item: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")


@router.patch("/v1/items/{item_id}", response_model=ItemRecord)
async def patch_item(item_id: str, payload: ItemPatch, user_id: str = Depends(require_user_id)):
    current = await _require_item(user_id, item_id)
    data = payload.model_dump(exclude_unset=True)
    patch: dict = {}
    if "title" in data:
        title = (data["title"] or "").strip()
        if not title:
            raise HTTPException(status_code=400, detail="Title is required")
        patch["event_name"] = title
    if "description" in data:
        patch["Description"] = data["description"] or None
    for key in ("importance", "is_task", "complete", "archived"):
        if key in data and data[key] is not None:
            patch[key] = data[key]
    try:
        tz = viewer_tz(data.get("utc_offset_minutes"))
        start_datetime = _resolve_bound(
            data.get("start_date"), data.get("start_time"), current["start_datetime"], tz
        )
        end_datetime = _resolve_bound(
            data.get("end_date"), data.get("end_time"), current["end_datetime"], tz
        )
        if start_datetime:
            patch["start_datetime"] = start_datetime
        if end_datetime:
            patch["end_datetime"] = end_datetime
        if start_datetime or end_datetime:
            _check_order(
                start_datetime or current["start_datetime"],
                end_datetime or current["end_datetime"],
            )
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    try:
        record = await repositories.update_item(user_id, item_id, patch)
        return jsonable_encoder(record)
    except Exception as exc:
        logger.exception("Failed to update item %s: %s", item_id, exc)
        raise HTTPException(status_code=500, detail="Internal error")


@router.post("/v1/items/{item_id}/archive", response_model=ItemRecord)
async def archive_item(item_id: str, user_id: str = Depends(require_user_id)):
    await _require_item(user_id, item_id)
    record = await repositories.archive_item(user_id, item_id)
    logger.info("Archived item %s for %s", item_id, user_id)
    return jsonable_encoder(record)


@router.post("/v1/items/{item_id}/complete", response_model=ItemRecord)
async def complete_item(item_id: str, payload: CompletePayload, user_id: str = Depends(require_user_id)):
    await _require_item(user_id, item_id)
    record = await repositories.set_complete(user_id, item_id, payload.complete)
    return jsonable_encoder(record)


@router.delete("/v1/items/{item_id}")
async def delete_item(item_id: str, user_id: str = Depends(require_user_id)):
    deleted = await repositories.delete_item(user_id, item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Item not found")
    return {"ok": True}
