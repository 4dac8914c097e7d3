from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import text as sql_text

from planner_api.db import get_sessionmaker
from timegrid.codec import to_utc_iso
from timegrid.importance import storage_label

logger = logging.getLogger(__name__)

ITEMS_TABLE = "calendar_items"

ITEM_SELECT_COLUMNS = [
    "id",
    "user_id",
    "event_name",
    '"Description"',
    "start_datetime",
    "end_datetime",
    "start_utc",
    "end_utc",
    "importance",
    "is_task",
    "complete",
    "archived",
    "created_at",
    "updated_at",
]

UPDATABLE_COLUMNS = {
    "event_name",
    "Description",
    "start_datetime",
    "end_datetime",
    "importance",
    "is_task",
    "complete",
    "archived",
}
FLAG_COLUMNS = ("is_task", "complete", "archived")


def _new_id() -> str:
    return uuid4().hex


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _decode_importance(value):
    # The column is TEXT; integer codes written by older clients come back as "2".
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.lstrip("-").isdigit():
            return int(stripped)
    return value


def _normalize_item_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    payload["importance"] = _decode_importance(payload.get("importance"))
    for key in FLAG_COLUMNS:
        payload[key] = bool(int(payload.get(key) or 0))
    for key in ("created_at", "updated_at"):
        value = payload.get(key)
        if value is not None and hasattr(value, "isoformat"):
            payload[key] = value.isoformat()
    return payload


def _select_sql(where: str, order: str = "") -> str:
    return f"SELECT {', '.join(ITEM_SELECT_COLUMNS)} FROM {ITEMS_TABLE} WHERE {where} {order}".strip()


async def list_items(
    user_id: str,
    start_utc: str | None = None,
    end_utc: str | None = None,
    is_task: bool | None = None,
    include_archived: bool = False,
) -> list[dict]:
    clauses = ["user_id = :user_id"]
    params: dict = {"user_id": user_id}
    if not include_archived:
        clauses.append("archived = 0")
    if is_task is not None:
        clauses.append("is_task = :is_task")
        params["is_task"] = int(bool(is_task))
    if start_utc:
        clauses.append("end_utc >= :start_utc")
        params["start_utc"] = start_utc
    if end_utc:
        clauses.append("start_utc < :end_utc")
        params["end_utc"] = end_utc
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(_select_sql(" AND ".join(clauses), "ORDER BY start_utc ASC, created_at ASC")),
            params,
        )).mappings().all()
    return [_normalize_item_row(row) for row in rows]


async def get_item(user_id: str, item_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(_select_sql("id = :id AND user_id = :user_id")),
            {"id": item_id, "user_id": user_id},
        )).mappings().fetchone()
    return _normalize_item_row(row) if row else {}


async def create_item(user_id: str, payload: dict) -> dict:
    now = _now_iso()
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "event_name": (payload.get("event_name") or "").strip() or "Untitled",
        "Description": payload.get("Description") or None,
        "start_datetime": payload["start_datetime"],
        "end_datetime": payload["end_datetime"],
        "start_utc": to_utc_iso(payload["start_datetime"]),
        "end_utc": to_utc_iso(payload["end_datetime"]),
        "importance": storage_label(payload.get("importance")),
        "is_task": int(bool(payload.get("is_task", False))),
        "complete": int(bool(payload.get("complete", False))),
        "archived": int(bool(payload.get("archived", False))),
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {ITEMS_TABLE}
                (id, user_id, event_name, "Description", start_datetime, end_datetime,
                 start_utc, end_utc, importance, is_task, complete, archived, created_at, updated_at)
                VALUES
                (:id, :user_id, :event_name, :Description, :start_datetime, :end_datetime,
                 :start_utc, :end_utc, :importance, :is_task, :complete, :archived, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    logger.info("Created calendar item %s for %s", record["id"], user_id)
    return _normalize_item_row(record)


async def update_item(user_id: str, item_id: str, patch: dict) -> dict:
    updates = []
    params = {"id": item_id, "user_id": user_id}
    for key, value in patch.items():
        if key not in UPDATABLE_COLUMNS:
            continue
        updates.append(f'"{key}" = :{key}')
        if key == "importance":
            params[key] = storage_label(value)
        elif key in FLAG_COLUMNS:
            params[key] = int(bool(value))
        elif key == "start_datetime":
            params[key] = value
            params["start_utc"] = to_utc_iso(value)
            updates.append("start_utc = :start_utc")
        elif key == "end_datetime":
            params[key] = value
            params["end_utc"] = to_utc_iso(value)
            updates.append("end_utc = :end_utc")
        else:
            params[key] = value
    if not updates:
        return await get_item(user_id, item_id)
    updates.append("updated_at = :updated_at")
    params["updated_at"] = _now_iso()
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"UPDATE {ITEMS_TABLE} SET {', '.join(updates)} WHERE id = :id AND user_id = :user_id"
            ),
            params,
        )
        await session.commit()
    return await get_item(user_id, item_id)


async def archive_item(user_id: str, item_id: str) -> dict:
    return await update_item(user_id, item_id, {"archived": True})


async def set_complete(user_id: str, item_id: str, complete: bool) -> dict:
    return await update_item(user_id, item_id, {"complete": complete})


async def delete_item(user_id: str, item_id: str) -> bool:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {ITEMS_TABLE} WHERE id = :id AND user_id = :user_id"),
            {"id": item_id, "user_id": user_id},
        )
        deleted = bool(result.rowcount)
        await session.commit()
    if deleted:
        logger.info("Deleted calendar item %s for %s", item_id, user_id)
    return deleted
