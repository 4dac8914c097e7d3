"""Thin wrappers over the planner API used by the tabs.

Wall-clock form input is sent as strings together with the UTC offset in
effect on that date, so the service encodes it exactly as this machine would.
"""

from __future__ import annotations

from datetime import date, datetime

from planner_ui.data import api_client
from timegrid.codec import encode_local, parse_instant


def offset_minutes_for(date_str, time_str) -> int:
    instant = parse_instant(encode_local(date_str, time_str))
    return int(instant.utcoffset().total_seconds() // 60)


def current_offset_minutes() -> int:
    return int(datetime.now().astimezone().utcoffset().total_seconds() // 60)


def fetch_month(month: str) -> dict:
    return api_client.request(
        "GET",
        "/v1/calendar/month",
        params={"month": month, "utc_offset_minutes": current_offset_minutes()},
    )


def fetch_week(anchor: date) -> dict:
    return api_client.request(
        "GET",
        "/v1/calendar/week",
        params={"anchor": anchor.isoformat(), "utc_offset_minutes": current_offset_minutes()},
    )


def fetch_task_week(anchor: date, offset: int) -> dict:
    return api_client.request(
        "GET",
        "/v1/tasks/week",
        params={
            "anchor": anchor.isoformat(),
            "offset": int(offset),
            "utc_offset_minutes": current_offset_minutes(),
        },
    )


def fetch_form(item_id: str) -> dict:
    return api_client.request(
        "GET",
        f"/v1/items/{item_id}/form",
        params={"utc_offset_minutes": current_offset_minutes()},
    )


def create_item(form: dict) -> dict:
    payload = dict(form)
    payload["utc_offset_minutes"] = offset_minutes_for(form["start_date"], form["start_time"])
    return api_client.request("POST", "/v1/items", json=payload)


def update_item(item_id: str, form: dict) -> dict:
    payload = dict(form)
    if form.get("start_date") and form.get("start_time"):
        payload["utc_offset_minutes"] = offset_minutes_for(form["start_date"], form["start_time"])
    return api_client.request("PATCH", f"/v1/items/{item_id}", json=payload)


def archive_item(item_id: str) -> dict:
    return api_client.request("POST", f"/v1/items/{item_id}/archive")


def set_complete(item_id: str, complete: bool) -> dict:
    return api_client.request("POST", f"/v1/items/{item_id}/complete", json={"complete": bool(complete)})
