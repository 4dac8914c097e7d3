from __future__ import annotations

from datetime import date, datetime, time, timedelta

import streamlit as st

from planner_ui.constants import DEFAULT_ITEM_MINUTES, IMPORTANCE_OPTION_LABELS, IMPORTANCE_OPTIONS
from timegrid.codec import parse_date, parse_time


def default_form(day: date, is_task: bool = False) -> dict:
    start = datetime.combine(day, time(9, 0))
    end = start + timedelta(minutes=DEFAULT_ITEM_MINUTES)
    return {
        "title": "",
        "description": "",
        "start_date": start.date().isoformat(),
        "start_time": start.strftime("%H:%M"),
        "end_date": end.date().isoformat(),
        "end_time": end.strftime("%H:%M"),
        "importance": "NONE",
        "is_task": is_task,
    }


def build_form_payload(title, description, start_date, start_time, end_date, end_time, importance, is_task):
    """Validate raw widget values and shape them for the API; returns (payload, error)."""
    clean_title = (title or "").strip()
    if not clean_title:
        return None, "Title is required."
    start = datetime.combine(parse_date(start_date), parse_time(start_time))
    end = datetime.combine(parse_date(end_date), parse_time(end_time))
    if end < start:
        return None, "End must not be before start."
    payload = {
        "title": clean_title,
        "description": (description or "").strip() or None,
        "start_date": start.date().isoformat(),
        "start_time": start.strftime("%H:%M"),
        "end_date": end.date().isoformat(),
        "end_time": end.strftime("%H:%M"),
        "importance": importance if importance in IMPORTANCE_OPTIONS else "NONE",
        "is_task": bool(is_task),
    }
    return payload, None


def render_item_form(form_key: str, initial: dict, submit_label: str = "Save"):
    """Draw the create/edit form. Returns ("submit", payload), ("cancel", None) or (None, None)."""
    importance = initial.get("importance") or "NONE"
    with st.form(key=form_key, clear_on_submit=False):
        title = st.text_input("Title", value=initial.get("title") or "", key=f"{form_key}.title")
        description = st.text_area(
            "Description", value=initial.get("description") or "", key=f"{form_key}.description"
        )
        cols = st.columns(4)
        with cols[0]:
            start_date = st.date_input(
                "Start date", value=parse_date(initial["start_date"]), key=f"{form_key}.start_date"
            )
        with cols[1]:
            start_time = st.time_input(
                "Start time", value=parse_time(initial["start_time"]), key=f"{form_key}.start_time"
            )
        with cols[2]:
            end_date = st.date_input("End date", value=parse_date(initial["end_date"]), key=f"{form_key}.end_date")
        with cols[3]:
            end_time = st.time_input("End time", value=parse_time(initial["end_time"]), key=f"{form_key}.end_time")
        meta = st.columns([2, 1])
        with meta[0]:
            importance = st.selectbox(
                "Importance",
                IMPORTANCE_OPTIONS,
                index=IMPORTANCE_OPTIONS.index(importance) if importance in IMPORTANCE_OPTIONS else 0,
                format_func=lambda value: IMPORTANCE_OPTION_LABELS.get(value, value),
                key=f"{form_key}.importance",
            )
        with meta[1]:
            is_task = st.checkbox("Task", value=bool(initial.get("is_task")), key=f"{form_key}.is_task")
        actions = st.columns(2)
        with actions[0]:
            submitted = st.form_submit_button(submit_label, use_container_width=True)
        with actions[1]:
            cancelled = st.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        return "cancel", None
    if not submitted:
        return None, None
    payload, error = build_form_payload(
        title, description, start_date, start_time, end_date, end_time, importance, is_task
    )
    if error:
        st.warning(error)
        return None, None
    return "submit", payload
