import logging
from datetime import date

import streamlit as st

from planner_ui import render
from planner_ui.constants import VIEW_MODES, VIEW_MONTH, VIEW_WEEK
from planner_ui.data import items as items_api
from planner_ui.state import session_slices
from planner_ui.tabs.item_form import default_form, render_item_form
from timegrid.codec import parse_date
from timegrid.grid import format_month_label, format_week_range, shift_month, shift_week, week_of

logger = logging.getLogger(__name__)


def _cursor_label(view_mode, cursor: date) -> str:
    if view_mode == VIEW_MONTH:
        return format_month_label(cursor.year, cursor.month - 1)
    return format_week_range(week_of(cursor))


def week_has_day(view_mode, view, day_iso) -> bool:
    """True when a week payload already covers ``day_iso``; month cells are truncated."""
    if view_mode != VIEW_WEEK:
        return False
    return any(day.get("date") == day_iso for day in view.get("days") or [])


def _move_cursor(state, view_mode, cursor: date, delta: int):
    if view_mode == VIEW_MONTH:
        year, month_index = shift_month(cursor.year, cursor.month - 1, delta)
        state["cursor"] = date(year, month_index + 1, 1).isoformat()
    else:
        state["cursor"] = shift_week(cursor, delta).isoformat()


def _render_toolbar(state, today: date):
    view_mode = state["view_mode"]
    cursor = parse_date(state["cursor"])
    cols = st.columns([0.8, 0.5, 0.5, 2.2, 1.6, 1.4, 1.2])
    with cols[0]:
        if st.button("Today", key="calendar.today"):
            state["cursor"] = today.isoformat()
            state["selected"] = today.isoformat()
            st.rerun()
    with cols[1]:
        if st.button("◀", key="calendar.prev"):
            _move_cursor(state, view_mode, cursor, -1)
            st.rerun()
    with cols[2]:
        if st.button("▶", key="calendar.next"):
            _move_cursor(state, view_mode, cursor, 1)
            st.rerun()
    with cols[3]:
        st.markdown(f"<div class='section-title'>{_cursor_label(view_mode, cursor)}</div>", unsafe_allow_html=True)
    with cols[4]:
        chosen = st.segmented_control(
            "View", VIEW_MODES, default=view_mode, label_visibility="collapsed"
        )
        if chosen and chosen != view_mode:
            state["view_mode"] = chosen
            st.rerun()
    with cols[5]:
        picked = st.date_input(
            "Selected day",
            value=parse_date(state["selected"]),
            label_visibility="collapsed",
        )
        if picked.isoformat() != state["selected"]:
            state["selected"] = picked.isoformat()
            state["cursor"] = picked.isoformat()
            st.rerun()
    with cols[6]:
        if st.button("+ New Event", key="calendar.new", use_container_width=True):
            state["creating"] = True
            state["editing_id"] = None


def _render_new_form(state):
    selected = parse_date(state["selected"])
    action, payload = render_item_form("calendar.create", default_form(selected), submit_label="Create")
    if action == "cancel":
        state["creating"] = False
        st.rerun()
    if action == "submit":
        try:
            items_api.create_item(payload)
        except RuntimeError as exc:
            st.error(f"Could not create event: {exc}")
            return
        state["creating"] = False
        state["selected"] = payload["start_date"]
        st.rerun()


def _render_edit_form(state, item_id):
    try:
        initial = items_api.fetch_form(item_id)
    except RuntimeError as exc:
        st.error(f"Could not load event: {exc}")
        state["editing_id"] = None
        return
    action, payload = render_item_form(f"calendar.edit.{item_id}", initial, submit_label="Save changes")
    if action == "cancel":
        state["editing_id"] = None
        st.rerun()
    if action == "submit":
        try:
            items_api.update_item(item_id, payload)
        except RuntimeError as exc:
            st.error(f"Could not save event: {exc}")
            return
        state["editing_id"] = None
        st.rerun()


def _render_day_list(state, day_items):
    selected = parse_date(state["selected"])
    st.markdown(
        f"<div class='section-title'>{selected.strftime('%A, %B')} {selected.day}</div>",
        unsafe_allow_html=True,
    )
    if not day_items:
        st.caption("Nothing scheduled.")
    for item in day_items:
        item_id = item["id"]
        row = st.columns([6, 1, 1])
        with row[0]:
            st.markdown(render.item_card_html(item), unsafe_allow_html=True)
        with row[1]:
            if st.button("Edit", key=f"calendar.edit_btn.{item_id}"):
                state["editing_id"] = item_id
                state["creating"] = False
                st.rerun()
        with row[2]:
            if st.button("Archive", key=f"calendar.archive_btn.{item_id}"):
                try:
                    items_api.archive_item(item_id)
                except RuntimeError as exc:
                    st.warning(f"Archive failed: {exc}")
                else:
                    st.rerun()
        if state.get("editing_id") == item_id:
            _render_edit_form(state, item_id)


def render_calendar_tab(ctx):
    today = date.today()
    state = session_slices.calendar_state(today)
    st.markdown("<div class='section-title'>Calendar</div>", unsafe_allow_html=True)

    _render_toolbar(state, today)
    if state.get("creating"):
        _render_new_form(state)

    cursor = parse_date(state["cursor"])
    selected_iso = state["selected"]
    try:
        if state["view_mode"] == VIEW_WEEK:
            view = items_api.fetch_week(cursor)
            grid_html = render.week_grid_html(view, today.isoformat())
        else:
            view = items_api.fetch_month(f"{cursor.year:04d}-{cursor.month:02d}")
            grid_html = render.month_grid_html(view, selected_iso, today.isoformat())
        if week_has_day(state["view_mode"], view, selected_iso):
            day_view = view
        else:
            day_view = items_api.fetch_week(parse_date(selected_iso))
    except RuntimeError as exc:
        logger.warning("Calendar view failed: %s", exc)
        st.error(f"Calendar unavailable: {exc}")
        return

    layout = st.columns([2.2, 1], gap="large")
    with layout[0]:
        st.markdown(grid_html, unsafe_allow_html=True)
    with layout[1]:
        _render_day_list(state, render.items_for_date(day_view, selected_iso))
