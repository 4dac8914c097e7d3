import logging
from datetime import date

import streamlit as st

from planner_ui import render
from planner_ui.data import items as items_api
from planner_ui.metrics import completion_percent, task_week_frame
from planner_ui.state import session_slices
from planner_ui.tabs.item_form import default_form, render_item_form

logger = logging.getLogger(__name__)


def _render_navigation(state, label):
    cols = st.columns([0.6, 0.6, 0.9, 3, 1.3])
    with cols[0]:
        if st.button("◀", key="todo.prev"):
            state["offset"] = int(state["offset"]) - 1
            st.rerun()
    with cols[1]:
        if st.button("▶", key="todo.next"):
            state["offset"] = int(state["offset"]) + 1
            st.rerun()
    with cols[2]:
        if st.button("This week", key="todo.reset", disabled=int(state["offset"]) == 0):
            state["offset"] = 0
            st.rerun()
    with cols[3]:
        st.markdown(f"<div class='section-title'>{label}</div>", unsafe_allow_html=True)
    with cols[4]:
        if st.button("+ New Task", key="todo.new", use_container_width=True):
            state["creating"] = True
            state["editing_id"] = None


def _render_create(state, today):
    action, payload = render_item_form("todo.create", default_form(today, is_task=True), submit_label="Create task")
    if action == "cancel":
        state["creating"] = False
        st.rerun()
    if action == "submit":
        try:
            items_api.create_item(payload)
        except RuntimeError as exc:
            st.error(f"Could not create task: {exc}")
            return
        state["creating"] = False
        st.rerun()


def _render_edit(state, item_id, key):
    try:
        initial = items_api.fetch_form(item_id)
    except RuntimeError as exc:
        st.error(f"Could not load task: {exc}")
        state["editing_id"] = None
        return
    action, payload = render_item_form(f"todo.edit.{key}", initial, submit_label="Save changes")
    if action == "cancel":
        state["editing_id"] = None
        st.rerun()
    if action == "submit":
        try:
            items_api.update_item(item_id, payload)
        except RuntimeError as exc:
            st.error(f"Could not save task: {exc}")
            return
        state["editing_id"] = None
        st.rerun()


def _render_task(state, day_iso, item):
    item_id = item["id"]
    key = f"{day_iso}.{item_id}"
    row = st.columns([0.5, 6, 0.9, 1])
    with row[0]:
        checked = st.checkbox(
            "Done",
            value=bool(item.get("complete")),
            key=f"todo.done.{key}",
            label_visibility="collapsed",
        )
        if checked != bool(item.get("complete")):
            try:
                items_api.set_complete(item_id, checked)
            except RuntimeError as exc:
                st.warning(f"Update failed: {exc}")
            else:
                st.rerun()
    with row[1]:
        st.markdown(render.item_card_html(item), unsafe_allow_html=True)
    with row[2]:
        if st.button("Edit", key=f"todo.edit_btn.{key}"):
            state["editing_id"] = key
            state["creating"] = False
            st.rerun()
    with row[3]:
        if st.button("Archive", key=f"todo.archive_btn.{key}"):
            state["confirm_archive"] = key
            st.rerun()

    if state.get("confirm_archive") == key:
        confirm = st.columns([4, 1, 1])
        with confirm[0]:
            st.caption(f"Archive “{item.get('title')}”?")
        with confirm[1]:
            if st.button("Yes", key=f"todo.archive_yes.{key}"):
                try:
                    items_api.archive_item(item_id)
                except RuntimeError as exc:
                    st.warning(f"Archive failed: {exc}")
                state["confirm_archive"] = None
                st.rerun()
        with confirm[2]:
            if st.button("No", key=f"todo.archive_no.{key}"):
                state["confirm_archive"] = None
                st.rerun()

    if state.get("editing_id") == key:
        _render_edit(state, item_id, key)


def render_todo_tab(ctx):
    today = date.today()
    state = session_slices.todo_state()
    st.markdown("<div class='section-title'>To-Do</div>", unsafe_allow_html=True)

    try:
        view = items_api.fetch_task_week(today, int(state["offset"]))
    except RuntimeError as exc:
        logger.warning("Task week failed: %s", exc)
        st.error(f"Tasks unavailable: {exc}")
        return

    _render_navigation(state, view.get("label", ""))
    if state.get("creating"):
        _render_create(state, today)

    frame = task_week_frame(view)
    st.caption(f"{completion_percent(frame)}% complete this week")

    for day in view.get("days") or []:
        st.markdown(
            f"<div class='small-label'>{day.get('weekday_name')} · {day.get('month_day')}</div>",
            unsafe_allow_html=True,
        )
        tasks = day.get("items") or []
        if not tasks:
            st.caption("No tasks.")
        for item in tasks:
            _render_task(state, day["date"], item)

    with st.expander("Week summary"):
        st.dataframe(frame, hide_index=True, use_container_width=True)
