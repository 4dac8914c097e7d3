import streamlit as st

from planner_ui.constants import TAB_CALENDAR, TAB_OPTIONS
from planner_ui.tabs.calendar_tab import render_calendar_tab
from planner_ui.tabs.todo_tab import render_todo_tab


def render_router(ctx):
    active = st.session_state.get("ui.active_tab", TAB_OPTIONS[0])
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=active,
    )

    if active == TAB_CALENDAR or not active:
        return _render_calendar(ctx)

    return _render_todo(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)


@st.fragment
def _render_todo(ctx):
    render_todo_tab(ctx)
