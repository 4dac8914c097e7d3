from datetime import date

import streamlit as st

PREFIX = "slice"

CALENDAR = "calendar"
TODO = "todo"


def get_slice(slice_name, defaults=None):
    key = f"{PREFIX}.{slice_name}"
    if key not in st.session_state:
        st.session_state[key] = {}
    payload = st.session_state[key]
    for name, value in (defaults or {}).items():
        payload.setdefault(name, value)
    return payload


def calendar_state(today: date) -> dict:
    """View cursor for the calendar tab: mode, focused month/week and selected day."""
    return get_slice(
        CALENDAR,
        {
            "view_mode": "Month",
            "cursor": today.isoformat(),
            "selected": today.isoformat(),
            "editing_id": None,
            "creating": False,
        },
    )


def todo_state() -> dict:
    return get_slice(TODO, {"offset": 0, "editing_id": None, "creating": False, "confirm_archive": None})
