from datetime import date
from html import escape

import streamlit as st

from planner_ui.theme import toggle_theme


def render_header(ctx):
    user_id = ctx.get("current_user_id") or ""
    backend_ok = ctx.get("backend_ok", True)
    theme_info = ctx.get("theme") or {}
    today = date.today()

    cols = st.columns([6, 2, 0.6, 1])
    with cols[0]:
        st.markdown("<div class='page-title'>Planner</div>", unsafe_allow_html=True)
        st.markdown(
            f"<div class='small-label'>{today.strftime('%A, %B')} {today.day}</div>",
            unsafe_allow_html=True,
        )
    with cols[1]:
        st.markdown(f"<div class='small-label'>{escape(user_id)}</div>", unsafe_allow_html=True)
    with cols[2]:
        if st.button(theme_info.get("toggle_icon", "🌙"), key="header.theme", help=theme_info.get("toggle_help")):
            toggle_theme()
            st.rerun()
    with cols[3]:
        if st.button("Sign out", key="header.logout"):
            st.logout()

    if not backend_ok:
        st.warning("Planner API is not configured. Set API_BASE_URL and BACKEND_SESSION_SECRET.")
