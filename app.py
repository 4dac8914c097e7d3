import streamlit as st

from planner_ui.auth import enforce_login, get_current_user_id, get_secret, load_local_env
from planner_ui.data import api_client
from planner_ui.header import render_header
from planner_ui.logging_config import configure_logging
from planner_ui.router import render_router
from planner_ui.theme import inject_theme_css

configure_logging()
st.set_page_config(page_title="Planner", layout="wide")

load_local_env()
theme_info = inject_theme_css()
enforce_login()

api_client.configure(get_secret, get_current_user_id)

context = {
    "current_user_id": get_current_user_id(),
    "backend_ok": api_client.is_enabled(),
    "theme": theme_info,
}

render_header(context)
if context["backend_ok"]:
    render_router(context)
st.stop()
