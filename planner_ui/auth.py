from __future__ import annotations

import os
from urllib.parse import urlparse

import streamlit as st

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")

ENV_FALLBACK_KEYS = {
    ("auth", "redirect_uri"): "AUTH_REDIRECT_URI",
    ("auth", "cookie_secret"): "AUTH_COOKIE_SECRET",
    ("auth", "google", "client_id"): "GOOGLE_CLIENT_ID",
    ("auth", "google", "client_secret"): "GOOGLE_CLIENT_SECRET",
    ("auth", "google", "server_metadata_url"): "GOOGLE_SERVER_METADATA_URL",
    ("app", "allowed_users"): "ALLOWED_USERS",
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
}


def load_local_env():
    if not os.path.exists(ENV_PATH):
        return
    with open(ENV_PATH, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    current = st.secrets
    for key in path:
        try:
            if key not in current:
                return default
            current = current[key]
        except Exception:
            # st.secrets raises when no secrets.toml exists at all.
            return default
    return current


def auth_configured():
    return bool(
        get_secret(("auth", "redirect_uri"))
        and get_secret(("auth", "cookie_secret"))
        and get_secret(("auth", "google", "client_id"))
        and get_secret(("auth", "google", "client_secret"))
    )


def allowed_users():
    raw = get_secret(("app", "allowed_users")) or ""
    return {user.strip().lower() for user in str(raw).split(",") if user.strip()}


def enforce_login():
    if not auth_configured():
        st.markdown("<div class='section-title'>Login Setup Required</div>", unsafe_allow_html=True)
        st.markdown("Configure OIDC login in Streamlit secrets before using the planner.")
        st.code(
            "[auth]\n"
            "redirect_uri = \"https://your-planner.streamlit.app/oauth2callback\"\n"
            "cookie_secret = \"LONG_RANDOM_SECRET\"\n\n"
            "[auth.google]\n"
            "client_id = \"YOUR_CLIENT_ID\"\n"
            "client_secret = \"YOUR_CLIENT_SECRET\"\n"
            "server_metadata_url = \"https://accounts.google.com/.well-known/openid-configuration\"\n\n"
            "[app]\n"
            "allowed_users = \"you@example.com\"\n"
            "API_BASE_URL = \"http://localhost:8000\"\n"
            "BACKEND_SESSION_SECRET = \"SHARED_SECRET\"",
            language="toml",
        )
        st.stop()

    redirect_uri = (get_secret(("auth", "redirect_uri")) or "").strip()
    if urlparse(redirect_uri).path != "/oauth2callback":
        st.error(
            "Invalid auth.redirect_uri. For Streamlit st.login it must end with "
            "/oauth2callback (example: https://your-planner.streamlit.app/oauth2callback)."
        )
        st.stop()

    if not st.user.is_logged_in:
        st.markdown("<div class='section-title'>Login Required</div>", unsafe_allow_html=True)
        st.markdown("Sign in to open your planner.")
        if st.button("Login with Google", key="auth.login"):
            st.login("google")
        st.stop()

    allowed = allowed_users()
    user_id = get_current_user_id()
    if allowed and user_id not in allowed:
        st.error("Access denied for this account.")
        if st.button("Logout", key="auth.logout_denied"):
            st.logout()
        st.stop()


def get_current_user_id():
    return str(getattr(st.user, "email", "") or "").strip().lower()
