import streamlit as st

THEME_PRESETS = {
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "bg_panel": "#2a2335",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "accent": "#8e79af",
        "today_border": "#d9c979",
        "today_bg": "rgba(217, 201, 121, 0.12)",
        "selected_border": "#8e79af",
        "outside_text": "#6f6580",
        "grid_line": "rgba(255,255,255,0.08)",
    },
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "bg_panel": "#f6efe3",
        "border": "#c4b59f",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "accent": "#8f7aa9",
        "today_border": "#9b845f",
        "today_bg": "rgba(203, 184, 154, 0.32)",
        "selected_border": "#8f7aa9",
        "outside_text": "#a99e90",
        "grid_line": "rgba(0,0,0,0.08)",
    },
}


def ensure_theme_state():
    if st.session_state.get("ui_theme") not in THEME_PRESETS:
        st.session_state["ui_theme"] = "dark"
    return st.session_state["ui_theme"]


def get_active_theme():
    name = ensure_theme_state()
    return name, THEME_PRESETS[name]


def toggle_theme():
    name = ensure_theme_state()
    st.session_state["ui_theme"] = "light" if name == "dark" else "dark"


def inject_theme_css() -> dict:
    active_name, theme = get_active_theme()
    vars_css = "\n".join(
        f"    --{key.replace('_', '-')}: {value};" for key, value in theme.items()
    )

    st.markdown(
        "<style>\n:root {\n"
        + vars_css
        + "\n}\n"
        + """
html, body, [class*="css"] {
    font-family: 'IBM Plex Sans', sans-serif;
    color: var(--text-main);
}

.stApp {
    background: radial-gradient(1400px 900px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 58%);
    color: var(--text-main);
}

.page-title {
    font-family: 'Crimson Text', serif;
    font-size: 28px;
    font-weight: 600;
}

.section-title {
    font-size: 14px;
    font-weight: 600;
    margin: 0 0 8px 0;
}

.small-label {
    color: var(--text-soft);
    font-size: 12px;
    letter-spacing: 0.2px;
}

.cal-month {
    display: grid;
    grid-template-columns: repeat(7, minmax(0, 1fr));
    gap: 4px;
}

.cal-weekday {
    color: var(--text-soft);
    font-size: 12px;
    text-align: center;
    padding: 4px 0;
}

.cal-cell {
    min-height: 108px;
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 10px;
    padding: 6px;
    overflow: hidden;
}

.cal-cell.is-outside {
    color: var(--outside-text);
    opacity: 0.6;
}

.cal-cell.is-today {
    border-color: var(--today-border);
    background: var(--today-bg);
}

.cal-cell.is-selected {
    box-shadow: inset 0 0 0 2px var(--selected-border);
}

.cal-cell-head {
    display: flex;
    justify-content: space-between;
    align-items: center;
    font-size: 12px;
    margin-bottom: 4px;
}

.cal-count, .cal-more, .cal-chip-time {
    color: var(--text-soft);
    font-size: 11px;
}

.cal-chip {
    font-size: 11px;
    border-radius: 4px;
    padding: 1px 4px;
    margin-bottom: 2px;
    white-space: nowrap;
    overflow: hidden;
    text-overflow: ellipsis;
}

.is-complete {
    text-decoration: line-through;
    opacity: 0.6;
}

.week-grid {
    border: 1px solid var(--border);
    border-radius: 10px;
    max-height: 720px;
    overflow-y: auto;
}

.week-head, .week-body {
    display: grid;
    grid-template-columns: 64px repeat(7, minmax(0, 1fr));
}

.week-head {
    position: sticky;
    top: 0;
    z-index: 2;
    background: var(--bg-panel);
}

.week-day-head {
    text-align: center;
    font-size: 12px;
    padding: 6px 0;
}

.week-day-head.is-today {
    color: var(--today-border);
    font-weight: 600;
}

.week-hour {
    color: var(--text-soft);
    font-size: 11px;
    text-align: right;
    padding-right: 6px;
    box-sizing: border-box;
}

.week-column {
    position: relative;
    border-left: 1px solid var(--grid-line);
    background-image: linear-gradient(to bottom, var(--grid-line) 1px, transparent 1px);
}

.week-item {
    position: absolute;
    left: 2px;
    right: 2px;
    border-radius: 6px;
    padding: 2px 4px;
    font-size: 11px;
    overflow: hidden;
    box-sizing: border-box;
}

.week-item.starts-earlier {
    border-top-left-radius: 0;
    border-top-right-radius: 0;
}

.week-item.continues {
    border-bottom-left-radius: 0;
    border-bottom-right-radius: 0;
}

.week-item-title {
    font-weight: 600;
}

.item-card {
    background: var(--bg-card);
    border-radius: 10px;
    padding: 8px 10px;
    margin-bottom: 6px;
}

.item-card-title {
    font-weight: 600;
}

.item-card-desc {
    font-size: 12px;
    margin-top: 4px;
}

.importance-badge {
    border: 1px solid;
    border-radius: 999px;
    padding: 0 6px;
    font-size: 10px;
    margin-left: 6px;
}
</style>
""",
        unsafe_allow_html=True,
    )
    return {
        "theme": active_name,
        "toggle_icon": "☀️" if active_name == "dark" else "🌙",
        "toggle_help": "Switch to light mode" if active_name == "dark" else "Switch to dark mode",
    }
