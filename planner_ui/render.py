"""HTML builders for the calendar and to-do views.

Everything here takes API payloads and returns markup strings, so it can be
tested without a running Streamlit session.
"""

from __future__ import annotations

from html import escape
from typing import Any, Dict, List, Optional

from planner_ui.constants import IMPORTANCE_COLORS
from timegrid.aggregation import count_label, overflow_label
from timegrid.positioner import HOURS_PER_DAY


def importance_style(color_key: Optional[str]) -> str:
    colors = IMPORTANCE_COLORS.get(color_key or "gray", IMPORTANCE_COLORS["gray"])
    return f"background:{colors['bg']};border-left:3px solid {colors['border']};"


def importance_badge_html(item: Dict[str, Any]) -> str:
    label = item.get("importance_label") or ""
    if not label:
        return ""
    colors = IMPORTANCE_COLORS.get(item.get("color_key") or "gray", IMPORTANCE_COLORS["gray"])
    return (
        f"<span class='importance-badge' style='border-color:{colors['border']};color:{colors['border']};'>"
        f"{escape(label)}</span>"
    )


def time_range_label(item: Dict[str, Any]) -> str:
    start = item.get("start_time") or ""
    end = item.get("end_time") or ""
    if item.get("start_date") and item.get("end_date") and item["start_date"] != item["end_date"]:
        return f"{start} → {item['end_date']} {end}"
    return f"{start} - {end}"


def item_chip_html(item: Dict[str, Any]) -> str:
    classes = "cal-chip"
    if item.get("complete"):
        classes += " is-complete"
    return (
        f"<div class='{classes}' style='{importance_style(item.get('color_key'))}' "
        f"title='{escape(item.get('title') or '', quote=True)}'>"
        f"<span class='cal-chip-time'>{escape(item.get('start_time') or '')}</span> "
        f"{escape(item.get('title') or '')}"
        "</div>"
    )


def month_cell_html(cell: Dict[str, Any], selected_iso: str = "", today_iso: str = "") -> str:
    classes = ["cal-cell"]
    if not cell.get("in_month"):
        classes.append("is-outside")
    if cell.get("date") == today_iso:
        classes.append("is-today")
    if cell.get("date") == selected_iso:
        classes.append("is-selected")
    total = int(cell.get("total") or 0)
    badge = f"<span class='cal-count'>{count_label(total)}</span>" if total else ""
    chips = "".join(item_chip_html(item) for item in cell.get("items") or [])
    more = overflow_label(int(cell.get("overflow") or 0))
    more_html = f"<div class='cal-more'>{escape(more)}</div>" if more else ""
    return (
        f"<div class='{' '.join(classes)}' data-date='{escape(cell.get('date') or '')}'>"
        f"<div class='cal-cell-head'><span class='cal-day'>{cell.get('day', '')}</span>{badge}</div>"
        f"{chips}{more_html}"
        "</div>"
    )


def month_grid_html(view: Dict[str, Any], selected_iso: str = "", today_iso: str = "") -> str:
    head = "".join(
        f"<div class='cal-weekday'>{escape(label)}</div>" for label in view.get("weekday_labels") or []
    )
    body = "".join(
        month_cell_html(cell, selected_iso, today_iso)
        for week in view.get("weeks") or []
        for cell in week
    )
    return f"<div class='cal-month'>{head}{body}</div>"


def _week_item_html(item: Dict[str, Any]) -> str:
    classes = ["week-item"]
    if item.get("starts_earlier"):
        classes.append("starts-earlier")
    if item.get("continues"):
        classes.append("continues")
    if item.get("complete"):
        classes.append("is-complete")
    style = (
        f"top:{item.get('top_px', 0)}px;height:{item.get('height_px', 0)}px;"
        + importance_style(item.get("color_key"))
    )
    return (
        f"<div class='{' '.join(classes)}' style='{style}'>"
        f"<div class='week-item-title'>{escape(item.get('title') or '')}</div>"
        f"<div class='week-item-time'>{escape(time_range_label(item))}</div>"
        "</div>"
    )


def week_grid_html(view: Dict[str, Any], today_iso: str = "") -> str:
    row_height = int(view.get("hour_row_height_px") or 64)
    column_height = row_height * HOURS_PER_DAY
    days = view.get("days") or []
    labels = view.get("hour_labels") or []

    head = "<div class='week-gutter-head'></div>" + "".join(
        f"<div class='week-day-head{' is-today' if day.get('date') == today_iso else ''}'>"
        f"{escape(day.get('weekday') or '')} {day.get('day', '')}</div>"
        for day in days
    )
    gutter = "".join(
        f"<div class='week-hour' style='height:{row_height}px'>{escape(label)}</div>" for label in labels
    )
    columns = "".join(
        f"<div class='week-column' style='height:{column_height}px;"
        f"background-size:100% {row_height}px;'>"
        + "".join(_week_item_html(item) for item in day.get("items") or [])
        + "</div>"
        for day in days
    )
    return (
        "<div class='week-grid'>"
        f"<div class='week-head'>{head}</div>"
        f"<div class='week-body'><div class='week-gutter'>{gutter}</div>{columns}</div>"
        "</div>"
    )


def item_card_html(item: Dict[str, Any]) -> str:
    classes = "item-card"
    if item.get("complete"):
        classes += " is-complete"
    description = item.get("description") or ""
    description_html = f"<div class='item-card-desc'>{escape(description)}</div>" if description else ""
    return (
        f"<div class='{classes}' style='{importance_style(item.get('color_key'))}'>"
        f"<div class='item-card-title'>{escape(item.get('title') or '')} {importance_badge_html(item)}</div>"
        f"<div class='small-label'>{escape(time_range_label(item))}</div>"
        f"{description_html}"
        "</div>"
    )


def items_for_date(view: Dict[str, Any], day_iso: str) -> List[Dict[str, Any]]:
    """All items touching ``day_iso`` from a week or task-week payload."""
    for day in view.get("days") or []:
        if day.get("date") == day_iso:
            return list(day.get("items") or [])
    return []

