from __future__ import annotations

import logging
import re
from datetime import date, tzinfo
from typing import Any, Dict, List, Sequence

from timegrid.aggregation import group_by_start_day, summarize_month
from timegrid.codec import fixed_offset, parse_date, to_utc_iso
from timegrid.errors import InvalidInput
from timegrid.grid import (
    WEEKDAY_LABELS,
    build_month_matrix,
    format_month_label,
    format_week_range,
    month_window,
    rolling_days,
    week_of,
)
from timegrid.items import CalendarItem, normalize_records, sort_by_start
from timegrid.positioner import SpanPolicy, hour_labels, position_day
from timegrid.span import day_bounds

logger = logging.getLogger(__name__)

MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def viewer_tz(utc_offset_minutes) -> tzinfo | None:
    if utc_offset_minutes is None:
        return None
    return fixed_offset(utc_offset_minutes)


def parse_month(value: str) -> tuple[int, int]:
    match = MONTH_PATTERN.match(str(value or "").strip())
    if not match:
        raise InvalidInput(f"Invalid month {value!r}, expected YYYY-MM", value)
    month_number = int(match.group(2))
    if not 1 <= month_number <= 12:
        raise InvalidInput(f"Invalid month {value!r}", value)
    return int(match.group(1)), month_number - 1


def window_utc(first: date, last: date, tz: tzinfo | None = None) -> tuple[str, str]:
    """UTC bounds covering every day from first through last inclusive."""
    return to_utc_iso(day_bounds(first, tz)[0]), to_utc_iso(day_bounds(last, tz)[1])


def month_range(year: int, month_index: int, tz: tzinfo | None = None) -> tuple[str, str]:
    first, last = month_window(year, month_index)
    return window_utc(first, last, tz)


def week_range(anchor, tz: tzinfo | None = None) -> tuple[str, str]:
    days = week_of(anchor)
    return window_utc(days[0], days[-1], tz)


def rolling_range(anchor, offset: int, tz: tzinfo | None = None) -> tuple[str, str]:
    days = rolling_days(anchor, offset)
    return window_utc(days[0], days[-1], tz)


def _payloads(items: Sequence[CalendarItem], tz: tzinfo | None) -> List[Dict[str, Any]]:
    return [item.to_payload(tz) for item in items]


def build_month_view(
    records: Sequence[dict],
    year: int,
    month_index: int,
    tz: tzinfo | None = None,
    max_visible: int = 3,
) -> Dict[str, Any]:
    items = sort_by_start(normalize_records(records))
    weeks = summarize_month(build_month_matrix(year, month_index), items, max_visible, tz)
    for week in weeks:
        for cell in week:
            cell["items"] = _payloads(cell["items"], tz)
    return {
        "month": f"{year:04d}-{month_index + 1:02d}",
        "label": format_month_label(year, month_index),
        "weekday_labels": list(WEEKDAY_LABELS),
        "weeks": weeks,
        "total_items": len(items),
    }


def build_week_view(
    records: Sequence[dict],
    anchor,
    tz: tzinfo | None = None,
    hour_row_height_px: int = 64,
    min_height_px: int = 20,
    policy: SpanPolicy = SpanPolicy.OVERFLOW,
) -> Dict[str, Any]:
    items = normalize_records(records)
    days = week_of(anchor)
    columns = []
    for day in days:
        positioned = position_day(items, day, hour_row_height_px, tz, min_height_px, policy)
        columns.append(
            {
                "date": day.isoformat(),
                "weekday": day.strftime("%a"),
                "day": day.day,
                "items": [
                    {
                        **entry.item.to_payload(tz),
                        "top_px": round(entry.top_px, 2),
                        "height_px": round(entry.height_px, 2),
                        "start_row": entry.start_row,
                        "row_span": entry.row_span,
                        "starts_earlier": entry.starts_earlier,
                        "continues": entry.continues,
                    }
                    for entry in positioned
                ],
            }
        )
    return {
        "anchor": parse_date(anchor).isoformat(),
        "label": format_week_range(days),
        "hour_labels": hour_labels(),
        "hour_row_height_px": hour_row_height_px,
        "days": columns,
    }


def build_task_week(
    records: Sequence[dict],
    anchor,
    offset: int = 0,
    tz: tzinfo | None = None,
) -> Dict[str, Any]:
    items = sort_by_start(normalize_records(records))
    days = rolling_days(anchor, offset)
    grouped = group_by_start_day(days, items, tz)
    return {
        "anchor": parse_date(anchor).isoformat(),
        "offset": int(offset),
        "label": format_week_range(days),
        "days": [
            {
                "date": day.isoformat(),
                "weekday_name": day.strftime("%A"),
                "month_day": f"{day.strftime('%b')} {day.day}",
                "items": _payloads(grouped[day], tz),
            }
            for day in days
        ],
    }
