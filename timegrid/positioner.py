"""Vertical geometry for items in a 24-row day column."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, tzinfo
from enum import Enum
from typing import Iterable, List, Optional

from timegrid.codec import parse_date, to_local
from timegrid.items import CalendarItem, sort_by_start
from timegrid.span import day_bounds, items_for_day

HOURS_PER_DAY = 24
MINUTES_PER_DAY = HOURS_PER_DAY * 60
DEFAULT_ROW_HEIGHT_PX = 64
MIN_VISIBLE_HEIGHT_PX = 20


class SpanPolicy(str, Enum):
    OVERFLOW = "overflow"
    CLAMP = "clamp"

    @classmethod
    def parse(cls, value) -> "SpanPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.OVERFLOW


@dataclass(frozen=True)
class PositionedItem:
    item: CalendarItem
    top_px: float
    height_px: float
    start_row: int
    row_span: int
    starts_earlier: bool = False
    continues: bool = False


def _minute_of_day(moment) -> int:
    return moment.hour * 60 + moment.minute


def minute_range(
    item: CalendarItem,
    tz: tzinfo | None = None,
    policy: SpanPolicy = SpanPolicy.OVERFLOW,
    day: Optional[date] = None,
) -> tuple[float, float]:
    """Start/end minutes relative to midnight of the column's day.

    An item that began on an earlier day starts at minute 0 of the column.
    The end is only truncated at 24:00 under SpanPolicy.CLAMP.
    """
    local_start = to_local(item.start, tz)
    local_end = to_local(item.end, tz)
    column = parse_date(day) if day is not None else local_start.date()

    if local_start.date() < column:
        start_minutes = 0.0
        anchor = day_bounds(column, tz)[0]
    else:
        start_minutes = float(_minute_of_day(local_start))
        anchor = item.start

    if local_end.date() == local_start.date():
        end_minutes = float(_minute_of_day(local_end))
    elif policy == SpanPolicy.CLAMP and local_end.date() > column:
        end_minutes = float(MINUTES_PER_DAY)
    else:
        end_minutes = start_minutes + (item.end - anchor).total_seconds() / 60
    return start_minutes, end_minutes


def layout(
    item: CalendarItem,
    hour_row_height_px: float = DEFAULT_ROW_HEIGHT_PX,
    tz: tzinfo | None = None,
    min_height_px: float = MIN_VISIBLE_HEIGHT_PX,
    policy: SpanPolicy = SpanPolicy.OVERFLOW,
    day: Optional[date] = None,
) -> tuple[float, float]:
    """(top_px, height_px) for absolute placement; height never drops below min_height_px."""
    start_minutes, end_minutes = minute_range(item, tz, policy, day)
    top = start_minutes / 60 * hour_row_height_px
    height = (end_minutes - start_minutes) / 60 * hour_row_height_px
    return top, max(height, min_height_px)


def rows_for(start_minutes: float, end_minutes: float) -> tuple[int, int]:
    start_row = min(int(start_minutes // 60), HOURS_PER_DAY - 1)
    span = math.ceil((end_minutes - start_minutes) / 60) if end_minutes > start_minutes else 1
    return start_row, max(1, span)


def position_day(
    items: Iterable[CalendarItem],
    day,
    hour_row_height_px: float = DEFAULT_ROW_HEIGHT_PX,
    tz: tzinfo | None = None,
    min_height_px: float = MIN_VISIBLE_HEIGHT_PX,
    policy: SpanPolicy = SpanPolicy.OVERFLOW,
) -> List[PositionedItem]:
    column = parse_date(day)
    column_start = day_bounds(column, tz)[0]
    positioned = []
    for item in sort_by_start(items_for_day(items, column, tz)):
        # a clamped item that ends exactly at midnight has nothing left to draw here
        if policy == SpanPolicy.CLAMP and item.start < column_start and item.end == column_start:
            continue
        start_minutes, end_minutes = minute_range(item, tz, policy, column)
        top, height = layout(item, hour_row_height_px, tz, min_height_px, policy, column)
        start_row, row_span = rows_for(start_minutes, end_minutes)
        positioned.append(
            PositionedItem(
                item=item,
                top_px=top,
                height_px=height,
                start_row=start_row,
                row_span=row_span,
                starts_earlier=to_local(item.start, tz).date() < column,
                continues=to_local(item.end, tz).date() > column,
            )
        )
    return positioned


def hour_label(hour: int) -> str:
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


def hour_labels() -> List[str]:
    return [hour_label(hour) for hour in range(HOURS_PER_DAY)]
