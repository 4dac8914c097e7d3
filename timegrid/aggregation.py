from __future__ import annotations

from datetime import date, tzinfo
from typing import Any, Dict, Iterable, List, Sequence, Tuple, TypeVar

from timegrid.grid import GridCell
from timegrid.items import CalendarItem
from timegrid.span import items_for_day, starts_on

T = TypeVar("T")

MONTH_CELL_MAX_VISIBLE = 3


def visible_slice(items: Sequence[T], max_visible: int = MONTH_CELL_MAX_VISIBLE) -> Tuple[List[T], int]:
    """First ``max_visible`` items in input order plus how many were cut."""
    limit = max(0, int(max_visible))
    shown = list(items[:limit])
    return shown, max(0, len(items) - limit)


def count_label(count: int) -> str:
    return f"{count} event" if count == 1 else f"{count} events"


def overflow_label(overflow: int) -> str:
    return f"+{overflow} more" if overflow > 0 else ""


def group_by_start_day(
    days: Iterable[date],
    items: Sequence[CalendarItem],
    tz: tzinfo | None = None,
) -> Dict[date, List[CalendarItem]]:
    """Each item lands only under the day it starts on, so a list counts it once."""
    return {day: [item for item in items if starts_on(item, day, tz)] for day in days}


def summarize_month(
    matrix: Sequence[Sequence[GridCell]],
    items: Sequence[CalendarItem],
    max_visible: int = MONTH_CELL_MAX_VISIBLE,
    tz: tzinfo | None = None,
) -> List[List[Dict[str, Any]]]:
    weeks = []
    for week in matrix:
        row = []
        for cell in week:
            day_items = items_for_day(items, cell.date, tz)
            shown, overflow = visible_slice(day_items, max_visible)
            row.append(
                {
                    "date": cell.iso,
                    "day": cell.date.day,
                    "in_month": cell.is_current_period,
                    "total": len(day_items),
                    "items": shown,
                    "overflow": overflow,
                }
            )
        weeks.append(row)
    return weeks
