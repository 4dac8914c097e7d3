from __future__ import annotations

from datetime import datetime, time, timedelta, tzinfo
from typing import Iterable, List

from timegrid.codec import localize, parse_date
from timegrid.items import CalendarItem


def day_bounds(day, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """[start, end) of a calendar day in ``tz``."""
    current = parse_date(day)
    start = localize(datetime.combine(current, time.min), tz)
    end = localize(datetime.combine(current + timedelta(days=1), time.min), tz)
    return start, end


def _touches(item: CalendarItem, day_start: datetime, day_end: datetime) -> bool:
    if day_start <= item.start < day_end:
        return True
    if day_start <= item.end < day_end:
        return True
    # spans across the whole day
    return item.start < day_start and item.end >= day_end


def occurs_on(item: CalendarItem, day, tz: tzinfo | None = None) -> bool:
    """True when the item starts, ends, or spans across the given day."""
    day_start, day_end = day_bounds(day, tz)
    return _touches(item, day_start, day_end)


def items_for_day(items: Iterable[CalendarItem], day, tz: tzinfo | None = None) -> List[CalendarItem]:
    day_start, day_end = day_bounds(day, tz)
    return [item for item in items if _touches(item, day_start, day_end)]


def starts_on(item: CalendarItem, day, tz: tzinfo | None = None) -> bool:
    day_start, day_end = day_bounds(day, tz)
    return day_start <= item.start < day_end
