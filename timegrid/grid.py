from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Sequence

from timegrid.codec import parse_date
from timegrid.errors import InvalidInput

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class GridCell:
    date: date
    is_current_period: bool

    @property
    def iso(self) -> str:
        return self.date.isoformat()


def _check_month(year, month_index) -> tuple[int, int]:
    try:
        year_value = int(year)
        month_value = int(month_index)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid month {year!r}/{month_index!r}") from exc
    if not 0 <= month_value <= 11:
        raise InvalidInput(f"Month index must be 0-11, got {month_index!r}", month_index)
    if not 1 < year_value < 9999:
        raise InvalidInput(f"Year out of range: {year!r}", year)
    return year_value, month_value


def _sunday_on_or_before(day: date) -> date:
    # date.weekday() is Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % DAYS_PER_WEEK)


def _saturday_on_or_after(day: date) -> date:
    return day + timedelta(days=(5 - day.weekday()) % DAYS_PER_WEEK)


def month_bounds(year, month_index) -> tuple[date, date]:
    year_value, month_value = _check_month(year, month_index)
    first = date(year_value, month_value + 1, 1)
    last = first.replace(day=calendar.monthrange(year_value, month_value + 1)[1])
    return first, last


def month_window(year, month_index) -> tuple[date, date]:
    """First and last dates shown on the month page, padding included."""
    first, last = month_bounds(year, month_index)
    return _sunday_on_or_before(first), _saturday_on_or_after(last)


def build_month_matrix(year, month_index) -> List[List[GridCell]]:
    """Sunday-first weeks covering every day of the month (zero-based month index).

    The number of rows follows from where the month starts and ends, so it is
    4, 5 or 6.
    """
    first, last = month_bounds(year, month_index)
    start, end = month_window(year, month_index)
    weeks: List[List[GridCell]] = []
    current = start
    while current <= end:
        week = []
        for _ in range(DAYS_PER_WEEK):
            week.append(GridCell(current, first <= current <= last))
            current += timedelta(days=1)
        weeks.append(week)
    return weeks


def week_of(anchor) -> List[date]:
    start = _sunday_on_or_before(parse_date(anchor))
    return [start + timedelta(days=offset) for offset in range(DAYS_PER_WEEK)]


def rolling_days(anchor, offset_weeks: int = 0, count: int = DAYS_PER_WEEK) -> List[date]:
    start = parse_date(anchor) + timedelta(days=DAYS_PER_WEEK * int(offset_weeks))
    return [start + timedelta(days=offset) for offset in range(count)]


def format_week_range(week: Sequence[date]) -> str:
    if not week:
        return ""
    start = week[0]
    end = week[-1]
    if (start.year, start.month) == (end.year, end.month):
        return f"{start.strftime('%B')} {start.day}-{end.day}, {start.year}"
    return f"{start.strftime('%b')} {start.day} - {end.strftime('%b')} {end.day}, {end.year}"


def format_month_label(year, month_index) -> str:
    first, _ = month_bounds(year, month_index)
    return f"{first.strftime('%B')} {first.year}"


def shift_month(year, month_index, delta: int) -> tuple[int, int]:
    year_value, month_value = _check_month(year, month_index)
    total = year_value * 12 + month_value + int(delta)
    return _check_month(total // 12, total % 12)


def shift_week(anchor, delta: int) -> date:
    return parse_date(anchor) + timedelta(days=DAYS_PER_WEEK * int(delta))
