import calendar
from datetime import date, timedelta

import pytest

from timegrid.errors import InvalidInput
from timegrid.grid import (
    build_month_matrix,
    format_month_label,
    format_week_range,
    month_window,
    rolling_days,
    shift_month,
    shift_week,
    week_of,
)


def _flatten(matrix):
    return [cell for week in matrix for cell in week]


def test_january_2024_matrix():
    matrix = build_month_matrix(2024, 0)
    cells = _flatten(matrix)
    assert len(matrix) == 5
    assert cells[0].date == date(2023, 12, 31)
    assert cells[-1].date == date(2024, 2, 3)
    assert not cells[0].is_current_period
    assert cells[1].is_current_period


def test_february_2015_fits_four_rows():
    matrix = build_month_matrix(2015, 1)
    assert len(matrix) == 4
    assert all(cell.is_current_period for cell in _flatten(matrix))


@pytest.mark.parametrize("year", [2023, 2024])
@pytest.mark.parametrize("month_index", range(12))
def test_matrix_invariants(year, month_index):
    matrix = build_month_matrix(year, month_index)
    cells = _flatten(matrix)
    dates = [cell.date for cell in cells]
    assert len(set(dates)) == len(dates)
    assert all(later - earlier == timedelta(days=1) for earlier, later in zip(dates, dates[1:]))
    assert all(week[0].date.weekday() == 6 for week in matrix)
    in_month = [cell for cell in cells if cell.is_current_period]
    assert len(in_month) == calendar.monthrange(year, month_index + 1)[1]
    assert (dates[0], dates[-1]) == month_window(year, month_index)


@pytest.mark.parametrize("month_index", [-1, 12])
def test_month_index_out_of_range(month_index):
    with pytest.raises(InvalidInput):
        build_month_matrix(2024, month_index)


def test_week_of_starts_on_sunday():
    week = week_of("2024-01-10")
    assert week[0] == date(2024, 1, 7)
    assert week[-1] == date(2024, 1, 13)
    assert week_of(date(2024, 1, 7))[0] == date(2024, 1, 7)


def test_format_week_range_same_month():
    assert format_week_range(week_of("2024-01-10")) == "January 7-13, 2024"


def test_format_week_range_across_months():
    assert format_week_range(week_of("2024-01-01")) == "Dec 31 - Jan 6, 2024"


def test_shift_month_wraps_year():
    assert shift_month(2024, 11, 1) == (2025, 0)
    assert shift_month(2024, 0, -1) == (2023, 11)
    assert shift_month(2024, 5, 14) == (2025, 7)


def test_shift_week_and_rolling_days():
    assert shift_week("2024-01-10", -1) == date(2024, 1, 3)
    days = rolling_days("2024-01-10", 1)
    assert len(days) == 7
    assert days[0] == date(2024, 1, 17)
    assert days[-1] == date(2024, 1, 23)


def test_format_month_label():
    assert format_month_label(2024, 0) == "January 2024"


@pytest.mark.parametrize("offset", range(0, 40, 3))
def test_week_of_contains_anchor(offset):
    anchor = date(2024, 2, 20) + timedelta(days=offset)
    week = week_of(anchor)
    assert len(week) == 7
    assert anchor in week
    assert week == week_of(anchor)
