from planner_api.services.calendar_views import build_month_view, build_week_view
from planner_ui import render

from factories import UTC, make_record


def _month_view():
    records = [
        make_record(str(hour), f"2024-01-10T{hour:02d}:00:00+00:00", f"2024-01-10T{hour:02d}:30:00+00:00")
        for hour in range(8, 13)
    ]
    records.append(
        make_record("x", "2024-01-20T09:00:00+00:00", "2024-01-20T10:00:00+00:00", title="<b>Party</b>", importance="HIGH")
    )
    return build_month_view(records, 2024, 0, UTC, 3)


def test_month_grid_shows_overflow_and_counts():
    html = render.month_grid_html(_month_view(), selected_iso="2024-01-10", today_iso="2024-01-20")
    assert html.count("class='cal-weekday'") == 7
    assert html.count("data-date=") == 35
    assert "+2 more" in html
    assert "5 events" in html
    assert "is-selected' data-date='2024-01-10'" in html
    assert "is-today' data-date='2024-01-20'" in html


def test_titles_are_escaped():
    html = render.month_grid_html(_month_view())
    assert "<b>Party</b>" not in html
    assert "&lt;b&gt;Party&lt;/b&gt;" in html


def test_week_grid_places_items_absolutely():
    records = [make_record("a", "2024-01-10T09:00:00+00:00", "2024-01-10T10:30:00+00:00", importance=3)]
    view = build_week_view(records, "2024-01-10", UTC, 64, 20)
    html = render.week_grid_html(view, today_iso="2024-01-10")
    assert "top:576.0px;height:96.0px;" in html
    assert "height:1536px" in html
    assert html.count("class='week-hour'") == 24
    assert "week-day-head is-today" in html
    assert "#d66060" in html


def test_item_card_and_time_range():
    item = {
        "title": "Trip",
        "description": "Pack & go",
        "start_time": "22:00",
        "end_time": "02:00",
        "start_date": "2024-01-10",
        "end_date": "2024-01-12",
        "importance_label": "Low",
        "color_key": "blue",
        "complete": True,
    }
    html = render.item_card_html(item)
    assert "Pack &amp; go" in html
    assert "22:00 → 2024-01-12 02:00" in html
    assert "importance-badge" in html
    assert "is-complete" in html


def test_importance_badge_hidden_for_none():
    assert render.importance_badge_html({"importance_label": "", "color_key": "gray"}) == ""


def test_items_for_date():
    view = {"days": [{"date": "2024-01-10", "items": [{"id": "a"}]}]}
    assert render.items_for_date(view, "2024-01-10") == [{"id": "a"}]
    assert render.items_for_date(view, "2024-01-11") == []
