from planner_ui.constants import VIEW_MONTH, VIEW_WEEK
from planner_ui.tabs.calendar_tab import week_has_day


def test_week_payload_feeds_day_list_for_its_own_days():
    view = {"days": [{"date": "2024-01-07"}, {"date": "2024-01-10"}]}
    assert week_has_day(VIEW_WEEK, view, "2024-01-10")
    assert not week_has_day(VIEW_WEEK, view, "2024-01-20")


def test_month_payload_never_feeds_day_list():
    view = {"weeks": [[{"date": "2024-01-10", "items": []}]]}
    assert not week_has_day(VIEW_MONTH, view, "2024-01-10")
