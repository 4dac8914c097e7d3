from datetime import date, time

from planner_ui.tabs.item_form import build_form_payload, default_form


def test_default_form_is_one_hour_on_selected_day():
    form = default_form(date(2024, 1, 10), is_task=True)
    assert (form["start_date"], form["start_time"]) == ("2024-01-10", "09:00")
    assert (form["end_date"], form["end_time"]) == ("2024-01-10", "10:00")
    assert form["is_task"] is True


def test_build_form_payload_from_widget_values():
    payload, error = build_form_payload(
        "  Dentist ", "", date(2024, 1, 10), time(9, 30), date(2024, 1, 10), time(10, 0), "HIGH", False
    )
    assert error is None
    assert payload["title"] == "Dentist"
    assert payload["description"] is None
    assert payload["start_time"] == "09:30"
    assert payload["importance"] == "HIGH"


def test_build_form_payload_validation():
    assert build_form_payload("", "", "2024-01-10", "09:00", "2024-01-10", "10:00", "NONE", False)[1]
    payload, error = build_form_payload("A", "", "2024-01-10", "09:00", "2024-01-09", "10:00", "NONE", False)
    assert payload is None
    assert error == "End must not be before start."
