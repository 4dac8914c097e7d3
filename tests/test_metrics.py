from planner_ui.metrics import SUMMARY_COLUMNS, completion_percent, task_week_frame


def test_task_week_frame_counts_done_and_pending():
    view = {
        "days": [
            {"weekday_name": "Monday", "month_day": "Jan 8", "items": [{"complete": True}, {"complete": False}]},
            {"weekday_name": "Tuesday", "month_day": "Jan 9", "items": []},
        ]
    }
    frame = task_week_frame(view)
    assert list(frame.columns) == SUMMARY_COLUMNS
    assert frame.loc[0, "Tasks"] == 2
    assert frame.loc[0, "Done"] == 1
    assert frame.loc[0, "Pending"] == 1
    assert frame.loc[1, "Tasks"] == 0
    assert completion_percent(frame) == 50.0


def test_completion_percent_of_empty_week():
    assert completion_percent(task_week_frame({"days": []})) == 0.0
