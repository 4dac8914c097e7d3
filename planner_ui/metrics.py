from __future__ import annotations

import pandas as pd

SUMMARY_COLUMNS = ["Day", "Date", "Tasks", "Done", "Pending"]


def task_week_frame(view: dict) -> pd.DataFrame:
    """One row per day of a task-week payload with completion counts."""
    rows = []
    for day in view.get("days") or []:
        items = day.get("items") or []
        done = sum(1 for item in items if item.get("complete"))
        rows.append(
            {
                "Day": day.get("weekday_name", ""),
                "Date": day.get("month_day", ""),
                "Tasks": len(items),
                "Done": done,
                "Pending": len(items) - done,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def completion_percent(frame: pd.DataFrame) -> float:
    if frame.empty:
        return 0.0
    total = int(frame["Tasks"].sum())
    if total == 0:
        return 0.0
    return round(float(frame["Done"].sum()) / total * 100, 1)
