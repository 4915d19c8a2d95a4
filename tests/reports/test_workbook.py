import io

import pandas as pd

from attendance_tracker.common.format_utils import format_hours, format_minutes
from attendance_tracker.reports import aggregator
from attendance_tracker.reports.workbook import build_summary_workbook


def test_format_helpers():
    assert format_hours(8.5) == "8h 30m"
    assert format_hours(8.0) == "8h"
    assert format_hours(0.25) == "15m"
    assert format_hours(0) == "0h 0m"
    assert format_minutes(75) == "1h 15m"
    assert format_minutes(20) == "20m"


def test_workbook_has_summary_and_attendance_sheets(make_record):
    records = [make_record(time_in="09:20", time_out="18:00")]
    summary = aggregator.summary_from_counts(
        employee_id="EMP0001",
        employee_name="John Smith",
        department="IT",
        shift="morning",
        present_days=1,
        absent_days=0,
        total_hours=8.5,
        overtime_hours=0.5,
        on_time_days=0,
        late_days=1,
        late_minutes=20,
    )

    sheets = pd.read_excel(io.BytesIO(build_summary_workbook([summary], records)), sheet_name=None)

    assert list(sheets) == ["Summary", "Attendance"]
    row = sheets["Summary"].iloc[0]
    assert row["Total Time"] == "8h 30m"
    assert row["Avg Lateness"] == "20m"
    assert sheets["Attendance"].iloc[0]["Present"] == "Yes"
