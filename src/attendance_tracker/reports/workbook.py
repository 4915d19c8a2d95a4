from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from ..attendance.model import AttendanceRecord
from ..common.format_utils import format_hours, format_minutes
from .model import AttendanceSummary

SUMMARY_COLUMNS = {
    "employee_id": "Employee ID",
    "employee_name": "Employee Name",
    "department": "Department",
    "shift": "Shift",
    "present_days": "Present Days",
    "absent_days": "Absent Days",
    "total_hours": "Total Hours",
    "total_time": "Total Time",
    "overtime_hours": "Overtime Hours",
    "on_time_days": "On Time Days",
    "late_days": "Late Days",
    "early_departures": "Early Departures",
    "avg_lateness_minutes": "Avg Lateness (min)",
    "avg_lateness": "Avg Lateness",
    "avg_hours_per_day": "Avg Hours/Day",
    "punctuality_percentage": "Punctuality %",
    "hours_efficiency": "Hours Efficiency %",
    "attendance_percentage": "Attendance %",
    "performance_score": "Performance Score",
}

DETAIL_COLUMNS = {
    "employee_id": "Employee ID",
    "employee_name": "Employee Name",
    "department": "Department",
    "date": "Date",
    "present": "Present",
    "time_in": "Time In",
    "time_out": "Time Out",
    "shift": "Shift",
    "hours": "Hours",
    "overtime_hours": "Overtime Hours",
}


def build_summary_workbook(summaries: Sequence[AttendanceSummary], records: Sequence[AttendanceRecord]) -> bytes:
    """Two-sheet XLSX: per-employee summary and the raw daily records."""
    summary_df = pd.DataFrame([s.to_dict() for s in summaries], columns=list(SUMMARY_COLUMNS))
    summary_df["total_time"] = summary_df["total_hours"].map(format_hours)
    summary_df["avg_lateness"] = summary_df["avg_lateness_minutes"].map(format_minutes)
    summary_df = summary_df.rename(columns=SUMMARY_COLUMNS)

    detail_df = pd.DataFrame([r.to_dict() for r in records], columns=list(DETAIL_COLUMNS))
    detail_df["present"] = detail_df["present"].map(lambda p: "Yes" if p else "No")
    detail_df = detail_df.rename(columns=DETAIL_COLUMNS)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        summary_df.to_excel(writer, index=False, sheet_name="Summary")
        detail_df.to_excel(writer, index=False, sheet_name="Attendance")
    return output.getvalue()
