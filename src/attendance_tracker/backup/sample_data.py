"""Demo employees and two months of generated attendance."""

from __future__ import annotations

import calendar
import random
from datetime import date
from typing import Any, Optional

from ..attendance.calculator.standard_calculator import compute_hours
from ..common.datetime_utils import js_weekday, previous_month

SAMPLE_EMPLOYEES: tuple[dict[str, Any], ...] = (
    {
        "id": "EMP0001",
        "name": "John Smith",
        "department": "IT",
        "father_name": "Michael Smith",
        "dob": "1990-05-15",
        "cnic": "12345-6789012-3",
        "address": "123 Tech Street, Silicon Valley",
        "phone1": "0300-1234567",
        "phone2": "0321-7654321",
        "education": "BS Computer Science",
        "shift": "morning",
        "weekends": [0, 6],
    },
    {
        "id": "EMP0002",
        "name": "Sarah Johnson",
        "department": "HR",
        "father_name": "Robert Johnson",
        "dob": "1992-08-21",
        "cnic": "98765-4321098-7",
        "address": "456 HR Avenue, Corporate District",
        "phone1": "0333-9876543",
        "phone2": None,
        "education": "MBA Human Resources",
        "shift": "morning",
        "weekends": [0, 6],
    },
    {
        "id": "EMP0003",
        "name": "David Chen",
        "department": "Engineering",
        "father_name": "James Chen",
        "dob": "1988-12-03",
        "cnic": "45678-9012345-6",
        "address": "789 Engineering Blvd",
        "phone1": "0345-6789012",
        "phone2": None,
        "education": "MS Mechanical Engineering",
        "shift": "night",
        "weekends": [5, 6],
    },
    {
        "id": "EMP0004",
        "name": "Maria Garcia",
        "department": "Finance",
        "father_name": "Carlos Garcia",
        "dob": "1991-03-10",
        "cnic": "11111-2222233-4",
        "address": "321 Finance Plaza",
        "phone1": "0301-1111111",
        "phone2": "0322-2222222",
        "education": "MBA Finance",
        "shift": "morning",
        "weekends": [0, 6],
    },
    {
        "id": "EMP0005",
        "name": "Ahmed Ali",
        "department": "Marketing",
        "father_name": "Ali Ahmed",
        "dob": "1989-07-25",
        "cnic": "55555-6666677-8",
        "address": "654 Marketing Street",
        "phone1": "0305-5555555",
        "phone2": None,
        "education": "BBA Marketing",
        "shift": "morning",
        "weekends": [0, 6],
    },
)


# (on-time in, late in, regular out, overtime out) per shift
_CURRENT_TIMES = {"morning": ("09:00", "09:15", "17:00", "18:30"), "night": ("21:00", "21:15", "05:00", "06:30")}
_PREVIOUS_TIMES = {"morning": ("09:00", "09:20", "17:00", "19:00"), "night": ("21:00", "21:20", "05:00", "07:00")}

# (present, late, overtime) probabilities
_CURRENT_RATES = (0.90, 0.10, 0.20)
_PREVIOUS_RATES = (0.85, 0.15, 0.25)


def _month_rows(
    employee: dict[str, Any],
    year: int,
    month: int,
    *,
    until: Optional[date],
    times: dict[str, tuple[str, str, str, str]],
    rates: tuple[float, float, float],
    rng: random.Random,
) -> list[dict[str, Any]]:
    present_rate, late_rate, overtime_rate = rates
    on_time_in, late_in, regular_out, overtime_out = times["morning" if employee["shift"] == "morning" else "night"]

    rows = []
    for day_no in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_no)
        if js_weekday(day) in employee["weekends"] or (until is not None and day > until):
            continue

        row = {"employee_id": employee["id"], "date": day.isoformat(), "shift": employee["shift"]}
        if rng.random() < present_rate:
            time_in = late_in if rng.random() < late_rate else on_time_in
            time_out = overtime_out if rng.random() < overtime_rate else regular_out
            worked = compute_hours(time_in, time_out)
            row.update(present=True, time_in=time_in, time_out=time_out, hours=worked.hours, overtime_hours=worked.overtime_hours)
        else:
            row.update(present=False, time_in=None, time_out=None, hours=0.0, overtime_hours=0.0)
        rows.append(row)
    return rows


def build_sample_attendance(today: date, rng: random.Random) -> list[dict[str, Any]]:
    """Working-day records for the sample employees: this month up to today, and all of last month."""
    prev_year, prev_month = previous_month(today.year, today.month)
    rows: list[dict[str, Any]] = []
    for employee in SAMPLE_EMPLOYEES:
        rows.extend(
            _month_rows(employee, today.year, today.month, until=today, times=_CURRENT_TIMES, rates=_CURRENT_RATES, rng=rng)
        )
    for employee in SAMPLE_EMPLOYEES:
        rows.extend(
            _month_rows(employee, prev_year, prev_month, until=None, times=_PREVIOUS_TIMES, rates=_PREVIOUS_RATES, rng=rng)
        )
    return rows
