from datetime import date

import pytest

from attendance_tracker.attendance.calculator.standard_calculator import StandardHoursCalculator, compute_hours
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.core.exceptions import ValidationError


def test_day_shift_with_overtime_is_split_at_eight_hours():
    worked = compute_hours("09:00", "19:30")

    assert worked.hours == 8.0
    assert worked.overtime_hours == 2.5


def test_night_shift_wraps_past_midnight():
    worked = compute_hours("21:00", "05:00")

    assert worked.hours == 8.0
    assert worked.overtime_hours == 0.0


def test_night_shift_overtime_after_midnight():
    worked = compute_hours("21:00", "07:00")

    assert worked.hours == 8.0
    assert worked.overtime_hours == 2.0


def test_equal_times_count_as_zero():
    worked = compute_hours("09:00", "09:00")

    assert worked.hours == 0.0
    assert worked.overtime_hours == 0.0


def test_short_day_has_no_overtime():
    worked = compute_hours("09:15", "13:45")

    assert worked.hours == 4.5
    assert worked.overtime_hours == 0.0


def test_missing_time_gives_zero():
    assert compute_hours("09:00", None).hours == 0.0
    assert compute_hours(None, "17:00").overtime_hours == 0.0


def test_malformed_time_is_rejected():
    with pytest.raises(ValidationError):
        compute_hours("9am", "17:00")


def test_absent_record_is_cleared():
    record = AttendanceRecord(
        employee_id="EMP0001",
        date=date(2025, 3, 3),
        present=False,
        time_in="09:00",
        time_out="18:00",
        hours=9.0,
        overtime_hours=1.0,
    )

    cleared = StandardHoursCalculator().apply(record)

    assert cleared.time_in is None
    assert cleared.time_out is None
    assert cleared.hours == 0.0
    assert cleared.overtime_hours == 0.0


def test_present_record_hours_are_recomputed():
    record = AttendanceRecord(
        employee_id="EMP0001", date=date(2025, 3, 3), present=True, time_in="08:30", time_out="18:00", hours=99.0
    )

    saved = StandardHoursCalculator().apply(record)

    assert saved.hours == 8.0
    assert saved.overtime_hours == 1.5
