from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..codec import csv_codec
from ..common.datetime_utils import iter_days, month_bounds, parse_iso_date
from ..common.results import ImportResult
from ..common.validators import blank_to_none, require_hhmm, require_non_empty
from ..core.constants import DEFAULT_SHIFT
from ..core.enums import DayStatus
from ..core.exceptions import DomainError, NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..settings.service import SettingsService
from .calculator.base import HoursCalculator
from .model import AttendanceRecord, CalendarDay
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: mark, edit and list attendance."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        settings: SettingsService,
        *,
        calculator: HoursCalculator,
    ):
        self._attendance = attendance
        self._employees = employees
        self._settings = settings
        self._calculator = calculator

    def get_by_month(self, year: int, month: int) -> Sequence[AttendanceRecord]:
        start, end = month_bounds(year, month)
        return self._attendance.list_range(start, end)

    def get_by_employee(self, employee_id: str, year: int, month: int) -> Sequence[AttendanceRecord]:
        start, end = month_bounds(year, month)
        return self._attendance.list_range(start, end, employee_id=employee_id)

    def save_record(self, record: AttendanceRecord) -> AttendanceRecord:
        """Recompute hours, apply the absent rule and upsert on (employee_id, date)."""
        require_non_empty(record.employee_id, "Employee ID")
        if record.present:
            if record.time_in:
                require_hhmm(record.time_in, "Time in")
            if record.time_out:
                require_hhmm(record.time_out, "Time out")

        saved = self._calculator.apply(replace(record, shift=record.shift or DEFAULT_SHIFT))
        self._attendance.upsert(saved)
        return saved

    def mark(
        self,
        employee_id: str,
        day: date,
        present: bool,
        time_in: Optional[str] = None,
        time_out: Optional[str] = None,
    ) -> AttendanceRecord:
        """Mark one day for one employee using the employee's shift.

        Missing times on a present day default to the shift's configured start/end.
        Weekend and holiday days cannot be marked.
        """
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        settings = self._settings.get_settings()
        if self._settings.is_weekend(day, employee, settings):
            raise ValidationError(f"{day.isoformat()} is a weekend for {employee.name}")
        holiday = self._settings.holiday_name(day, settings)
        if holiday:
            raise ValidationError(f"{day.isoformat()} is a holiday ({holiday})")

        time_in, time_out = blank_to_none(time_in), blank_to_none(time_out)
        if present:
            shift = settings.shifts.get(employee.shift)
            if shift:
                time_in = time_in or shift.start
                time_out = time_out or shift.end

        return self.save_record(
            AttendanceRecord(
                employee_id=employee.id,
                date=day,
                present=bool(present),
                time_in=time_in,
                time_out=time_out,
                shift=employee.shift,
                employee_name=employee.name,
                department=employee.department,
            )
        )

    def delete_record(self, record_id: int) -> None:
        if not self._attendance.delete_by_id(record_id):
            raise NotFoundError(f"Attendance record {record_id} not found")

    def month_calendar(self, employee_id: str, year: int, month: int) -> list[CalendarDay]:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")

        start, end = month_bounds(year, month)
        settings = self._settings.get_settings()
        by_date = {r.date: r for r in self._attendance.list_range(start, end, employee_id=employee_id)}

        days = []
        for day in iter_days(start, end):
            record = by_date.get(day)
            holiday = self._settings.holiday_name(day, settings)
            if self._settings.is_weekend(day, employee, settings):
                status = DayStatus.WEEKEND
            elif holiday:
                status = DayStatus.HOLIDAY
            elif record is None:
                status = DayStatus.UNMARKED
            else:
                status = DayStatus.PRESENT if record.present else DayStatus.ABSENT
            days.append(CalendarDay(date=day, status=status, holiday_name=holiday, record=record))
        return days

    # CSV

    def import_csv(self, text: str) -> ImportResult:
        """Save each row; a failing row is logged and skipped."""
        rows = csv_codec.decode_attendance(text)
        if not rows and len((text or "").strip().splitlines()) <= 1:
            return ImportResult(success=False, count=0)

        count = 0
        for row in rows:
            try:
                day = parse_iso_date(row["date"])
            except ValueError:
                logger.warning("Skipping attendance row for %s: bad date %r", row["employee_id"], row["date"])
                continue
            try:
                self.save_record(AttendanceRecord(**{**row, "date": day}))
                count += 1
            except DomainError as e:
                logger.warning("Skipping attendance row for %s on %s: %s", row["employee_id"], row["date"], e)
        return ImportResult(success=True, count=count)

    def export_csv(self, year: int, month: int) -> str:
        return csv_codec.encode_attendance(self.get_by_month(year, month))

    @staticmethod
    def csv_template() -> str:
        return csv_codec.ATTENDANCE_TEMPLATE
