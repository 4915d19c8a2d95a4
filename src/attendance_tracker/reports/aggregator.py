"""Pure folds from attendance records to summaries.

Nothing here touches the store; the same records always give the same output.
Punctuality compares zero-padded 'HH:MM' strings: a time_in at or before the
reference start is on time, a time_out before the reference end is an early
departure.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import hhmm_to_minutes
from ..core.constants import REGULAR_HOURS_CAP
from ..employees.model import Employee
from .model import AttendanceSummary, EmployeeAnalytics, PeriodStats
from .reference.base import ReferenceTimesPolicy


@dataclass
class _Tally:
    present_days: int = 0
    absent_days: int = 0
    total_hours: float = 0.0
    overtime_hours: float = 0.0
    on_time_days: int = 0
    late_days: int = 0
    late_minutes: int = 0
    early_departures: int = 0

    def add(self, record: AttendanceRecord, policy: ReferenceTimesPolicy) -> None:
        if not record.present:
            self.absent_days += 1
            return

        self.present_days += 1
        self.total_hours += record.hours or 0
        self.overtime_hours += record.overtime_hours or 0

        reference = policy.for_shift(record.shift)
        if record.time_in:
            if record.time_in <= reference.start:
                self.on_time_days += 1
            else:
                self.late_days += 1
                self.late_minutes += hhmm_to_minutes(record.time_in) - hhmm_to_minutes(reference.start)
        if record.time_out and record.time_out < reference.end:
            self.early_departures += 1


def _percent(part: float, whole: float, *, empty: float = 0.0) -> float:
    return 100 * part / whole if whole else empty


def summary_from_counts(
    *,
    employee_id: str,
    employee_name: str,
    department: Optional[str],
    shift: str,
    present_days: int,
    absent_days: int,
    total_hours: float,
    overtime_hours: float,
    on_time_days: int,
    late_days: int,
    late_minutes: int = 0,
    early_departures: int = 0,
) -> AttendanceSummary:
    """Derive the ratio fields from raw counts.

    With no present days punctuality is 100 and hours efficiency is 0.
    """
    punctuality = _percent(on_time_days, present_days, empty=100.0)
    efficiency = _percent(total_hours, present_days * REGULAR_HOURS_CAP)
    return AttendanceSummary(
        employee_id=employee_id,
        employee_name=employee_name,
        department=department,
        shift=shift,
        present_days=present_days,
        absent_days=absent_days,
        total_hours=total_hours,
        overtime_hours=overtime_hours,
        on_time_days=on_time_days,
        late_days=late_days,
        early_departures=early_departures,
        avg_lateness_minutes=late_minutes / late_days if late_days else 0.0,
        avg_hours_per_day=total_hours / present_days if present_days else 0.0,
        punctuality_percentage=punctuality,
        hours_efficiency=efficiency,
        attendance_percentage=_percent(present_days, present_days + absent_days),
        performance_score=(punctuality + efficiency) / 2,
    )


def _in_range(records: Iterable[AttendanceRecord], start: date, end: date) -> list[AttendanceRecord]:
    return [r for r in records if start <= r.date <= end]


def summarize(
    records: Iterable[AttendanceRecord],
    start: date,
    end: date,
    policy: ReferenceTimesPolicy,
    employees: Optional[dict[str, Employee]] = None,
) -> list[AttendanceSummary]:
    """One summary per employee with records in [start, end], ordered by name."""
    employees = employees or {}
    tallies: "OrderedDict[str, _Tally]" = OrderedDict()
    first_seen: dict[str, AttendanceRecord] = {}

    for record in _in_range(records, start, end):
        tallies.setdefault(record.employee_id, _Tally()).add(record, policy)
        first_seen.setdefault(record.employee_id, record)

    summaries = []
    for employee_id, tally in tallies.items():
        employee = employees.get(employee_id)
        record = first_seen[employee_id]
        summaries.append(
            summary_from_counts(
                employee_id=employee_id,
                employee_name=employee.name if employee else (record.employee_name or employee_id),
                department=employee.department if employee else record.department,
                shift=employee.shift if employee else record.shift,
                present_days=tally.present_days,
                absent_days=tally.absent_days,
                total_hours=tally.total_hours,
                overtime_hours=tally.overtime_hours,
                on_time_days=tally.on_time_days,
                late_days=tally.late_days,
                late_minutes=tally.late_minutes,
                early_departures=tally.early_departures,
            )
        )
    return sorted(summaries, key=lambda s: (s.employee_name, s.employee_id))


def _period_stats(grouped: "OrderedDict[str, _Tally]") -> tuple[PeriodStats, ...]:
    return tuple(
        PeriodStats(
            period=period,
            present_days=t.present_days,
            absent_days=t.absent_days,
            total_hours=t.total_hours,
            overtime_hours=t.overtime_hours,
        )
        for period, t in sorted(grouped.items())
    )


def employee_analytics(
    records: Iterable[AttendanceRecord],
    employee: Employee,
    start: date,
    end: date,
    policy: ReferenceTimesPolicy,
) -> EmployeeAnalytics:
    """Totals for one employee plus ISO-week and calendar-month breakdowns."""
    mine = sorted((r for r in _in_range(records, start, end) if r.employee_id == employee.id), key=lambda r: r.date)

    total = _Tally()
    weekly: "OrderedDict[str, _Tally]" = OrderedDict()
    monthly: "OrderedDict[str, _Tally]" = OrderedDict()
    for record in mine:
        iso_year, iso_week, _ = record.date.isocalendar()
        total.add(record, policy)
        weekly.setdefault(f"{iso_year}-W{iso_week:02d}", _Tally()).add(record, policy)
        monthly.setdefault(record.date.strftime("%Y-%m"), _Tally()).add(record, policy)

    total_days = len(mine)
    return EmployeeAnalytics(
        employee_id=employee.id,
        employee_name=employee.name,
        department=employee.department,
        total_days=total_days,
        present_days=total.present_days,
        absent_days=total.absent_days,
        total_hours=total.total_hours,
        overtime_hours=total.overtime_hours,
        avg_hours_per_day=total.total_hours / total.present_days if total.present_days else 0.0,
        punctuality_score=_percent(total.on_time_days, total.present_days, empty=100.0),
        attendance_percentage=_percent(total.present_days, total_days),
        on_time_days=total.on_time_days,
        late_days=total.late_days,
        avg_lateness_minutes=total.late_minutes / total.late_days if total.late_days else 0.0,
        early_departures=total.early_departures,
        weekly_stats=_period_stats(weekly),
        monthly_stats=_period_stats(monthly),
    )
