from __future__ import annotations

import logging
from datetime import date
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..core.constants import NEEDS_ATTENTION_BELOW_PERCENT, RECENT_ACTIVITY_LIMIT
from ..core.exceptions import NotFoundError, StoreError, ValidationError
from ..employees.repository import EmployeeRepository
from . import aggregator
from .model import AttendanceSummary, DashboardStats, EmployeeAnalytics
from .reference.factory import ReferenceTimesFactory
from .repository import ReportRepository
from .workbook import build_summary_workbook

logger = logging.getLogger(__name__)


class ReportService:
    """Use case: attendance summaries, per-employee analytics and the dashboard."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        reports: ReportRepository,
        *,
        reference_factory: ReferenceTimesFactory,
    ):
        self._attendance = attendance
        self._employees = employees
        self._reports = reports
        self._reference_factory = reference_factory

    def attendance_summary(self, year: int, month: int) -> list[AttendanceSummary]:
        """Monthly summary, computed server-side when the procedure is available.

        The procedure scores against the fixed reference times, so it is only
        used with that policy. Any store failure falls back to the local fold.
        """
        start, end = month_bounds(year, month)
        if self._reference_factory.uses_fixed_times:
            try:
                rows = self._reports.summary_counts(start, end)
                return sorted(
                    (aggregator.summary_from_counts(**row) for row in rows),
                    key=lambda s: (s.employee_name, s.employee_id),
                )
            except StoreError as e:
                logger.warning("Summary procedure unavailable, using fallback calculation: %s", e)
        return self.summary_for_range(start, end)

    def summary_for_range(self, start: date, end: date) -> list[AttendanceSummary]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        records = self._attendance.list_range(start, end)
        employees = {e.id: e for e in self._employees.list_all()}
        return aggregator.summarize(records, start, end, self._reference_factory.create(), employees)

    def employee_analytics(self, employee_id: str, start: date, end: date) -> EmployeeAnalytics:
        if end < start:
            raise ValidationError("End date must not be before start date")
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        records = self._attendance.list_range(start, end, employee_id=employee_id)
        return aggregator.employee_analytics(records, employee, start, end, self._reference_factory.create())

    def dashboard(self, today: date) -> DashboardStats:
        employees = self._employees.list_all()
        summary = self.attendance_summary(today.year, today.month)
        todays = self._attendance.list_range(today, today)

        present = sum(s.present_days for s in summary)
        tracked = sum(s.present_days + s.absent_days for s in summary)

        top = None
        for s in summary:
            if top is None or s.punctuality_percentage > top.punctuality_percentage:
                top = s

        return DashboardStats(
            total_employees=len(employees),
            departments=len({e.department for e in employees if e.department}),
            attendance_percentage=100 * present / tracked if tracked else 0.0,
            total_hours=sum(s.total_hours for s in summary),
            overtime_hours=sum(s.overtime_hours for s in summary),
            present_today=sum(1 for r in todays if r.present),
            absent_today=sum(1 for r in todays if not r.present),
            top_performer=(
                {
                    "employee_id": top.employee_id,
                    "employee_name": top.employee_name,
                    "punctuality_percentage": top.punctuality_percentage,
                }
                if top
                else None
            ),
            needs_attention=[
                {
                    "employee_id": s.employee_id,
                    "employee_name": s.employee_name,
                    "attendance_percentage": s.attendance_percentage,
                }
                for s in summary
                if s.attendance_percentage < NEEDS_ATTENTION_BELOW_PERCENT
            ],
            recent_activity=[r.to_dict() for r in self._attendance.list_recent(RECENT_ACTIVITY_LIMIT)],
        )

    def summary_workbook(self, year: int, month: int) -> bytes:
        start, end = month_bounds(year, month)
        summaries: Sequence[AttendanceSummary] = self.attendance_summary(year, month)
        return build_summary_workbook(summaries, self._attendance.list_range(start, end))
