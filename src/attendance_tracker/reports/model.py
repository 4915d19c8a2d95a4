from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


def _rounded(data: dict[str, Any]) -> dict[str, Any]:
    return {k: round(v, 2) if isinstance(v, float) else v for k, v in data.items()}


@dataclass(frozen=True)
class AttendanceSummary:
    """Per-employee aggregate over a date range. Derived, never stored."""

    employee_id: str
    employee_name: str
    department: Optional[str]
    shift: str
    present_days: int = 0
    absent_days: int = 0
    total_hours: float = 0.0
    overtime_hours: float = 0.0
    on_time_days: int = 0
    late_days: int = 0
    early_departures: int = 0
    avg_lateness_minutes: float = 0.0
    avg_hours_per_day: float = 0.0
    punctuality_percentage: float = 100.0
    hours_efficiency: float = 0.0
    attendance_percentage: float = 0.0
    performance_score: float = 50.0

    def to_dict(self) -> dict[str, Any]:
        return _rounded(asdict(self))


@dataclass(frozen=True)
class PeriodStats:
    period: str
    present_days: int
    absent_days: int
    total_hours: float
    overtime_hours: float

    def to_dict(self) -> dict[str, Any]:
        return _rounded(asdict(self))


@dataclass(frozen=True)
class EmployeeAnalytics:
    employee_id: str
    employee_name: str
    department: Optional[str]
    total_days: int
    present_days: int
    absent_days: int
    total_hours: float
    overtime_hours: float
    avg_hours_per_day: float
    punctuality_score: float
    attendance_percentage: float
    on_time_days: int
    late_days: int
    avg_lateness_minutes: float
    early_departures: int
    weekly_stats: tuple[PeriodStats, ...] = ()
    monthly_stats: tuple[PeriodStats, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = _rounded({k: v for k, v in asdict(self).items() if k not in ("weekly_stats", "monthly_stats")})
        data["weekly_stats"] = [s.to_dict() for s in self.weekly_stats]
        data["monthly_stats"] = [s.to_dict() for s in self.monthly_stats]
        return data


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    departments: int
    attendance_percentage: float
    total_hours: float
    overtime_hours: float
    present_today: int
    absent_today: int
    top_performer: Optional[dict[str, Any]] = None
    needs_attention: list[dict[str, Any]] = field(default_factory=list)
    recent_activity: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _rounded(asdict(self))
