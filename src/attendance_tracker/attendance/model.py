from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..core.constants import DEFAULT_SHIFT
from ..core.enums import DayStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance on one calendar day.

    Unique on (employee_id, date). When ``present`` is false the times are
    cleared and both hour figures are zero.
    """

    employee_id: str
    date: date
    present: bool
    time_in: Optional[str] = None
    time_out: Optional[str] = None
    shift: str = DEFAULT_SHIFT
    hours: float = 0.0
    overtime_hours: float = 0.0
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Read-side join with employees
    employee_name: Optional[str] = None
    department: Optional[str] = None

    def to_row(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "date": self.date.isoformat(),
            "present": self.present,
            "time_in": self.time_in,
            "time_out": self.time_out,
            "shift": self.shift,
            "hours": self.hours,
            "overtime_hours": self.overtime_hours,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            **self.to_row(),
            "employee_name": self.employee_name,
            "department": self.department,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "AttendanceRecord":
        day = row.get("date")
        created_at = row.get("created_at")
        updated_at = row.get("updated_at")
        return cls(
            employee_id=str(row.get("employee_id") or ""),
            date=day if isinstance(day, date) else parse_iso_date(str(day)),
            present=bool(row.get("present")),
            time_in=row.get("time_in") or None,
            time_out=row.get("time_out") or None,
            shift=row.get("shift") or DEFAULT_SHIFT,
            hours=float(row.get("hours") or 0),
            overtime_hours=float(row.get("overtime_hours") or 0),
            id=row.get("id"),
            created_at=created_at if isinstance(created_at, datetime) or created_at is None else parse_iso_datetime(created_at),
            updated_at=updated_at if isinstance(updated_at, datetime) or updated_at is None else parse_iso_datetime(updated_at),
        )


@dataclass(frozen=True)
class CalendarDay:
    """One cell of an employee's month calendar."""

    date: date
    status: DayStatus
    holiday_name: Optional[str] = None
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "status": self.status.value,
            "holiday_name": self.holiday_name,
            "record": self.record.to_dict() if self.record else None,
        }
