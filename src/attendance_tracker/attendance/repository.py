from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_range(self, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Records in [start, end], joined with employee name and department."""

        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> None:
        """Insert, or overwrite the existing row for (employee_id, date)."""

        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
