from __future__ import annotations

from datetime import date
from typing import Any, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor
from .repository import ReportRepository

_COUNT_COLUMNS = ("present_days", "absent_days", "on_time_days", "late_days", "late_minutes", "early_departures")


class MySQLReportRepository(ReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def summary_counts(self, start: date, end: date) -> Sequence[dict[str, Any]]:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.callproc("get_attendance_summary", (start, end))
            rows: list[dict[str, Any]] = []
            for result in cur.stored_results():
                columns = result.column_names
                rows.extend(dict(zip(columns, row)) for row in result.fetchall())

        return [
            {
                **r,
                **{c: int(r.get(c) or 0) for c in _COUNT_COLUMNS},
                "total_hours": as_float(r.get("total_hours")),
                "overtime_hours": as_float(r.get("overtime_hours")),
            }
            for r in rows
        ]
