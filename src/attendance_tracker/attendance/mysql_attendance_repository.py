from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, normalize_date, normalize_hhmm
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.id, a.employee_id, a.date, a.present, a.time_in, a.time_out, a.shift,
           a.hours, a.overtime_hours, a.created_at, a.updated_at,
           e.name AS employee_name, e.department
    FROM attendance a
    LEFT JOIN employees e ON e.id = a.employee_id
"""


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        employee_id=str(r["employee_id"]),
        date=normalize_date(r["date"]),
        present=bool(r["present"]),
        time_in=normalize_hhmm(r.get("time_in")),
        time_out=normalize_hhmm(r.get("time_out")),
        shift=r.get("shift") or "morning",
        hours=as_float(r.get("hours")),
        overtime_hours=as_float(r.get("overtime_hours")),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        employee_name=r.get("employee_name"),
        department=r.get("department"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, start: date, end: date, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        clauses = ["a.date BETWEEN %s AND %s"]
        params: list[object] = [start, end]
        if employee_id is not None:
            clauses.append("a.employee_id=%s")
            params.append(employee_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY a.date, a.employee_id",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE a.employee_id=%s AND a.date=%s", (employee_id, day))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def upsert(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, date, present, time_in, time_out, shift, hours, overtime_hours)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    present=VALUES(present), time_in=VALUES(time_in), time_out=VALUES(time_out),
                    shift=VALUES(shift), hours=VALUES(hours), overtime_hours=VALUES(overtime_hours)
                """,
                (
                    record.employee_id,
                    record.date,
                    bool(record.present),
                    record.time_in,
                    record.time_out,
                    record.shift,
                    record.hours,
                    record.overtime_hours,
                ),
            )

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE id=%s", (int(record_id),))
            return cur.rowcount > 0

    def list_recent(self, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY a.updated_at DESC, a.id DESC LIMIT %s", (int(limit),))
            return [_to_record(r) for r in fetchall(cur)]
