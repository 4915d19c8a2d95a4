from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import INSERT_BATCH_SIZE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    as_float,
    chunked,
    db_cursor,
    dump_json,
    fetchall,
    load_json,
    normalize_date,
    normalize_hhmm,
    placeholders,
)
from .model import Snapshot
from .repository import BackupRepository

_EMPLOYEE_COLUMNS = (
    "id", "name", "department", "father_name", "dob", "cnic", "address",
    "phone1", "phone2", "education", "shift", "weekends",
)
_ATTENDANCE_COLUMNS = ("employee_id", "date", "present", "time_in", "time_out", "shift", "hours", "overtime_hours")


def _iso(value: Any) -> Optional[str]:
    return value.isoformat() if isinstance(value, datetime) else value


def _db_datetime(value: Any) -> Optional[datetime]:
    """ISO text (possibly with 'Z' or an offset) -> naive datetime for DATETIME columns."""
    if value is None or value == "":
        return None
    parsed = value if isinstance(value, datetime) else parse_iso_datetime(str(value))
    return parsed.replace(tzinfo=None) if parsed else None


def _insert_sql(table: str, columns: Sequence[str]) -> str:
    cols = ", ".join(f"`{c}`" for c in (*columns, "created_at", "updated_at"))
    return (
        f"INSERT INTO {table} ({cols}) "
        f"VALUES ({placeholders(len(columns))}, COALESCE(%s, CURRENT_TIMESTAMP), COALESCE(%s, CURRENT_TIMESTAMP))"
    )


def _employee_params(row: dict[str, Any]) -> tuple:
    return (
        *(row.get(c) for c in _EMPLOYEE_COLUMNS[:-1]),
        dump_json(list(row.get("weekends") or [])),
        _db_datetime(row.get("created_at")),
        _db_datetime(row.get("updated_at")),
    )


def _attendance_params(row: dict[str, Any]) -> tuple:
    return (
        *(row.get(c) for c in _ATTENDANCE_COLUMNS),
        _db_datetime(row.get("created_at")),
        _db_datetime(row.get("updated_at")),
    )


def _setting_params(row: dict[str, Any]) -> tuple:
    return (row["key"], dump_json(row.get("value")), _db_datetime(row.get("created_at")), _db_datetime(row.get("updated_at")))


class MySQLBackupRepository(BackupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def dump(self) -> Snapshot:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {', '.join(_EMPLOYEE_COLUMNS)}, created_at, updated_at FROM employees ORDER BY id")
            employees = [
                {**r, "weekends": load_json(r["weekends"]), "created_at": _iso(r["created_at"]), "updated_at": _iso(r["updated_at"])}
                for r in fetchall(cur)
            ]

            cur.execute(
                f"SELECT {', '.join(_ATTENDANCE_COLUMNS)}, created_at, updated_at FROM attendance ORDER BY date, employee_id"
            )
            attendance = [
                {
                    **r,
                    "date": normalize_date(r["date"]).isoformat(),
                    "present": bool(r["present"]),
                    "time_in": normalize_hhmm(r.get("time_in")),
                    "time_out": normalize_hhmm(r.get("time_out")),
                    "hours": as_float(r.get("hours")),
                    "overtime_hours": as_float(r.get("overtime_hours")),
                    "created_at": _iso(r["created_at"]),
                    "updated_at": _iso(r["updated_at"]),
                }
                for r in fetchall(cur)
            ]

            cur.execute("SELECT `key`, value, created_at, updated_at FROM settings ORDER BY `key`")
            settings = [
                {"key": r["key"], "value": load_json(r["value"]), "created_at": _iso(r["created_at"]), "updated_at": _iso(r["updated_at"])}
                for r in fetchall(cur)
            ]

        return Snapshot(employees=employees, attendance=attendance, settings=settings)

    @staticmethod
    def _delete_everything(cur) -> None:
        # Children first because of the foreign key.
        cur.execute("DELETE FROM attendance")
        cur.execute("DELETE FROM employees")
        cur.execute("DELETE FROM settings")

    @staticmethod
    def _insert_rows(cur, employees, attendance, settings=()) -> None:
        if employees:
            cur.executemany(_insert_sql("employees", _EMPLOYEE_COLUMNS), [_employee_params(r) for r in employees])
        for batch in chunked(list(attendance), INSERT_BATCH_SIZE):
            cur.executemany(_insert_sql("attendance", _ATTENDANCE_COLUMNS), [_attendance_params(r) for r in batch])
        if settings:
            cur.executemany(_insert_sql("settings", ("key", "value")), [_setting_params(r) for r in settings])

    def replace_all(self, snapshot: Snapshot) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._delete_everything(cur)
            self._insert_rows(cur, snapshot.employees, snapshot.attendance, snapshot.settings)

    def clear_all(self) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            self._delete_everything(cur)

    def replace_employees(self, employees: Sequence[dict[str, Any]], attendance: Sequence[dict[str, Any]]) -> None:
        ids = [e["id"] for e in employees]
        if not ids:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM attendance WHERE employee_id IN ({placeholders(len(ids))})", tuple(ids))
            cur.execute(f"DELETE FROM employees WHERE id IN ({placeholders(len(ids))})", tuple(ids))
            self._insert_rows(cur, employees, attendance)
