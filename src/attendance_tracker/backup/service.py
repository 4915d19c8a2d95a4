from __future__ import annotations

import json
import logging
import random
import re
from datetime import date, datetime
from typing import Any, Callable, Optional

from ..codec.sql_codec import decode_sql, encode_sql
from ..common.datetime_utils import now_local, parse_iso_datetime
from ..core.constants import BACKUP_VERSION, DEFAULT_SHIFT, DEFAULT_WEEKENDS, EMPLOYEE_ID_PREFIX, REGULAR_HOURS_CAP
from ..core.exceptions import ImportFormatError, StoreError
from ..common.results import OperationResult
from ..settings.model import Settings
from .model import Snapshot
from .repository import BackupRepository
from .sample_data import SAMPLE_EMPLOYEES, build_sample_attendance

logger = logging.getLogger(__name__)

_ID_SEQUENCE = re.compile(rf"^{EMPLOYEE_ID_PREFIX}(\d+)$")
_IMPORT_FAILED = "Failed to import data. Please check the file format and try again."


def _blank_to_none(value: Any) -> Any:
    return None if value is None or value == "" else value


def _json_value(value: Any) -> Any:
    """Parse JSON text; anything unparsable is kept as-is."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def _weekends(value: Any) -> list[int]:
    """An empty list is kept: that employee has no weekend days."""
    value = _json_value(value)
    if not isinstance(value, (list, tuple)):
        return list(DEFAULT_WEEKENDS)
    try:
        return [int(d) for d in value]
    except (TypeError, ValueError):
        return list(DEFAULT_WEEKENDS)


def _timestamp(value: Any) -> Optional[str]:
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        parse_iso_datetime(str(value))
    except ValueError as e:
        raise ImportFormatError(f"bad timestamp: {value!r}") from e
    return str(value)


def _objects(rows: Any, table: str) -> list[dict[str, Any]]:
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ImportFormatError(f"{table} must be a list of objects")
    return rows


def _is_true(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "t", "yes")
    return bool(value)


def _split_overtime(hours: float) -> tuple[float, float]:
    if hours > REGULAR_HOURS_CAP:
        return float(REGULAR_HOURS_CAP), round(hours - REGULAR_HOURS_CAP, 2)
    return hours, 0.0


def default_setting_rows() -> list[dict[str, Any]]:
    return [{"key": k, "value": v} for k, v in Settings().to_values().items()]


class _IdAllocator:
    """Hands out EMP#### ids above the highest one already present in an import."""

    def __init__(self, rows: list[dict[str, Any]], id_key: str = "id"):
        numbers = [int(m.group(1)) for m in (_ID_SEQUENCE.match(str(r.get(id_key) or "")) for r in rows) if m]
        self._next = max(numbers, default=0) + 1

    def __call__(self) -> str:
        value = f"{EMPLOYEE_ID_PREFIX}{self._next:04d}"
        self._next += 1
        return value


class BackupService:
    """Use case: whole-database backup, restore, clear and demo data."""

    def __init__(self, backups: BackupRepository, *, clock: Callable[[], datetime] = now_local):
        self._backups = backups
        self._clock = clock

    # Export

    def export_json(self) -> dict[str, Any]:
        snapshot = self._backups.dump()
        return {
            **snapshot.to_tables(),
            "exportDate": self._clock().isoformat(),
            "version": BACKUP_VERSION,
        }

    def export_sql(self) -> str:
        return encode_sql(self._backups.dump().to_tables(), generated_at=self._clock())

    # Import

    def import_json(self, text: str) -> OperationResult:
        try:
            data = json.loads(text)
        except ValueError:
            return OperationResult(False, "Invalid JSON file.")
        if not isinstance(data, dict):
            return OperationResult(False, "Invalid backup file format. Missing required tables.")

        employees = data.get("employees")
        try:
            if isinstance(employees, dict) and "columns" in employees and "values" in employees:
                snapshot = self._from_v1_columns(data)
                label = "v1.0 data: "
            elif isinstance(employees, list) and not data.get("version"):
                snapshot = self._from_v1_arrays(data)
                label = "v1.0 data: "
            elif all(isinstance(data.get(t), list) for t in ("employees", "attendance", "settings")):
                snapshot = self._from_v2(data)
                label = ""
            else:
                return OperationResult(False, "Invalid backup file format. Missing required tables.")
        except ImportFormatError as e:
            logger.warning("Rejected JSON backup: %s", e)
            return OperationResult(False, f"Invalid backup file: {e}")

        result = self._replace(snapshot)
        if not result.success:
            return result
        verb = "migrated" if label else "imported"
        return OperationResult(
            True,
            f"Successfully {verb} {label}{len(snapshot.employees)} employees "
            f"and {len(snapshot.attendance)} attendance records.",
        )

    def import_sql(self, text: str) -> OperationResult:
        try:
            tables = decode_sql(text)
            snapshot = Snapshot(
                employees=[self._employee_row(r) for r in tables["employees"]],
                attendance=[self._attendance_row(r) for r in tables["attendance"]],
                settings=[self._setting_row(r) for r in tables["settings"]],
            )
        except ImportFormatError as e:
            logger.warning("Rejected SQL backup: %s", e)
            return OperationResult(False, f"Invalid SQL file: {e}")

        result = self._replace(snapshot)
        if not result.success:
            return result
        return OperationResult(
            True,
            f"Successfully imported {len(snapshot.employees)} employees, "
            f"{len(snapshot.attendance)} attendance records, and {len(snapshot.settings)} settings.",
        )

    def _replace(self, snapshot: Snapshot) -> OperationResult:
        try:
            self._backups.replace_all(snapshot)
        except StoreError:
            logger.exception("Import failed; previous data kept")
            return OperationResult(False, _IMPORT_FAILED)
        logger.info(
            "Imported %d employees, %d attendance records, %d settings",
            len(snapshot.employees),
            len(snapshot.attendance),
            len(snapshot.settings),
        )
        return OperationResult(True, "")

    def clear_database(self) -> OperationResult:
        try:
            self._backups.clear_all()
        except StoreError:
            logger.exception("Clearing the database failed")
            return OperationResult(False, "Failed to clear database.")
        logger.info("Database cleared")
        return OperationResult(True, "All employees, attendance records and settings were deleted.")

    def generate_sample_data(self, today: Optional[date] = None, seed: Optional[int] = None) -> OperationResult:
        today = today or self._clock().date()
        employees = [dict(e) for e in SAMPLE_EMPLOYEES]
        attendance = build_sample_attendance(today, random.Random(seed))
        try:
            self._backups.replace_employees(employees, attendance)
        except StoreError:
            logger.exception("Generating sample data failed")
            return OperationResult(False, "Failed to generate sample data.")
        return OperationResult(
            True, f"Generated {len(employees)} sample employees and {len(attendance)} attendance records."
        )

    # Row normalization (table-shaped, snake_case)

    @staticmethod
    def _employee_row(row: dict[str, Any]) -> dict[str, Any]:
        if not row.get("id") or not row.get("name"):
            raise ImportFormatError("every employee needs an id and a name")
        return {
            "id": str(row["id"]),
            "name": str(row["name"]),
            **{
                k: _blank_to_none(row.get(k))
                for k in ("department", "father_name", "dob", "cnic", "address", "phone1", "phone2", "education")
            },
            "shift": row.get("shift") or DEFAULT_SHIFT,
            "weekends": _weekends(row.get("weekends")),
            "created_at": _timestamp(row.get("created_at")),
            "updated_at": _timestamp(row.get("updated_at")),
        }

    @staticmethod
    def _attendance_row(row: dict[str, Any]) -> dict[str, Any]:
        if not row.get("employee_id") or not row.get("date"):
            raise ImportFormatError("every attendance record needs an employee_id and a date")
        present = _is_true(row.get("present"))
        try:
            hours = float(row.get("hours") or 0)
            overtime = float(row.get("overtime_hours") or 0)
        except (TypeError, ValueError) as e:
            raise ImportFormatError(f"bad hours value for {row['employee_id']} on {row['date']}") from e
        return {
            "employee_id": str(row["employee_id"]),
            "date": str(row["date"]),
            "present": present,
            "time_in": _blank_to_none(row.get("time_in")) if present else None,
            "time_out": _blank_to_none(row.get("time_out")) if present else None,
            "shift": row.get("shift") or DEFAULT_SHIFT,
            "hours": hours if present else 0.0,
            "overtime_hours": overtime if present else 0.0,
            "created_at": _timestamp(row.get("created_at")),
            "updated_at": _timestamp(row.get("updated_at")),
        }

    @staticmethod
    def _setting_row(row: dict[str, Any]) -> dict[str, Any]:
        if not row.get("key"):
            raise ImportFormatError("every setting needs a key")
        return {
            "key": str(row["key"]),
            "value": _json_value(row.get("value")),
            "created_at": _timestamp(row.get("created_at")),
            "updated_at": _timestamp(row.get("updated_at")),
        }

    def _from_v2(self, data: dict[str, Any]) -> Snapshot:
        return Snapshot(
            employees=[self._employee_row(r) for r in _objects(data["employees"], "employees")],
            attendance=[self._attendance_row(r) for r in _objects(data["attendance"], "attendance")],
            settings=[self._setting_row(r) for r in _objects(data["settings"], "settings")],
        )

    @staticmethod
    def _columns_rows(table: Any) -> list[dict[str, Any]]:
        """{columns: [...], values: [[...], ...]} -> dicts keyed by lower-cased column."""
        if not isinstance(table, dict) or "columns" not in table or "values" not in table:
            return []
        columns = [str(c).lower() for c in table["columns"]]
        rows = []
        for values in table["values"]:
            if not isinstance(values, list):
                raise ImportFormatError("v1.0 values must be arrays")
            rows.append(dict(zip(columns, values)))
        return rows

    def _from_v1_columns(self, data: dict[str, Any]) -> Snapshot:
        raw_employees = [r for r in self._columns_rows(data.get("employees")) if r.get("name")]
        next_id = _IdAllocator(raw_employees)
        employees = [
            self._employee_row(
                {
                    **r,
                    "id": r.get("id") or next_id(),
                    "father_name": r.get("fathername"),
                    "address": str(r["address"]).replace("\n", " ").strip() if r.get("address") else None,
                }
            )
            for r in raw_employees
        ]

        attendance = []
        for r in self._columns_rows(data.get("attendance")):
            if not r.get("employeeid") or not r.get("date"):
                continue
            try:
                hours, overtime = _split_overtime(float(r.get("hours") or 0))
            except (TypeError, ValueError) as e:
                raise ImportFormatError(f"bad hours value for {r['employeeid']} on {r['date']}") from e
            attendance.append(
                self._attendance_row(
                    {
                        "employee_id": r["employeeid"],
                        "date": r["date"],
                        "present": r.get("present") in (1, True, "true"),
                        "time_in": r.get("timein"),
                        "time_out": r.get("timeout"),
                        "shift": r.get("shift"),
                        "hours": hours,
                        "overtime_hours": overtime,
                    }
                )
            )

        settings = [
            self._setting_row(r) for r in self._columns_rows(data.get("settings")) if r.get("key") and r.get("value")
        ]
        return Snapshot(employees=employees, attendance=attendance, settings=settings or default_setting_rows())

    def _from_v1_arrays(self, data: dict[str, Any]) -> Snapshot:
        raw_employees = _objects(data.get("employees") or [], "employees")
        next_id = _IdAllocator(raw_employees)
        employees = [
            self._employee_row(
                {
                    "id": e.get("id") or next_id(),
                    "name": e.get("name"),
                    "department": e.get("department"),
                    "father_name": e.get("fatherName"),
                    "dob": e.get("dob"),
                    "cnic": e.get("cnic"),
                    "address": e.get("address"),
                    "phone1": e.get("phone1"),
                    "phone2": e.get("phone2"),
                    "education": e.get("education"),
                    "shift": e.get("shift"),
                    "weekends": e.get("weekends"),
                    "created_at": e.get("createdAt"),
                    "updated_at": e.get("updatedAt"),
                }
            )
            for e in raw_employees
        ]
        attendance = [
            self._attendance_row(
                {
                    "employee_id": a.get("employeeId"),
                    "date": a.get("date"),
                    "present": a.get("present") or False,
                    "time_in": a.get("timeIn"),
                    "time_out": a.get("timeOut"),
                    "shift": a.get("shift"),
                    "hours": a.get("hours"),
                    "overtime_hours": a.get("overtimeHours"),
                    "created_at": a.get("createdAt"),
                    "updated_at": a.get("updatedAt"),
                }
            )
            for a in _objects(data.get("attendance") or [], "attendance")
        ]

        stored = data.get("settings") if isinstance(data.get("settings"), dict) else {}
        defaults = Settings().to_values()
        settings = [{"key": k, "value": stored.get(k) or defaults[k]} for k in ("weekends", "holidays", "shifts")]
        return Snapshot(employees=employees, attendance=attendance, settings=settings)
