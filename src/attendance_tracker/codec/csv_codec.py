"""CSV encode/decode for employees and attendance.

Headers are matched case-insensitively with spaces and underscores ignored, so
an exported attendance file ("Employee ID", "Time In", ...) imports back as-is.
Rows whose column count differs from the header row are skipped.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from typing import Any, Iterable, Iterator, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_SHIFT, DEFAULT_WEEKENDS
from ..employees.model import Employee

logger = logging.getLogger(__name__)

EMPLOYEE_HEADERS = (
    "id", "name", "department", "fatherName", "dob", "cnic",
    "address", "phone1", "phone2", "education", "shift", "weekends",
)
ATTENDANCE_EXPORT_HEADERS = (
    "Employee ID", "Employee Name", "Department", "Date", "Present",
    "Time In", "Time Out", "Shift", "Hours", "Overtime Hours",
)
ATTENDANCE_IMPORT_HEADERS = ("employeeId", "date", "present", "timeIn", "timeOut", "shift")

# normalized header -> Employee field
_EMPLOYEE_FIELDS = {
    "id": "id",
    "name": "name",
    "department": "department",
    "fathername": "father_name",
    "dob": "dob",
    "cnic": "cnic",
    "address": "address",
    "phone1": "phone1",
    "phone2": "phone2",
    "education": "education",
    "shift": "shift",
    "weekends": "weekends",
}
_ATTENDANCE_FIELDS = {
    "employeeid": "employee_id",
    "date": "date",
    "present": "present",
    "timein": "time_in",
    "timeout": "time_out",
    "shift": "shift",
}

EMPLOYEE_TEMPLATE = """id,name,department,fatherName,dob,cnic,address,phone1,phone2,education,shift,weekends
EMP0001,John Doe,IT,James Doe,1990-01-01,12345-6789012-3,123 Main St,0300-1234567,0321-7654321,BS Computer Science,morning,"[0,6]"
EMP0002,Jane Smith,HR,John Smith,1992-05-15,98765-4321098-7,456 Park Ave,0333-9876543,,MBA,morning,"[0,6]"

Instructions:
1. id: Employee ID (optional - will be auto-generated if not provided)
2. name: Employee name (required)
3. department: Department name (optional)
4. fatherName: Father's name (optional)
5. dob: Date of birth in YYYY-MM-DD format (optional)
6. cnic: CNIC number (optional)
7. address: Full address (optional)
8. phone1: Primary phone number (optional)
9. phone2: Secondary phone number (optional)
10. education: Education details (optional)
11. shift: morning or night (defaults to morning)
12. weekends: JSON array of weekend days [0=Sunday, 6=Saturday] (defaults to [0,6])

Notes:
- First row must contain headers (case-insensitive)
- Only 'name' field is required
- Empty values are allowed for optional fields
- CSV file should be UTF-8 encoded"""

ATTENDANCE_TEMPLATE = """employeeId,date,present,timeIn,timeOut,shift
EMP0001,2025-01-01,1,09:00,17:00,morning
EMP0002,2025-01-01,1,09:15,17:30,morning
EMP0003,2025-01-01,0,,,morning

Instructions:
1. employeeId: Employee ID (required)
2. date: YYYY-MM-DD format (required)
3. present: 1 for present, 0 for absent
4. timeIn: HH:mm format (required if present)
5. timeOut: HH:mm format (required if present)
6. shift: morning or night (defaults to morning)

Notes:
- First row must contain headers
- Date must be in YYYY-MM-DD format
- Time must be in 24-hour format (HH:mm)
- For absent employees, leave timeIn and timeOut empty
- CSV file should be UTF-8 encoded
- Overtime is automatically calculated for hours > 8"""


def normalize_header(header: str) -> str:
    return header.strip().lower().replace(" ", "").replace("_", "")


def parse_present(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes")


def format_number(value: float) -> str:
    """8.0 -> '8', 2.5 -> '2.5'."""
    return f"{float(value or 0):g}"


def _write(rows: Iterable[Sequence[Any]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    # Rows are read back one physical line at a time.
    writer.writerows([" ".join(str(v).splitlines()) for v in row] for row in rows)
    return buf.getvalue().rstrip("\n")


def _split_line(line: str) -> list[str]:
    return next(csv.reader([line]), [])


def _read(text: str, fields: dict[str, str]) -> Iterator[dict[str, str]]:
    """Yield {field: value} for each well-formed data row."""
    # One physical line per row, so an unclosed quote only costs its own line.
    lines = (text or "").strip().splitlines()
    if len(lines) <= 1:
        return
    headers = [normalize_header(h) for h in _split_line(lines[0])]
    for line_no, line in enumerate(lines[1:], start=2):
        try:
            row = _split_line(line)
        except csv.Error:
            logger.debug("Skipping CSV line %d: unreadable", line_no)
            continue
        if not row:
            continue
        if len(row) != len(headers):
            logger.debug("Skipping CSV line %d: %d columns, expected %d", line_no, len(row), len(headers))
            continue
        yield {fields[h]: v.strip() for h, v in zip(headers, row) if h in fields}


# Employees

def encode_employees(employees: Sequence[Employee]) -> str:
    if not employees:
        return ""
    return _write(
        [
            EMPLOYEE_HEADERS,
            *(
                (
                    e.id,
                    e.name,
                    e.department or "",
                    e.father_name or "",
                    e.dob or "",
                    e.cnic or "",
                    e.address or "",
                    e.phone1 or "",
                    e.phone2 or "",
                    e.education or "",
                    e.shift,
                    json.dumps(list(e.weekends), separators=(",", ":")),
                )
                for e in employees
            ),
        ]
    )


def has_name_header(text: str) -> bool:
    first_line = (text or "").strip().split("\n", 1)[0]
    return "name" in (normalize_header(h) for h in _split_line(first_line))


def _parse_weekends(value: Optional[str]) -> tuple[int, ...]:
    if not value:
        return DEFAULT_WEEKENDS
    try:
        days = json.loads(value)
        return tuple(int(d) for d in days)
    except (ValueError, TypeError):
        return DEFAULT_WEEKENDS


def decode_employees(text: str) -> list[dict[str, Any]]:
    """Employee field dicts for rows that carry a name. ``id`` may be blank."""
    out = []
    for row in _read(text, _EMPLOYEE_FIELDS):
        if not row.get("name"):
            continue
        out.append(
            {
                **{k: (v or None) for k, v in row.items()},
                "name": row["name"],
                "shift": row.get("shift") or DEFAULT_SHIFT,
                "weekends": _parse_weekends(row.get("weekends")),
            }
        )
    return out


# Attendance

def encode_attendance(records: Sequence[AttendanceRecord]) -> str:
    if not records:
        return ""
    return _write(
        [
            ATTENDANCE_EXPORT_HEADERS,
            *(
                (
                    r.employee_id,
                    r.employee_name or "",
                    r.department or "",
                    r.date.isoformat(),
                    "Yes" if r.present else "No",
                    r.time_in or "",
                    r.time_out or "",
                    r.shift or "",
                    format_number(r.hours),
                    format_number(r.overtime_hours),
                )
                for r in records
            ),
        ]
    )


def decode_attendance(text: str) -> list[dict[str, Any]]:
    """Attendance field dicts for rows that carry both employeeId and date."""
    out = []
    for row in _read(text, _ATTENDANCE_FIELDS):
        if not row.get("employee_id") or not row.get("date"):
            continue
        out.append(
            {
                "employee_id": row["employee_id"],
                "date": row["date"],
                "present": parse_present(row.get("present")),
                "time_in": row.get("time_in") or None,
                "time_out": row.get("time_out") or None,
                "shift": row.get("shift") or DEFAULT_SHIFT,
            }
        )
    return out
