from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..core.constants import DEFAULT_SHIFT, DEFAULT_WEEKENDS

# Optional biographical columns, in storage/export order.
PROFILE_FIELDS = ("department", "father_name", "dob", "cnic", "address", "phone1", "phone2", "education")


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee.

    ``weekends`` holds weekday indices (0=Sunday .. 6=Saturday) that override the
    global weekend setting for this employee.
    """

    id: str
    name: str
    department: Optional[str] = None
    father_name: Optional[str] = None
    dob: Optional[str] = None
    cnic: Optional[str] = None
    address: Optional[str] = None
    phone1: Optional[str] = None
    phone2: Optional[str] = None
    education: Optional[str] = None
    shift: str = DEFAULT_SHIFT
    weekends: tuple[int, ...] = field(default=DEFAULT_WEEKENDS)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_row(self) -> dict[str, Any]:
        """Table-shaped dict (snake_case columns), used for the API and backups."""
        return {
            "id": self.id,
            "name": self.name,
            **{name: getattr(self, name) for name in PROFILE_FIELDS},
            "shift": self.shift,
            "weekends": list(self.weekends),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Employee":
        weekends = row.get("weekends")
        return cls(
            id=str(row.get("id") or ""),
            name=str(row.get("name") or ""),
            **{name: row.get(name) or None for name in PROFILE_FIELDS},
            shift=row.get("shift") or DEFAULT_SHIFT,
            weekends=tuple(int(d) for d in weekends) if weekends is not None else DEFAULT_WEEKENDS,
            created_at=_as_datetime(row.get("created_at")),
            updated_at=_as_datetime(row.get("updated_at")),
        )


def _as_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return parse_iso_datetime(str(value))
