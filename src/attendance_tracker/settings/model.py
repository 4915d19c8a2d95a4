from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core.constants import DEFAULT_SHIFTS, DEFAULT_WEEKENDS

SETTING_KEYS = ("weekends", "holidays", "shifts")


@dataclass(frozen=True)
class ShiftTimes:
    start: str
    end: str

    def to_dict(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Holiday:
    date: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"date": self.date, "name": self.name}


@dataclass(frozen=True)
class Settings:
    weekends: tuple[int, ...] = DEFAULT_WEEKENDS
    holidays: tuple[Holiday, ...] = ()
    shifts: dict[str, ShiftTimes] = field(
        default_factory=lambda: {name: ShiftTimes(**times) for name, times in DEFAULT_SHIFTS.items()}
    )

    def to_values(self) -> dict[str, Any]:
        """Key -> JSON value, as stored in the settings table."""
        return {
            "weekends": list(self.weekends),
            "holidays": [h.to_dict() for h in self.holidays],
            "shifts": {name: s.to_dict() for name, s in self.shifts.items()},
        }

    @classmethod
    def from_values(cls, values: dict[str, Any]) -> "Settings":
        """Build from stored key/value pairs; missing keys keep their defaults."""
        settings = cls()
        weekends = values.get("weekends")
        holidays = values.get("holidays")
        shifts = values.get("shifts")
        return cls(
            weekends=tuple(int(d) for d in weekends) if weekends is not None else settings.weekends,
            holidays=tuple(Holiday(date=h["date"], name=h.get("name", "")) for h in holidays)
            if holidays is not None
            else settings.holidays,
            shifts={name: ShiftTimes(start=s["start"], end=s["end"]) for name, s in shifts.items()}
            if shifts
            else settings.shifts,
        )


@dataclass(frozen=True)
class SettingRow:
    """Raw settings table row, as carried by backups."""

    key: str
    value: Any
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_row(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "value": self.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
