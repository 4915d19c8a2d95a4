from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import js_weekday, parse_iso_date
from ..common.validators import require_hhmm, require_non_empty, require_weekdays
from ..core.constants import RESERVED_SHIFTS
from ..core.exceptions import StoreError, ValidationError
from ..employees.model import Employee
from .model import Holiday, Settings, ShiftTimes
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Use case: read and edit weekends, holidays and shift definitions."""

    def __init__(self, settings_repo: SettingsRepository):
        self._repo = settings_repo

    def get_settings(self) -> Settings:
        """Stored values over defaults. An unreachable store yields the defaults."""
        try:
            rows = self._repo.load_rows()
        except StoreError:
            logger.exception("Could not load settings, using defaults")
            return Settings()
        return Settings.from_values({row.key: row.value for row in rows})

    def update_weekends(self, weekends: Iterable[int]) -> Settings:
        days = require_weekdays(weekends)
        self._repo.save("weekends", list(days))
        return replace(self.get_settings(), weekends=days)

    def add_holiday(self, day: str, name: str) -> Settings:
        day = require_non_empty(day, "Holiday date")
        try:
            parse_iso_date(day)
        except ValueError:
            raise ValidationError("Holiday date must be YYYY-MM-DD")
        name = require_non_empty(name, "Holiday name")

        settings = self.get_settings()
        if any(h.date == day for h in settings.holidays):
            raise ValidationError(f"A holiday already exists on {day}")

        holidays = tuple(sorted((*settings.holidays, Holiday(date=day, name=name)), key=lambda h: h.date))
        self._repo.save("holidays", [h.to_dict() for h in holidays])
        return replace(settings, holidays=holidays)

    def delete_holiday(self, day: str) -> Settings:
        settings = self.get_settings()
        holidays = tuple(h for h in settings.holidays if h.date != day)
        if len(holidays) == len(settings.holidays):
            raise ValidationError(f"No holiday on {day}")
        self._repo.save("holidays", [h.to_dict() for h in holidays])
        return replace(settings, holidays=holidays)

    def update_shifts(self, shifts: dict[str, dict[str, str]]) -> Settings:
        if not isinstance(shifts, dict):
            raise ValidationError("Shifts must map a name to start and end times")
        parsed: dict[str, ShiftTimes] = {}
        for name, times in shifts.items():
            name = require_non_empty(name, "Shift name")
            if not isinstance(times, dict):
                raise ValidationError(f"{name} needs start and end times")
            parsed[name] = ShiftTimes(
                start=require_hhmm(times.get("start"), f"{name} start"),
                end=require_hhmm(times.get("end"), f"{name} end"),
            )
        missing = [name for name in RESERVED_SHIFTS if name not in parsed]
        if missing:
            raise ValidationError(f"Shifts {', '.join(missing)} cannot be removed")

        self._repo.save("shifts", {name: s.to_dict() for name, s in parsed.items()})
        return replace(self.get_settings(), shifts=parsed)

    def save_shift(self, name: str, start: str, end: str) -> Settings:
        shifts = {n: s.to_dict() for n, s in self.get_settings().shifts.items()}
        shifts[require_non_empty(name, "Shift name")] = {"start": start, "end": end}
        return self.update_shifts(shifts)

    def delete_shift(self, name: str) -> Settings:
        if name in RESERVED_SHIFTS:
            raise ValidationError(f"The {name} shift cannot be deleted")
        shifts = {n: s.to_dict() for n, s in self.get_settings().shifts.items()}
        if shifts.pop(name, None) is None:
            raise ValidationError(f"Unknown shift: {name}")
        return self.update_shifts(shifts)

    # Calendar helpers

    def is_weekend(self, day: date, employee: Optional[Employee] = None, settings: Optional[Settings] = None) -> bool:
        """An employee's own weekends, even an empty set, override the global ones."""
        settings = settings or self.get_settings()
        weekends = employee.weekends if employee is not None else settings.weekends
        return js_weekday(day) in weekends

    def holiday_name(self, day: date, settings: Optional[Settings] = None) -> Optional[str]:
        settings = settings or self.get_settings()
        key = day.isoformat()
        for holiday in settings.holidays:
            if holiday.date == key:
                return holiday.name
        return None
