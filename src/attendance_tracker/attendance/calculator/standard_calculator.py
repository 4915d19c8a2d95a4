from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ...common.datetime_utils import hhmm_to_minutes
from ...core.constants import MINUTES_PER_DAY, REGULAR_HOURS_CAP
from ..model import AttendanceRecord
from .base import HoursCalculator, WorkedHours


def compute_hours(time_in: Optional[str], time_out: Optional[str]) -> WorkedHours:
    """Worked hours between two 'HH:MM' times, split at the regular cap.

    A time_out earlier than time_in is read as the next day. Equal times give
    zero. Elapsed hours are rounded to 2 decimals before splitting.
    """
    if not time_in or not time_out:
        return WorkedHours(0.0, 0.0)

    minutes_in = hhmm_to_minutes(time_in)
    minutes_out = hhmm_to_minutes(time_out)
    if minutes_out < minutes_in:
        minutes_out += MINUTES_PER_DAY

    elapsed = round((minutes_out - minutes_in) / 60, 2)
    if elapsed > REGULAR_HOURS_CAP:
        return WorkedHours(float(REGULAR_HOURS_CAP), round(elapsed - REGULAR_HOURS_CAP, 2))
    return WorkedHours(elapsed, 0.0)


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: 8 regular hours, the rest is overtime; absent days count nothing."""

    def worked(self, time_in: Optional[str], time_out: Optional[str]) -> WorkedHours:
        return compute_hours(time_in, time_out)

    def apply(self, record: AttendanceRecord) -> AttendanceRecord:
        if not record.present:
            return replace(record, time_in=None, time_out=None, hours=0.0, overtime_hours=0.0)
        worked = self.worked(record.time_in, record.time_out)
        return replace(record, hours=worked.hours, overtime_hours=worked.overtime_hours)
