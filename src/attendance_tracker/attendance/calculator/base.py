from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..model import AttendanceRecord


@dataclass(frozen=True)
class WorkedHours:
    hours: float
    overtime_hours: float


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def worked(self, time_in: Optional[str], time_out: Optional[str]) -> WorkedHours:
        raise NotImplementedError

    @abstractmethod
    def apply(self, record: AttendanceRecord) -> AttendanceRecord:
        """Return the record with hours filled in and the absent rule applied."""
        raise NotImplementedError
