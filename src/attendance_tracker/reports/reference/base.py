from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ReferenceTimes:
    """Nominal 'HH:MM' start and end a shift is scored against."""

    start: str
    end: str


class ReferenceTimesPolicy(ABC):
    """Strategy interface: which start/end times count as on time for a shift."""

    @abstractmethod
    def for_shift(self, shift: str) -> ReferenceTimes:
        raise NotImplementedError
