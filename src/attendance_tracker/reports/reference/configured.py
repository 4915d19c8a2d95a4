from __future__ import annotations

from typing import Mapping

from ...settings.model import ShiftTimes
from .base import ReferenceTimes, ReferenceTimesPolicy
from .fixed import FixedReferenceTimes


class ConfiguredReferenceTimes(ReferenceTimesPolicy):
    """Scores against the shift times configured in settings.

    Shift names missing from the settings fall back to the fixed table.
    """

    def __init__(self, shifts: Mapping[str, ShiftTimes]):
        self._shifts = dict(shifts)
        self._fallback = FixedReferenceTimes()

    def for_shift(self, shift: str) -> ReferenceTimes:
        times = self._shifts.get(shift)
        if times is None:
            return self._fallback.for_shift(shift)
        return ReferenceTimes(start=times.start, end=times.end)
