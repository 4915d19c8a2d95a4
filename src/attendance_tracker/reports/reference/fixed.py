from __future__ import annotations

from ...core.constants import FIXED_MORNING_TIMES, FIXED_NIGHT_TIMES
from .base import ReferenceTimes, ReferenceTimesPolicy

MORNING = ReferenceTimes(*FIXED_MORNING_TIMES)
NIGHT = ReferenceTimes(*FIXED_NIGHT_TIMES)


class FixedReferenceTimes(ReferenceTimesPolicy):
    """Morning scores against 09:00/17:00, every other shift name against 21:00/05:00."""

    def for_shift(self, shift: str) -> ReferenceTimes:
        return MORNING if shift == "morning" else NIGHT
