from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ...core.enums import PunctualitySource
from ...settings.model import Settings
from .base import ReferenceTimesPolicy
from .configured import ConfiguredReferenceTimes
from .fixed import FixedReferenceTimes


@dataclass
class ReferenceTimesFactory:
    """Factory Pattern: pick the reference-times policy from configuration."""

    source: PunctualitySource
    load_settings: Callable[[], Settings]

    @property
    def uses_fixed_times(self) -> bool:
        return self.source == PunctualitySource.FIXED

    def create(self) -> ReferenceTimesPolicy:
        if self.uses_fixed_times:
            return FixedReferenceTimes()
        return ConfiguredReferenceTimes(self.load_settings().shifts)
