from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import SettingRow


class SettingsRepository(Protocol):
    def load_rows(self) -> Sequence[SettingRow]:
        raise NotImplementedError

    def save(self, key: str, value: Any) -> None:
        """Upsert one key/value pair."""

        raise NotImplementedError
