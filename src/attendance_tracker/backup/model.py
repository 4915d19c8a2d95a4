from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

TABLES = ("employees", "attendance", "settings")


@dataclass(frozen=True)
class Snapshot:
    """Full contents of the three data tables as JSON-ready, table-shaped rows."""

    employees: list[dict[str, Any]] = field(default_factory=list)
    attendance: list[dict[str, Any]] = field(default_factory=list)
    settings: list[dict[str, Any]] = field(default_factory=list)

    def to_tables(self) -> dict[str, list[dict[str, Any]]]:
        return {"employees": self.employees, "attendance": self.attendance, "settings": self.settings}

    @classmethod
    def from_tables(cls, tables: Mapping[str, Any]) -> "Snapshot":
        return cls(**{name: list(tables.get(name) or []) for name in TABLES})
