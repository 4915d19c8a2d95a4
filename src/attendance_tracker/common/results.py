from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ImportResult:
    """Outcome of a row-by-row import. ``count`` is the number of rows saved."""

    success: bool
    count: int

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OperationResult:
    success: bool
    message: str

    def to_dict(self) -> dict:
        return asdict(self)
