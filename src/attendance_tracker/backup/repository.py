from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import Snapshot


class BackupRepository(Protocol):
    def dump(self) -> Snapshot:
        raise NotImplementedError

    def replace_all(self, snapshot: Snapshot) -> None:
        """Delete every row in the three tables and insert the snapshot.

        Runs as one transaction: on failure the previous data stays in place.
        """

        raise NotImplementedError

    def clear_all(self) -> None:
        raise NotImplementedError

    def replace_employees(self, employees: Sequence[dict[str, Any]], attendance: Sequence[dict[str, Any]]) -> None:
        """Replace the given employees (and all of their attendance) in one transaction."""

        raise NotImplementedError
