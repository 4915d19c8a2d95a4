from __future__ import annotations

from datetime import date
from typing import Any, Protocol, Sequence


class ReportRepository(Protocol):
    def summary_counts(self, start: date, end: date) -> Sequence[dict[str, Any]]:
        """Per-employee raw counts from the server-side summary procedure.

        Raises StoreError when the procedure is missing or fails.
        """

        raise NotImplementedError
