from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO timestamp as written by exports (a trailing 'Z' is accepted)."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def is_hhmm(value: str) -> bool:
    return bool(value) and _HHMM.match(value) is not None


def hhmm_to_minutes(value: str) -> int:
    """'HH:MM' (24-hour) -> minutes since midnight."""
    m = _HHMM.match(value or "")
    if not m:
        raise ValidationError(f"Invalid time (expected HH:MM): {value!r}")
    return int(m.group(1)) * 60 + int(m.group(2))


def month_bounds(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month}")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    return (year - 1, 12) if month == 1 else (year, month - 1)


def iter_days(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def js_weekday(day: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7
