from __future__ import annotations

from typing import Iterable, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import is_hhmm


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_hhmm(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not is_hhmm(value.strip()):
        raise ValidationError(f"{field_name} must be a 24-hour HH:MM time")
    return value.strip()


def require_weekdays(values: Iterable[int], field_name: str = "Weekends") -> tuple[int, ...]:
    try:
        days = sorted({int(v) for v in values})
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be weekday numbers 0-6")
    if any(d < 0 or d > 6 for d in days):
        raise ValidationError(f"{field_name} must be weekday numbers 0-6")
    return tuple(days)


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None
