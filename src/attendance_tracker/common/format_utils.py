from __future__ import annotations

import math


def format_hours(hours: float) -> str:
    """8.5 -> '8h 30m'."""
    if not hours:
        return "0h 0m"
    whole = math.floor(hours)
    minutes = round((hours - whole) * 60)
    if minutes == 60:
        whole, minutes = whole + 1, 0
    if whole == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{whole}h"
    return f"{whole}h {minutes}m"


def format_minutes(minutes: float) -> str:
    if not minutes:
        return "0m"
    hours = int(minutes // 60)
    mins = round(minutes % 60)
    return f"{hours}h {mins}m" if hours > 0 else f"{mins}m"
