from __future__ import annotations

import math
from datetime import timedelta
from typing import Optional

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
MONTH = 30 * DAY
YEAR = 365 * DAY

# unit -> (seconds per unit, singular word)
UNITS = {
    "s": (1, "second"),
    "m": (MINUTE, "minute"),
    "h": (HOUR, "hour"),
    "d": (DAY, "day"),
    "M": (MONTH, "month"),
    "Y": (YEAR, "year"),
}


def _auto_unit(seconds: float) -> str:
    if seconds < MINUTE:
        return "s"
    if seconds < HOUR:
        return "m"
    if seconds < DAY:
        return "h"
    if seconds < MONTH:
        return "d"
    if seconds < YEAR:
        return "M"
    return "Y"


def format_distance(delta: timedelta, unit: Optional[str] = None) -> str:
    """
    Render a duration as strict relative-time words, e.g. "3 days" or "1 hour".

    The unit is picked from the magnitude unless forced with one of
    s, m, h, d, M, Y. Values are floored; negative durations are rendered by
    their magnitude.
    """
    seconds = abs(delta.total_seconds())
    unit = unit or _auto_unit(seconds)
    if unit not in UNITS:
        raise ValueError(f"Unknown unit {unit!r}; expected one of {', '.join(UNITS)}")
    size, word = UNITS[unit]
    value = math.floor(seconds / size)
    return f"{value} {word}" if value == 1 else f"{value} {word}s"
