# advisor_desk/utils/timefmt.py
from datetime import datetime, timezone
from typing import Optional

from advisor_desk.models.student import ensure_utc

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def distance_in_words(seconds: float) -> str:
    """Rough human distance, e.g. "about 3 hours" or "5 days" """
    seconds = abs(seconds)
    if seconds < 30:
        return "less than a minute"
    if seconds < 90:
        return "1 minute"
    if seconds < 45 * _MINUTE:
        return _plural(round(seconds / _MINUTE), "minute")
    if seconds < 90 * _MINUTE:
        return "about 1 hour"
    if seconds < _DAY:
        return f"about {_plural(round(seconds / _HOUR), 'hour')}"
    if seconds < 2 * _DAY:
        return "1 day"
    if seconds < _MONTH:
        return _plural(round(seconds / _DAY), "day")
    if seconds < 2 * _MONTH:
        return "about 1 month"
    if seconds < _YEAR:
        return _plural(round(seconds / _MONTH), "month")
    return f"about {_plural(round(seconds / _YEAR), 'year')}"


def time_ago(when: Optional[datetime], now: Optional[datetime] = None, default: str = "—") -> str:
    """Relative time with suffix ("3 days ago", "in 2 hours")"""
    if when is None:
        return default
    now = now or datetime.now(timezone.utc)
    delta = (now - ensure_utc(when)).total_seconds()
    words = distance_in_words(delta)
    return f"{words} ago" if delta >= 0 else f"in {words}"


def format_timestamp(when: Optional[datetime], default: str = "—") -> str:
    """Absolute date and time for timeline entries"""
    if when is None:
        return default
    return ensure_utc(when).strftime("%b %d, %Y, %I:%M %p")
