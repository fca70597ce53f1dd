"""Day keys: calendar dates in the workspace's reference timezone."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from discipline.workspace import get_user_timezone

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _today(now: datetime | None, tz: ZoneInfo | None) -> date:
    if tz is None:
        tz = get_user_timezone()
    if now is None:
        now = datetime.now(tz)
    elif now.tzinfo is not None:
        now = now.astimezone(tz)
    return now.date()


def day_key(now: datetime | None = None, tz: ZoneInfo | None = None) -> str:
    """Today's day key (YYYY-MM-DD). Evaluated on every call.

    A naive *now* is taken to already be in the reference timezone.
    """
    return _today(now, tz).isoformat()


def day_key_offset(n: int, now: datetime | None = None, tz: ZoneInfo | None = None) -> str:
    """Day key of the date *n* days before today."""
    return (_today(now, tz) - timedelta(days=n)).isoformat()


def last_days(n: int = 7, now: datetime | None = None, tz: ZoneInfo | None = None) -> list[str]:
    """The last *n* day keys, oldest first, ending with today."""
    today = _today(now, tz)
    return [(today - timedelta(days=i)).isoformat() for i in range(n - 1, -1, -1)]


def weekday_label(day: str) -> str:
    """Short weekday label for a day key, e.g. '2026-10-17' -> 'Sat'."""
    try:
        return WEEKDAYS[date.fromisoformat(day).weekday()]
    except ValueError:
        return "?"


def days_ending(day: str, n: int = 7) -> list[str]:
    """*n* consecutive day keys, oldest first, ending with *day*."""
    end = date.fromisoformat(day)
    return [(end - timedelta(days=i)).isoformat() for i in range(n - 1, -1, -1)]
