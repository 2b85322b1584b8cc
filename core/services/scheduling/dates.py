from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union

DateLike = Union[date, str]


def as_date(value: Optional[DateLike]) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Unsupported date value: {value!r}")


def add_days(value: date, days: int) -> date:
    """Calendar-day shift; negative ``days`` moves backwards."""
    return value + timedelta(days=int(days))


def diff_days(start: date, end: date) -> int:
    """Signed calendar days from ``start`` to ``end``."""
    return (end - start).days


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = ["DateLike", "as_date", "add_days", "diff_days", "utc_today", "utc_now"]
