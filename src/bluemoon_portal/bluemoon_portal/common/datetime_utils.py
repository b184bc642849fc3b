from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Ngày không hợp lệ (YYYY-MM-DD)")


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort date from server values (date, datetime or ISO text).

    Returns None when the value cannot be read; the first 10 characters of an
    ISO datetime string are used.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return datetime.strptime(value[:10], "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return date.today()


def now_local() -> datetime:
    return datetime.now()


def month_window(end: date, months: int) -> list[tuple[int, int]]:
    """Return ``months`` (year, month) pairs ending at ``end``, oldest first."""

    pairs: list[tuple[int, int]] = []
    year, month = end.year, end.month
    for _ in range(max(months, 0)):
        pairs.append((year, month))
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    pairs.reverse()
    return pairs
