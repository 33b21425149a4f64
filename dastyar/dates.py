"""Calendar windows and date labels for Dastyar."""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

from dastyar.workspace import today_date

# date.weekday(): Monday == 0
PERSIAN_DAY_NAMES = [
    "دوشنبه",
    "سه‌شنبه",
    "چهارشنبه",
    "پنجشنبه",
    "جمعه",
    "شنبه",
    "یکشنبه",
]


def window(days: int, today: date | None = None, root: Path | None = None) -> list[date]:
    """Return *days* consecutive dates, today first, going backward.

    Today is read once, up front, so a call that straddles midnight still
    yields one consistent run of dates.
    """
    if days <= 0:
        raise ValueError(f"Window length must be positive, got {days}")
    if today is None:
        today = today_date(root)
    return [today - timedelta(days=i) for i in range(days)]


def shift_date(current: date, offset: int, today: date) -> date:
    """Move the selected day by *offset* days, never past *today*."""
    return min(current + timedelta(days=offset), today)


def persian_day_name(d: date) -> str:
    return PERSIAN_DAY_NAMES[d.weekday()]


def day_of_month(d: date) -> str:
    return f"{d.day:02d}"


def parse_iso(value: str) -> date:
    """Parse a strict YYYY-MM-DD string."""
    parsed = date.fromisoformat(value)
    if parsed.isoformat() != value:
        raise ValueError(f"Not an ISO date: {value!r}")
    return parsed
