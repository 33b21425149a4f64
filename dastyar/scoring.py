"""Daily score and dashboard aggregation for Dastyar.

Everything here is a pure function of a logs mapping (ISO date -> DailyLog)
and a window of dates. Scores are never stored; they are recomputed on read.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from enum import Enum
from typing import Iterable, Mapping

from dastyar.dates import day_of_month, persian_day_name, window as date_window
from dastyar.models import Dashboard, DailyLog, Dua, PrayerTiming, SeriesPoint, Totals

TIMING_POINTS = {
    PrayerTiming.EARLY: 10,
    PrayerTiming.MID: 7,
    PrayerTiming.LATE: 4,
    PrayerTiming.NONE: 0,
}

DUA_POINTS = 5

RANGES = (7, 30)


class LabelMode(str, Enum):
    WEEKDAY = "weekday"
    DAY_OF_MONTH = "day_of_month"


def score_of(log: DailyLog) -> int:
    """Sum of the three prayer timings plus 5 per completed dua."""
    return sum(TIMING_POINTS[t] for t in log.prayers.values()) + DUA_POINTS * log.dua_count()


def _log_for(logs: Mapping[str, DailyLog], d: date) -> DailyLog:
    iso = d.isoformat()
    return logs.get(iso) or DailyLog.empty(iso)


def _label(d: date, mode: LabelMode) -> str:
    if mode is LabelMode.WEEKDAY:
        return persian_day_name(d)
    return day_of_month(d)


def build_series(
    logs: Mapping[str, DailyLog],
    window: Iterable[date],
    label_mode: LabelMode = LabelMode.WEEKDAY,
) -> list[SeriesPoint]:
    """One point per date, oldest first. Missing dates count as empty days."""
    points = []
    for d in sorted(window):
        log = _log_for(logs, d)
        points.append(SeriesPoint(
            label=_label(d, LabelMode(label_mode)),
            score=score_of(log),
            prayer_count=log.prayer_count(),
            dua_count=log.dua_count(),
            date=d.isoformat(),
        ))
    return points


def totals(logs: Mapping[str, DailyLog]) -> Totals:
    """Prayer and dua totals across every stored day."""
    result = Totals()
    for log in logs.values():
        result.total_prayers += log.prayer_count()
        result.total_duas += log.dua_count()
    return result


def quality_breakdown(logs: Mapping[str, DailyLog], window: Iterable[date]) -> dict[PrayerTiming, int]:
    """Count early/mid/late prayer slots inside the window; zero buckets omitted."""
    counts: Counter[PrayerTiming] = Counter()
    for d in window:
        for timing in _log_for(logs, d).prayers.values():
            if timing is not PrayerTiming.NONE:
                counts[timing] += 1
    return {
        t: counts[t]
        for t in (PrayerTiming.EARLY, PrayerTiming.MID, PrayerTiming.LATE)
        if counts[t] > 0
    }


def dua_frequency(logs: Mapping[str, DailyLog], window: Iterable[date]) -> dict[Dua, int]:
    """How many days in the window each dua was read; unread duas omitted."""
    counts: Counter[Dua] = Counter()
    for d in window:
        counts.update(_log_for(logs, d).duas)
    return {dua: counts[dua] for dua in Dua if counts[dua] > 0}


def dashboard(logs: Mapping[str, DailyLog], days: int, today: date) -> Dashboard:
    """Series, totals and breakdowns for the trailing 7 or 30 days."""
    if days not in RANGES:
        raise ValueError(f"Range must be one of {RANGES}, got {days}")
    dates = date_window(days, today=today)
    mode = LabelMode.WEEKDAY if days == 7 else LabelMode.DAY_OF_MONTH
    return Dashboard(
        days=days,
        series=build_series(logs, dates, mode),
        totals=totals(logs),
        quality=quality_breakdown(logs, dates),
        dua_frequency=dua_frequency(logs, dates),
    )
