"""Typed models for the Dastyar data model.

All models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any


# ── Vocabularies ──────────────────────────────────────────────


class PrayerTiming(str, Enum):
    """How promptly a prayer was performed."""

    NONE = "none"
    EARLY = "early"
    MID = "mid"
    LATE = "late"


class Prayer(str, Enum):
    FAJR = "fajr"
    DHUHR = "dhuhr"
    MAGHRIB = "maghrib"


class Dua(str, Enum):
    """The closed set of devotional readings. Values are the stored names."""

    ASHURA = "عاشورا"
    AL_YASIN = "آل یاسین"
    AMIN_ALLAH = "امین الله"
    SALAWAT_ZAHRA = "صلوات حضرت زهرا"
    AHD = "دعای عهد"
    KISA = "حدیث کسا"


PRAYER_LABELS = {
    Prayer.FAJR: "نماز صبح",
    Prayer.DHUHR: "نماز ظهر و عصر",
    Prayer.MAGHRIB: "نماز مغرب و عشا",
}

TIMING_LABELS = {
    PrayerTiming.NONE: "نخوانده",
    PrayerTiming.EARLY: "اول وقت",
    PrayerTiming.MID: "میان وقت",
    PrayerTiming.LATE: "آخر وقت",
}


# ── Daily log ─────────────────────────────────────────────────


def _empty_prayers() -> dict[Prayer, PrayerTiming]:
    return {p: PrayerTiming.NONE for p in Prayer}


@dataclass(frozen=True)
class DailyLog:
    """One day's prayers and completed duas, keyed by ISO date."""

    date: str
    prayers: dict[Prayer, PrayerTiming] = field(default_factory=_empty_prayers)
    duas: tuple[Dua, ...] = ()

    def __post_init__(self) -> None:
        # Every slot is always present; duas are distinct.
        prayers = _empty_prayers()
        prayers.update({Prayer(k): PrayerTiming(v) for k, v in self.prayers.items()})
        object.__setattr__(self, "prayers", prayers)
        object.__setattr__(self, "duas", tuple(dict.fromkeys(Dua(d) for d in self.duas)))

    def __hash__(self) -> int:
        return hash((self.date, tuple(self.prayers[p] for p in Prayer), self.duas))

    @classmethod
    def empty(cls, day: str | date) -> DailyLog:
        return cls(date=day.isoformat() if isinstance(day, date) else day)

    def with_prayer(self, prayer: Prayer, timing: PrayerTiming) -> DailyLog:
        prayers = dict(self.prayers)
        prayers[Prayer(prayer)] = PrayerTiming(timing)
        return replace(self, prayers=prayers)

    def toggle_dua(self, dua: Dua) -> DailyLog:
        """Remove *dua* if it was completed, otherwise append it."""
        dua = Dua(dua)
        if dua in self.duas:
            return replace(self, duas=tuple(d for d in self.duas if d is not dua))
        return replace(self, duas=self.duas + (dua,))

    def prayer_count(self) -> int:
        return sum(1 for t in self.prayers.values() if t is not PrayerTiming.NONE)

    def dua_count(self) -> int:
        return len(self.duas)

    def is_empty(self) -> bool:
        return self.prayer_count() == 0 and self.dua_count() == 0

    @classmethod
    def from_dict(
        cls,
        d: dict[str, Any],
        key: str | None = None,
        problems: list[str] | None = None,
    ) -> DailyLog:
        """Build a log from its persisted form, repairing what it can.

        Unknown timings become ``none``, unknown or repeated duas are dropped,
        and when *key* is given it wins over the stored ``date``. Each repair
        is described in *problems* if a list is passed.
        """
        if problems is None:
            problems = []
        day = str(d.get("date", "") or "")
        if key is not None and day != key:
            problems.append(f"date {day!r} does not match key {key!r}")
            day = key

        raw_prayers = d.get("prayers") or {}
        if not isinstance(raw_prayers, dict):
            problems.append(f"prayers is not a mapping: {raw_prayers!r}")
            raw_prayers = {}
        prayers = _empty_prayers()
        for slot in Prayer:
            value = raw_prayers.get(slot.value, PrayerTiming.NONE.value)
            try:
                prayers[slot] = PrayerTiming(value)
            except ValueError:
                problems.append(f"unknown timing {value!r} for {slot.value}")

        raw_duas = d.get("duas") or []
        if not isinstance(raw_duas, list):
            problems.append(f"duas is not a list: {raw_duas!r}")
            raw_duas = []
        duas: list[Dua] = []
        for name in raw_duas:
            try:
                dua = Dua(name)
            except ValueError:
                problems.append(f"unknown dua {name!r}")
                continue
            if dua in duas:
                problems.append(f"duplicate dua {name!r}")
                continue
            duas.append(dua)

        return cls(date=day, prayers=prayers, duas=tuple(duas))

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "prayers": {p.value: self.prayers[p].value for p in Prayer},
            "duas": [d.value for d in self.duas],
        }


# ── Derived values ────────────────────────────────────────────


@dataclass
class SeriesPoint:
    """One date on a dashboard chart."""

    label: str
    score: int = 0
    prayer_count: int = 0
    dua_count: int = 0
    date: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "label": self.label,
            "score": self.score,
            "prayerCount": self.prayer_count,
            "duaCount": self.dua_count,
        }


@dataclass
class Totals:
    total_prayers: int = 0
    total_duas: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {"totalPrayers": self.total_prayers, "totalDuas": self.total_duas}


@dataclass
class Dashboard:
    """Everything the dashboard shows for one range."""

    days: int
    series: list[SeriesPoint] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)
    quality: dict[PrayerTiming, int] = field(default_factory=dict)
    dua_frequency: dict[Dua, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": self.days,
            "series": [p.to_dict() for p in self.series],
            "totals": self.totals.to_dict(),
            "qualityBreakdown": {t.value: n for t, n in self.quality.items()},
            "duaFrequency": {d.value: n for d, n in self.dua_frequency.items()},
        }


# ── Profile ───────────────────────────────────────────────────


@dataclass
class MotivationSettings:
    model: str = "gemini-3-flash-preview"
    timeout: float = 10.0
    api_key_env: str = "GEMINI_API_KEY"

    def api_key(self) -> str:
        return os.environ.get(self.api_key_env) or os.environ.get("API_KEY", "")

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> MotivationSettings:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            model=str(d.get("model", cls.model)),
            timeout=float(d.get("timeout", cls.timeout)),
            api_key_env=str(d.get("api_key_env", cls.api_key_env)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "timeout": self.timeout, "api_key_env": self.api_key_env}


@dataclass
class Profile:
    timezone: str = "UTC"
    motivation: MotivationSettings = field(default_factory=MotivationSettings)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Profile:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            timezone=str(d.get("timezone", "UTC")),
            motivation=MotivationSettings.from_dict(d.get("motivation") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"timezone": self.timezone, "motivation": self.motivation.to_dict()}
