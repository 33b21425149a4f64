"""Tests for dastyar/models.py — daily log model and profile parsing."""

from dastyar.models import (
    DailyLog,
    Dua,
    MotivationSettings,
    Prayer,
    PrayerTiming,
    Profile,
)


def test_empty_log_has_all_slots():
    log = DailyLog.empty("2026-02-11")
    assert log.date == "2026-02-11"
    assert set(log.prayers) == set(Prayer)
    assert all(t is PrayerTiming.NONE for t in log.prayers.values())
    assert log.duas == ()
    assert log.is_empty()


def test_partial_prayers_are_filled():
    log = DailyLog(date="2026-02-11", prayers={"fajr": "early"})
    assert log.prayers[Prayer.FAJR] is PrayerTiming.EARLY
    assert log.prayers[Prayer.MAGHRIB] is PrayerTiming.NONE


def test_with_prayer_returns_new_log():
    log = DailyLog.empty("2026-02-11")
    updated = log.with_prayer(Prayer.DHUHR, PrayerTiming.MID)
    assert updated.prayers[Prayer.DHUHR] is PrayerTiming.MID
    assert log.prayers[Prayer.DHUHR] is PrayerTiming.NONE
    assert updated.prayer_count() == 1


def test_toggle_dua_twice_restores():
    log = DailyLog(date="2026-02-11", duas=(Dua.KISA, Dua.AHD))
    once = log.toggle_dua(Dua.ASHURA)
    assert Dua.ASHURA in once.duas
    twice = once.toggle_dua(Dua.ASHURA)
    assert set(twice.duas) == set(log.duas)
    assert twice == log


def test_toggle_dua_removes_present():
    log = DailyLog(date="2026-02-11", duas=(Dua.KISA,))
    assert log.toggle_dua(Dua.KISA).duas == ()


def test_duplicate_duas_collapse():
    log = DailyLog(date="2026-02-11", duas=(Dua.KISA, Dua.KISA))
    assert log.dua_count() == 1


def test_from_dict_persisted_layout():
    log = DailyLog.from_dict({
        "date": "2026-02-11",
        "prayers": {"fajr": "early", "dhuhr": "mid", "maghrib": "late"},
        "duas": ["حدیث کسا", "آل یاسین"],
    })
    assert log.prayer_count() == 3
    assert log.duas == (Dua.KISA, Dua.AL_YASIN)
    assert log.to_dict() == {
        "date": "2026-02-11",
        "prayers": {"fajr": "early", "dhuhr": "mid", "maghrib": "late"},
        "duas": ["حدیث کسا", "آل یاسین"],
    }


def test_from_dict_repairs_and_reports():
    problems: list[str] = []
    log = DailyLog.from_dict(
        {
            "date": "2026-01-01",
            "prayers": {"fajr": "sometime", "dhuhr": "late"},
            "duas": ["عاشورا", "unknown", "عاشورا"],
        },
        key="2026-02-11",
        problems=problems,
    )
    assert log.date == "2026-02-11"
    assert log.prayers[Prayer.FAJR] is PrayerTiming.NONE
    assert log.prayers[Prayer.DHUHR] is PrayerTiming.LATE
    assert log.duas == (Dua.ASHURA,)
    assert len(problems) == 4


def test_from_dict_clean_has_no_problems():
    problems: list[str] = []
    DailyLog.from_dict({"date": "2026-02-11"}, key="2026-02-11", problems=problems)
    assert problems == []


def test_profile_from_dict():
    profile = Profile.from_dict({
        "timezone": "Asia/Tehran",
        "motivation": {"model": "m", "timeout": 3, "api_key_env": "K"},
    })
    assert profile.timezone == "Asia/Tehran"
    assert profile.motivation.model == "m"
    assert profile.motivation.timeout == 3.0
    assert profile.motivation.api_key_env == "K"


def test_profile_defaults():
    profile = Profile.from_dict({})
    assert profile.timezone == "UTC"
    assert profile.motivation == MotivationSettings()
    assert Profile.from_dict(profile.to_dict()) == profile


def test_api_key_falls_back_to_generic_env(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("API_KEY", "abc")
    assert MotivationSettings().api_key() == "abc"
    monkeypatch.setenv("GEMINI_API_KEY", "xyz")
    assert MotivationSettings().api_key() == "xyz"


def test_logs_are_hashable_and_consistent_with_equality():
    a = DailyLog(date="2026-02-11", prayers={"fajr": "early"}, duas=(Dua.KISA,))
    b = DailyLog.empty("2026-02-11").with_prayer(Prayer.FAJR, PrayerTiming.EARLY).toggle_dua(Dua.KISA)
    c = a.with_prayer(Prayer.MAGHRIB, PrayerTiming.LATE)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b, c}) == 2
