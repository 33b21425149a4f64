"""Motivational message for today's tallies.

Asks Gemini for one short encouraging sentence. The remote call never raises
to the caller: every failure is logged and replaced with a fixed fallback.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Mapping

import requests

from dastyar.models import DailyLog, MotivationSettings

logger = logging.getLogger("dastyar.motivation")

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

SYSTEM_INSTRUCTION = "You are a spiritual mentor focusing on Islamic ethics and encouragement."

FALLBACK = "در مسیر بندگی مستدام باشید."
EMPTY_FALLBACK = "خداوند پشتیبان شماست."
AWAITING = "منتظر ثبت بندگی شما هستیم..."

MAX_OUTPUT_TOKENS = 60


def build_prompt(prayer_count: int, dua_count: int) -> str:
    return (
        f"با توجه به اینکه کاربر امروز {prayer_count} وعده نماز و {dua_count} دعا خوانده است، "
        "یک جمله کوتاه، زیبا و انگیزشی مذهبی به زبان فارسی برای او بنویس "
        "که او را به بندگی بیشتر تشویق کند. حداکثر ۱۰ کلمه باشد."
    )


def _extract_text(payload: dict[str, Any]) -> str:
    """Pull the generated text out of a generateContent response."""
    candidates = payload.get("candidates") or []
    if not isinstance(candidates, list):
        raise ValueError(f"candidates is not a list: {candidates!r}")
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    if not isinstance(parts, list):
        raise ValueError(f"parts is not a list: {parts!r}")
    return "".join(str(p.get("text", "")) for p in parts).strip()


def fetch_daily_motivation(
    prayer_count: int,
    dua_count: int,
    settings: MotivationSettings | None = None,
) -> str:
    """One short encouraging sentence, or FALLBACK if anything goes wrong."""
    if settings is None:
        settings = MotivationSettings()
    api_key = settings.api_key()
    if not api_key:
        logger.warning("No API key in %s; using fallback motivation", settings.api_key_env)
        return FALLBACK

    body = {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"parts": [{"text": build_prompt(prayer_count, dua_count)}]}],
        "generationConfig": {"maxOutputTokens": MAX_OUTPUT_TOKENS},
    }
    try:
        resp = requests.post(
            GEMINI_URL.format(model=settings.model),
            json=body,
            headers={"x-goog-api-key": api_key},
            timeout=settings.timeout,
        )
        resp.raise_for_status()
        text = _extract_text(resp.json())
    except requests.RequestException as e:
        logger.warning("Motivation request failed: %s", e)
        return FALLBACK
    except (ValueError, LookupError, AttributeError, TypeError) as e:
        logger.warning("Malformed motivation response: %s", e)
        return FALLBACK

    return text or EMPTY_FALLBACK


def motivation_for_today(
    logs: Mapping[str, DailyLog],
    today: date,
    settings: MotivationSettings | None = None,
) -> str:
    """Motivation for today's log, or the placeholder when nothing is logged."""
    log = logs.get(today.isoformat())
    if log is None:
        return AWAITING
    return fetch_daily_motivation(log.prayer_count(), log.dua_count(), settings)


class MotivationFeed:
    """Holds the current motivation text and ignores stale responses.

    Each fetch takes a ticket from :meth:`request`. A response is applied only
    if no newer ticket has already been applied, so a slow early request can
    never overwrite the answer to a later one.
    """

    def __init__(self, initial: str = "") -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0
        self.text = initial

    def request(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def resolve(self, ticket: int, text: str) -> bool:
        """Apply *text* for *ticket*; returns False when it arrived too late."""
        with self._lock:
            if ticket <= self._applied:
                logger.debug("Discarding stale motivation for ticket %d", ticket)
                return False
            self._applied = ticket
            self.text = text
            return True

    def refresh(
        self,
        logs: Mapping[str, DailyLog],
        today: date,
        settings: MotivationSettings | None = None,
    ) -> str:
        """Fetch and apply in one go; returns whatever text is current afterwards."""
        ticket = self.request()
        self.resolve(ticket, motivation_for_today(logs, today, settings))
        return self.text
