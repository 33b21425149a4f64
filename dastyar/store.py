"""Persistent log store for Dastyar.

The store is the single writable source of truth: one JSON blob mapping ISO
dates to daily logs. Every mutation rewrites the whole mapping.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from dastyar.dates import parse_iso
from dastyar.fileio import read_json, write_json_atomic
from dastyar.models import DailyLog
from dastyar.workspace import logs_path, workspace_root

logger = logging.getLogger("dastyar.store")


def parse_logs(data: object) -> dict[str, DailyLog]:
    """Turn a persisted blob into a logs mapping, repairing entry by entry.

    Entries whose key is not an ISO date, or whose value is not an object,
    are dropped. Everything else is kept with its bad fields repaired.
    """
    if not isinstance(data, dict):
        logger.warning("Stored logs are not a JSON object; starting empty")
        return {}

    logs: dict[str, DailyLog] = {}
    for key, raw in data.items():
        try:
            parse_iso(key)
        except ValueError:
            logger.warning("Dropping entry with invalid date key %r", key)
            continue
        if not isinstance(raw, dict):
            logger.warning("Dropping entry %s: not an object", key)
            continue
        problems: list[str] = []
        logs[key] = DailyLog.from_dict(raw, key=key, problems=problems)
        for problem in problems:
            logger.warning("Repaired entry %s: %s", key, problem)
    return logs


class LogStore:
    """Load, save and clear daily logs backed by a single JSON file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else logs_path(workspace_root())
        self._logs: dict[str, DailyLog] = {}

    @classmethod
    def open(cls, root: Path | None = None) -> LogStore:
        store = cls(logs_path(root))
        store.load()
        return store

    def load(self) -> dict[str, DailyLog]:
        """Read the persisted mapping; anything unreadable means an empty store."""
        try:
            data = read_json(self.path)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, starting empty: %s", self.path, e)
            data = {}
        self._logs = parse_logs(data)
        logger.debug("Loaded %d logs from %s", len(self._logs), self.path)
        return self.snapshot()

    def save(self, log: DailyLog) -> dict[str, DailyLog]:
        """Insert or overwrite the entry for ``log.date`` and persist everything."""
        parse_iso(log.date)
        updated = {**self._logs, log.date: log}
        self._persist(updated)
        self._logs = updated
        return self.snapshot()

    def clear(self) -> dict[str, DailyLog]:
        self._persist({})
        self._logs = {}
        logger.info("Cleared all logs in %s", self.path)
        return self.snapshot()

    def get(self, day: str) -> DailyLog:
        """Stored log for *day*, or the untouched default."""
        return self._logs.get(day) or DailyLog.empty(day)

    def snapshot(self) -> dict[str, DailyLog]:
        return dict(self._logs)

    def _persist(self, logs: dict[str, DailyLog]) -> None:
        write_json_atomic(self.path, {k: v.to_dict() for k, v in sorted(logs.items())})
