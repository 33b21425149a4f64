"""Tests for cli/tracker.py — the TUI keeps up with the calendar."""

import asyncio
from datetime import date

from textual.widgets import DataTable

from cli import tracker
from cli.tracker import DastyarApp
from dastyar.dates import persian_day_name


def _last_label(table: DataTable) -> str:
    return table.get_row_at(table.row_count - 1)[0]


def test_dashboard_and_navigation_follow_midnight(workspace, monkeypatch):
    monkeypatch.delenv("DASTYAR_TEST_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    clock = {"today": date(2026, 2, 10)}
    monkeypatch.setattr(tracker, "today_date", lambda root=None: clock["today"])

    async def run() -> None:
        app = DastyarApp()
        async with app.run_test() as pilot:
            await pilot.pause()
            table = app.query_one("#series-table", DataTable)
            assert table.row_count == 7
            assert _last_label(table) == persian_day_name(date(2026, 2, 10))

            # Clock rolls over while the app stays open.
            clock["today"] = date(2026, 2, 11)
            await pilot.press("r")
            await pilot.pause()
            assert table.row_count == 30
            assert _last_label(table) == "11"

            await pilot.press("right")
            await pilot.pause()
            assert app._selected == date(2026, 2, 11)

            await pilot.press("right")
            await pilot.pause()
            assert app._selected == date(2026, 2, 11)

    asyncio.run(run())
