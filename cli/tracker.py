#!/usr/bin/env python3
"""Dastyar TUI — daily prayer and dua tracker powered by Textual."""

from __future__ import annotations

import logging
import sys
from datetime import date

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import (
    Checkbox,
    DataTable,
    Footer,
    Header,
    Label,
    Select,
    Sparkline,
    Static,
)

from dastyar import (
    AWAITING,
    PRAYER_LABELS,
    TIMING_LABELS,
    Dua,
    LogStore,
    MotivationFeed,
    Prayer,
    PrayerTiming,
    dashboard,
    ensure_workspace,
    load_profile,
    motivation_for_today,
    score_of,
    shift_date,
    today_date,
    workspace_root,
)

logger = logging.getLogger("dastyar.tui")


CSS = """
Screen {
    layout: vertical;
}

#motivation {
    height: auto;
    padding: 1 2;
    margin: 0 0 1 0;
    border: tall $accent;
}

#date-bar {
    height: auto;
    padding: 0 2;
}

#entry-pane {
    padding: 1 2;
}

.prayer-row {
    height: auto;
}

.prayer-label {
    width: 24;
    padding: 1 0;
}

.section-title {
    text-style: bold;
    margin: 1 0 0 0;
}

#dashboard-pane {
    padding: 1 2;
    display: none;
}

#score-sparkline {
    height: 4;
    margin: 1 0;
}

#series-table {
    height: 1fr;
}
"""


# ── Custom widgets ─────────────────────────────────────────────


class PrayerRow(Horizontal):
    """One prayer slot: label + timing select."""

    def __init__(self, prayer: Prayer, timing: PrayerTiming, **kwargs) -> None:
        super().__init__(**kwargs)
        self.prayer = prayer
        self.timing = timing

    def compose(self) -> ComposeResult:
        yield Label(PRAYER_LABELS[self.prayer], classes="prayer-label")
        yield Select(
            [(TIMING_LABELS[t], t) for t in PrayerTiming],
            value=self.timing,
            allow_blank=False,
            id=f"timing-{self.prayer.value}",
        )

    def on_mount(self) -> None:
        self.add_class("prayer-row")


# ── Main app ───────────────────────────────────────────────────


class DastyarApp(App):
    """Dastyar — daily devotion tracker."""

    TITLE = "دستیار بندگی"
    CSS = CSS
    AUTO_FOCUS = None

    BINDINGS = [
        Binding("left", "prev_day", "Prev day"),
        Binding("right", "next_day", "Next day"),
        Binding("s", "save_log", "Save"),
        Binding("d", "toggle_dashboard", "Dashboard"),
        Binding("r", "toggle_range", "7/30"),
        Binding("x", "clear_all", "Clear all"),
        Binding("q", "quit", "Quit"),
    ]

    current_view: reactive[str] = reactive("daily")

    def __init__(self) -> None:
        super().__init__()
        self._root = workspace_root()
        self._store = LogStore.open(self._root)
        self._today = today_date(self._root)
        self._selected = self._today
        self._local = self._store.get(self._selected.isoformat())
        self._range = 7
        self._confirm_clear = False
        self._feed = MotivationFeed()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="motivation")
        yield Vertical(
            Horizontal(Label(id="date-label"), Label(id="score-label"), id="date-bar"),
            VerticalScroll(
                Label("نمازها", classes="section-title"),
                *[PrayerRow(p, self._local.prayers[p]) for p in Prayer],
                Label("دعاها", classes="section-title"),
                *[
                    Checkbox(d.value, value=d in self._local.duas, id=f"dua-{i}")
                    for i, d in enumerate(Dua)
                ],
                id="entry-pane",
            ),
            id="daily-view",
        )
        yield VerticalScroll(
            Static(id="totals"),
            Sparkline([], id="score-sparkline"),
            Static(id="breakdown"),
            DataTable(id="series-table"),
            id="dashboard-pane",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#series-table", DataTable).add_columns("Day", "Score", "Prayers", "Duas")
        self._show_log()
        self._refresh_dashboard()
        self._refresh_motivation()

    # ── Daily entry ────────────────────────────────────────────

    def _show_log(self) -> None:
        """Load the selected day's log into the form."""
        self._local = self._store.get(self._selected.isoformat())
        for p in Prayer:
            self.query_one(f"#timing-{p.value}", Select).value = self._local.prayers[p]
        for i, d in enumerate(Dua):
            self.query_one(f"#dua-{i}", Checkbox).value = d in self._local.duas
        self._update_header()

    def _update_header(self) -> None:
        suffix = " (امروز)" if self._selected == self._today else ""
        self.query_one("#date-label", Label).update(f"{self._selected.isoformat()}{suffix}  ")
        self.query_one("#score-label", Label).update(f"امتیاز: {score_of(self._local)}")

    @on(Select.Changed)
    def _on_timing_change(self, event: Select.Changed) -> None:
        widget_id = event.select.id or ""
        if not widget_id.startswith("timing-") or event.value is Select.BLANK:
            return
        prayer = Prayer(widget_id.removeprefix("timing-"))
        self._local = self._local.with_prayer(prayer, PrayerTiming(event.value))
        self._update_header()

    @on(Checkbox.Changed)
    def _on_dua_toggle(self, event: Checkbox.Changed) -> None:
        widget_id = event.checkbox.id or ""
        dua = list(Dua)[int(widget_id.removeprefix("dua-"))]
        if event.value != (dua in self._local.duas):
            self._local = self._local.toggle_dua(dua)
        self._update_header()

    def _current_today(self) -> date:
        """Re-read today so a session left open past midnight moves with the clock."""
        self._today = today_date(self._root)
        return self._today

    def action_prev_day(self) -> None:
        self._select_date(shift_date(self._selected, -1, self._current_today()))

    def action_next_day(self) -> None:
        self._select_date(shift_date(self._selected, 1, self._current_today()))

    def _select_date(self, day: date) -> None:
        if day == self._selected:
            return
        self._selected = day
        self._show_log()

    def action_save_log(self) -> None:
        try:
            self._store.save(self._local)
        except OSError as e:
            logger.error("Save failed: %s", e)
            self.notify(f"Could not save: {e}", title="Error", severity="error")
            return
        self.notify("ذخیره شد", title=self._local.date, severity="information")
        self._refresh_dashboard()
        if self._local.date == self._current_today().isoformat():
            self._refresh_motivation()

    def action_clear_all(self) -> None:
        if not self._confirm_clear:
            self._confirm_clear = True
            self.notify("Press x again to delete all logs.", severity="warning")
            return
        self._confirm_clear = False
        try:
            self._store.clear()
        except OSError as e:
            self.notify(f"Could not clear: {e}", title="Error", severity="error")
            return
        self.notify("داده‌ها با موفقیت پاک شدند.", severity="information")
        self._show_log()
        self._refresh_dashboard()
        self._refresh_motivation()

    # ── Dashboard ──────────────────────────────────────────────

    def action_toggle_dashboard(self) -> None:
        self.current_view = "dashboard" if self.current_view == "daily" else "daily"

    def watch_current_view(self, view: str) -> None:
        try:
            self.query_one("#daily-view").display = view == "daily"
            self.query_one("#dashboard-pane").display = view == "dashboard"
        except NoMatches:
            # Not composed yet.
            pass

    def action_toggle_range(self) -> None:
        self._range = 30 if self._range == 7 else 7
        self._refresh_dashboard()

    def _refresh_dashboard(self) -> None:
        summary = dashboard(self._store.snapshot(), self._range, self._current_today())
        self.query_one("#totals", Static).update(
            f"مجموع کل | نماز ثبت شده: {summary.totals.total_prayers}   "
            f"دعای قرائت شده: {summary.totals.total_duas}\n"
            f"{self._range} روز اخیر"
        )
        self.query_one("#score-sparkline", Sparkline).data = [p.score for p in summary.series]

        lines = [f"{TIMING_LABELS[t]}: {n}" for t, n in summary.quality.items()]
        lines += [f"{d.value}: {n}" for d, n in summary.dua_frequency.items()]
        self.query_one("#breakdown", Static).update("\n".join(lines) or "(no entries yet)")

        table = self.query_one("#series-table", DataTable)
        table.clear()
        for p in summary.series:
            table.add_row(p.label, str(p.score), str(p.prayer_count), str(p.dua_count))

    # ── Motivation ─────────────────────────────────────────────

    @work(thread=True)
    def _refresh_motivation(self) -> None:
        ticket = self._feed.request()
        logs = self._store.snapshot()
        text = motivation_for_today(logs, today_date(self._root), load_profile(self._root).motivation)
        if self._feed.resolve(ticket, text):
            self.call_from_thread(self._show_motivation, text)

    def _show_motivation(self, text: str) -> None:
        banner = text if text == AWAITING else f"« {text} »"
        self.query_one("#motivation", Static).update(banner)


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    logging.basicConfig(
        filename=str(ensure_workspace() / "dastyar.log"),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        app = DastyarApp()
    except OSError as e:
        print(f"Workspace not usable: {e}")
        print("Set DASTYAR_ROOT to a writable directory.")
        sys.exit(1)
    app.run()


if __name__ == "__main__":
    main()
