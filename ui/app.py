from __future__ import annotations

import logging
import os
import secrets
from typing import Any

from fastapi import FastAPI, Body, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from dastyar import (
    AWAITING,
    PRAYER_LABELS,
    TIMING_LABELS,
    DailyLog,
    LogStore,
    Prayer,
    dashboard,
    load_profile,
    motivation_for_today,
    parse_iso,
    score_of,
    today_date,
    workspace_root,
)

logger = logging.getLogger("dastyar.ui")


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="Dastyar", version="1.0.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("DASTYAR_USERNAME", "")
    expected_password = os.environ.get("DASTYAR_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    ok_user = secrets.compare_digest(credentials.username, expected_username)
    ok_pass = secrets.compare_digest(credentials.password, expected_password)
    if not (ok_user and ok_pass):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


def _store() -> LogStore:
    return LogStore.open(workspace_root())


def _persist(action) -> dict[str, DailyLog]:
    try:
        return action()
    except OSError as e:
        logger.error("Could not write logs: %s", e)
        raise HTTPException(status_code=500, detail=f"Could not write logs: {e}")


# ── Routes ────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(username: str = Depends(get_current_user)) -> HTMLResponse:
    root = workspace_root()
    logs = LogStore.open(root).snapshot()
    today = today_date(root)
    log = logs.get(today.isoformat()) or DailyLog.empty(today)
    week = dashboard(logs, 7, today)

    prayer_rows = "".join(
        f"<li>{_escape(PRAYER_LABELS[p])}: {_escape(TIMING_LABELS[log.prayers[p]])}</li>"
        for p in Prayer
    )
    dua_rows = "".join(f"<li>{_escape(d.value)}</li>" for d in log.duas) or "<li>—</li>"
    series_rows = "".join(
        f"<tr><td>{_escape(pt.label)}</td><td>{pt.score}</td>"
        f"<td>{pt.prayer_count}</td><td>{pt.dua_count}</td></tr>"
        for pt in week.series
    )

    html = f"""<!doctype html>
<html lang="fa" dir="rtl">
<head><meta charset="utf-8"><title>دستیار بندگی</title></head>
<body>
<h1>دستیار بندگی</h1>
<h2>{_escape(today.isoformat())} — امتیاز: {score_of(log)}</h2>
<ul>{prayer_rows}</ul>
<h3>دعاها</h3>
<ul>{dua_rows}</ul>
<h3>مجموع کل</h3>
<p>نماز ثبت شده: {week.totals.total_prayers}، دعای قرائت شده: {week.totals.total_duas}</p>
<h3>۷ روز اخیر</h3>
<table>
<tr><th>روز</th><th>امتیاز</th><th>نماز</th><th>دعا</th></tr>
{series_rows}
</table>
</body>
</html>"""
    return HTMLResponse(html)


@app.get("/api/logs")
def api_list_logs(username: str = Depends(get_current_user)) -> dict[str, Any]:
    logs = _store().snapshot()
    return {"logs": {k: v.to_dict() for k, v in sorted(logs.items())}}


@app.get("/api/logs/{day}")
def api_get_log(day: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    try:
        parse_iso(day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    log = _store().get(day)
    return {"log": log.to_dict(), "score": score_of(log)}


@app.post("/api/logs")
def api_save_log(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Save one day's log. Unknown timings or duas are rejected, not repaired."""
    day = str(payload.get("date", "") or "")
    try:
        parse_iso(day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    problems: list[str] = []
    log = DailyLog.from_dict(payload, key=day, problems=problems)
    if problems:
        raise HTTPException(status_code=400, detail="; ".join(problems))

    store = _store()
    logs = _persist(lambda: store.save(log))
    return {"ok": True, "log": log.to_dict(), "score": score_of(log), "count": len(logs)}


@app.delete("/api/logs")
def api_clear_logs(username: str = Depends(get_current_user)) -> dict[str, Any]:
    store = _store()
    _persist(store.clear)
    return {"ok": True}


@app.get("/api/dashboard")
def api_dashboard(
    range_days: int = Query(7, alias="range"),
    username: str = Depends(get_current_user),
) -> dict[str, Any]:
    root = workspace_root()
    try:
        summary = dashboard(LogStore.open(root).snapshot(), range_days, today_date(root))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return summary.to_dict()


@app.get("/api/motivation")
def api_motivation(username: str = Depends(get_current_user)) -> dict[str, Any]:
    root = workspace_root()
    logs = LogStore.open(root).snapshot()
    text = motivation_for_today(logs, today_date(root), load_profile(root).motivation)
    return {"text": text, "awaiting": text == AWAITING}
