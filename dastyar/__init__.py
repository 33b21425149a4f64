"""Dastyar core library — daily logs, scoring and storage.

Public API re-exports for convenient imports:
    from dastyar import LogStore, score_of, window, ...
"""

# Models
from dastyar.models import (
    PrayerTiming,
    Prayer,
    Dua,
    PRAYER_LABELS,
    TIMING_LABELS,
    DailyLog,
    SeriesPoint,
    Totals,
    Dashboard,
    MotivationSettings,
    Profile,
)

# File I/O
from dastyar.fileio import (
    read_json,
    read_yaml,
    write_json_atomic,
    write_yaml_atomic,
)

# Workspace & paths
from dastyar.workspace import (
    workspace_root,
    logs_path,
    profile_path,
    load_profile,
    get_user_timezone,
    today_date,
    today_str,
    ensure_workspace,
)

# Dates
from dastyar.dates import (
    window,
    shift_date,
    persian_day_name,
    day_of_month,
    parse_iso,
)

# Scoring
from dastyar.scoring import (
    LabelMode,
    score_of,
    build_series,
    totals,
    quality_breakdown,
    dua_frequency,
    dashboard,
)

# Store
from dastyar.store import LogStore, parse_logs

# Motivation
from dastyar.motivation import (
    AWAITING,
    FALLBACK,
    MotivationFeed,
    fetch_daily_motivation,
    motivation_for_today,
)
