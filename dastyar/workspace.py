"""Workspace root, timezone, profile and path helpers for Dastyar."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dastyar.fileio import read_yaml, write_yaml_atomic
from dastyar.models import Profile

logger = logging.getLogger("dastyar.workspace")


def workspace_root() -> Path:
    """Get the workspace root directory (holds profile.yaml and data/)."""
    return Path(
        os.environ.get("DASTYAR_ROOT", str(Path.home() / "dastyar"))
    ).expanduser().resolve()


# ── Path helpers ──────────────────────────────────────────────

def logs_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "data" / "logs.json"


def profile_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "profile.yaml"


# ── Profile & time ────────────────────────────────────────────

def load_profile(root: Path | None = None) -> Profile:
    """Load profile.yaml, falling back to defaults when missing or broken."""
    if root is None:
        root = workspace_root()
    try:
        return Profile.from_dict(read_yaml(profile_path(root)))
    except Exception as e:
        logger.warning("Ignoring unreadable profile %s: %s", profile_path(root), e)
        return Profile()


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from profile.yaml, defaulting to UTC."""
    tz_name = load_profile(root).timezone
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", tz_name)
        return ZoneInfo("UTC")


def today_date(root: Path | None = None) -> date:
    """Today's calendar date in the user's timezone."""
    return datetime.now(get_user_timezone(root)).date()


def today_str(root: Path | None = None) -> str:
    """Get today's date string (YYYY-MM-DD) in user's timezone."""
    return today_date(root).isoformat()


def ensure_workspace(root: Path | None = None) -> Path:
    """Create the workspace with a default profile if it does not exist yet."""
    if root is None:
        root = workspace_root()
    logs_path(root).parent.mkdir(parents=True, exist_ok=True)
    if not profile_path(root).exists():
        write_yaml_atomic(profile_path(root), Profile().to_dict())
        logger.info("Created default profile at %s", profile_path(root))
    return root
