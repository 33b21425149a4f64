"""Tests for dastyar/workspace.py — root, profile and timezone."""

from zoneinfo import ZoneInfo

from dastyar.workspace import (
    ensure_workspace,
    get_user_timezone,
    load_profile,
    logs_path,
    profile_path,
    today_str,
    workspace_root,
)


def test_workspace_root_from_env(workspace):
    assert workspace_root() == workspace.resolve()
    assert logs_path() == workspace.resolve() / "data" / "logs.json"


def test_profile_loaded(workspace):
    profile = load_profile(workspace)
    assert profile.timezone == "Asia/Tehran"
    assert profile.motivation.model == "gemini-test"
    assert get_user_timezone(workspace) == ZoneInfo("Asia/Tehran")


def test_unknown_timezone_falls_back(workspace):
    profile_path(workspace).write_text("timezone: Mars/Olympus\n", encoding="utf-8")
    assert get_user_timezone(workspace) == ZoneInfo("UTC")


def test_broken_profile_uses_defaults(workspace):
    profile_path(workspace).write_text("timezone: [unclosed\n", encoding="utf-8")
    assert load_profile(workspace).timezone == "UTC"


def test_today_str_format(workspace):
    s = today_str(workspace)
    assert len(s) == 10 and s[4] == "-" and s[7] == "-"


def test_ensure_workspace_creates_profile(tmp_path):
    root = tmp_path / "fresh"
    ensure_workspace(root)
    assert profile_path(root).exists()
    assert logs_path(root).parent.is_dir()
    assert load_profile(root).timezone == "UTC"
