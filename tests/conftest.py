"""Shared test fixtures for Dastyar tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with a profile and a couple of logs."""
    root = tmp_path / "workspace"
    (root / "data").mkdir(parents=True)

    profile = {
        "timezone": "Asia/Tehran",
        "motivation": {"model": "gemini-test", "timeout": 2, "api_key_env": "DASTYAR_TEST_KEY"},
    }
    (root / "profile.yaml").write_text(
        yaml.dump(profile, default_flow_style=False), encoding="utf-8"
    )

    logs = {
        "2026-02-09": {
            "date": "2026-02-09",
            "prayers": {"fajr": "early", "dhuhr": "mid", "maghrib": "none"},
            "duas": ["عاشورا", "دعای عهد"],
        },
        "2026-02-10": {
            "date": "2026-02-10",
            "prayers": {"fajr": "late", "dhuhr": "late", "maghrib": "late"},
            "duas": [],
        },
    }
    (root / "data" / "logs.json").write_text(
        json.dumps(logs, indent=2, ensure_ascii=False), encoding="utf-8"
    )

    os.environ["DASTYAR_ROOT"] = str(root)
    yield root
    # Cleanup
    if "DASTYAR_ROOT" in os.environ:
        del os.environ["DASTYAR_ROOT"]
