from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.config import DEFAULT_DB_PATH, load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TASKLIST_DB", raising=False)
    monkeypatch.delenv("TASKLIST_LOG_LEVEL", raising=False)

    settings = load_settings()

    assert settings.db_path == DEFAULT_DB_PATH
    assert settings.log_level == "WARNING"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKLIST_DB", str(tmp_path / "db.json"))
    monkeypatch.setenv("TASKLIST_LOG_LEVEL", " debug ")

    settings = load_settings()

    assert settings.db_path == tmp_path / "db.json"
    assert settings.log_level == "DEBUG"


def test_blank_values_use_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKLIST_DB", "  ")
    monkeypatch.setenv("TASKLIST_LOG_LEVEL", "")

    settings = load_settings()

    assert settings.db_path == DEFAULT_DB_PATH
    assert settings.log_level == "WARNING"
