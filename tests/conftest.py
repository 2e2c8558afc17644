from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from todocli.db import SQLiteRepository
from todocli.settings import Settings, get_settings


class StepClock:
    """Deterministic clock: each call is one second after the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture()
def db_path(tmp_path) -> str:
    return str(tmp_path / "tmp" / "todocli.db")


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def repo(db_path: str, clock: StepClock) -> SQLiteRepository:
    return SQLiteRepository(db_path, clock=clock)


@pytest.fixture()
def settings(db_path: str, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("TODOCLI_DB_PATH", db_path)
    monkeypatch.setenv("TODOCLI_COLOR", "never")
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    return get_settings()
