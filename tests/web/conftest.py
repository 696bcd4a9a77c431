"""Shared fixtures for web tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from match_announcer.hotpath.engine import AnnouncerEngine
from match_announcer.settings.models import BeepAction, Settings, SpawnRule
from match_announcer.settings.store import SettingsStore
from match_announcer.web.app import create_app

POWER_BEEP = BeepAction(freq=880, duration_ms=150)


@pytest.fixture
def store(tmp_path):
    settings = Settings(
        power_rune=SpawnRule(
            enabled=True,
            lead_time_sec=10,
            first_occurrence_sec=240,
            interval_sec=120,
            action=POWER_BEEP,
        )
    )
    return SettingsStore(tmp_path / "settings.json", settings)


@pytest.fixture
def router():
    return MagicMock()


@pytest.fixture
def engine(store, router):
    return AnnouncerEngine(store, router)


@pytest.fixture
def client(engine, store):
    """FastAPI test client around an engine with a mocked router."""
    with TestClient(create_app(engine, store)) as c:
        yield c
