"""Web API — game state endpoint, settings and trigger."""

from __future__ import annotations

import json
from unittest.mock import patch

from match_announcer.settings.models import BeepAction, SoundAction

POWER_BEEP = BeepAction(freq=880, duration_ms=150)


def make_state(clock_time: int, previous_clock: int | None = None) -> dict:
    """Build a game state integration body for an in-progress match."""
    body = {
        "provider": {"name": "Dota 2", "appid": 570, "version": 47, "timestamp": 1700000000},
        "map": {
            "clock_time": clock_time,
            "game_state": "DOTA_GAMERULES_STATE_GAME_IN_PROGRESS",
            "paused": False,
            "ward_purchase_cooldown": 0,
        },
        "player": {},
        "hero": {},
    }
    if previous_clock is not None:
        body["previously"] = {"map": {"clock_time": previous_clock}}
    return body


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": "0.1.0"}


# ---------------------------------------------------------------------------
# POST /
# ---------------------------------------------------------------------------


def test_game_state_fires_rule(client, router):
    resp = client.post("/", json=make_state(230, previous_clock=229))
    assert resp.status_code == 200
    router.dispatch.assert_called_once_with(POWER_BEEP)


def test_game_state_first_report_is_silent(client, router):
    resp = client.post("/", json=make_state(230))
    assert resp.status_code == 200
    router.dispatch.assert_not_called()


def test_game_state_without_map(client, router):
    resp = client.post("/", json={"provider": {"name": "Dota 2"}})
    assert resp.status_code == 200
    router.dispatch.assert_not_called()


def test_game_state_router_failure_still_200(client, router):
    router.dispatch.side_effect = RuntimeError("device gone")
    resp = client.post("/", json=make_state(230, previous_clock=229))
    assert resp.status_code == 200


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_load(client):
    resp = client.get("/api/settings")
    assert resp.status_code == 200
    data = resp.json()
    assert data["global"]["volume"] == 1.0
    assert data["power_rune"]["enabled"] is True
    assert data["power_rune"]["action"] == {"type": "beep", "freq": 880, "duration_ms": 150}


def test_settings_save_replaces_applies_volume_and_persists(client, store, router):
    payload = client.get("/api/settings").json()
    payload["global"]["volume"] = 0.4
    payload["bounty_rune"]["enabled"] = True

    resp = client.post("/api/settings", json=payload)
    assert resp.status_code == 200
    assert store.current.global_.volume == 0.4
    assert store.current.bounty_rune.enabled is True
    router.set_volume.assert_called_once_with(0.4)

    saved = json.loads(store.path.read_text(encoding="utf-8"))
    assert saved["global"]["volume"] == 0.4


def test_settings_save_invalid_returns_422(client, store):
    before = store.current
    resp = client.post("/api/settings", json={"power_rune": {"interval_sec": -5}})
    assert resp.status_code == 422
    assert store.current is before


def test_settings_save_failure_returns_500(client, store):
    with patch.object(store, "save", side_effect=OSError("disk full")):
        resp = client.post("/api/settings", json={"global": {"volume": 0.2}})
    assert resp.status_code == 500


# ---------------------------------------------------------------------------
# Trigger
# ---------------------------------------------------------------------------


def test_trigger_beep(client, router):
    resp = client.post("/api/trigger", json={"type": "beep", "freq": 500, "duration_ms": 90})
    assert resp.status_code == 200
    router.dispatch.assert_called_once_with(BeepAction(freq=500, duration_ms=90))


def test_trigger_sound(client, router):
    resp = client.post("/api/trigger", json={"type": "sound", "sound": "bounty_rune.wav"})
    assert resp.status_code == 200
    router.dispatch.assert_called_once_with(SoundAction(sound="bounty_rune.wav"))


def test_trigger_unknown_type_returns_422(client, router):
    resp = client.post("/api/trigger", json={"type": "speak", "text": "hi"})
    assert resp.status_code == 422
    router.dispatch.assert_not_called()
