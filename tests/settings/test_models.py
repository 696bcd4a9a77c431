"""Settings models — defaults, wire format and notify action parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from match_announcer.settings.models import (
    BeepAction,
    PlayFileAction,
    Settings,
    SoundAction,
    SpawnRule,
    parse_action,
)


def test_default_rule_set():
    s = Settings()
    assert s.global_.volume == 1.0
    assert s.global_.suspend_all is False
    assert (s.bounty_rune.first_occurrence_sec, s.bounty_rune.interval_sec) == (0, 300)
    assert s.bounty_rune.lead_time_sec == 15
    assert (s.power_rune.first_occurrence_sec, s.power_rune.interval_sec) == (240, 120)
    assert (s.tomb_of_knowledge.first_occurrence_sec, s.tomb_of_knowledge.interval_sec) == (600, 600)
    assert (s.neutral_items.first_occurrence_sec, s.neutral_items.interval_sec) == (420, 600)
    assert s.buyback_ready.action == SoundAction(sound="buyback_ready.wav")
    assert not any(
        rule.enabled
        for rule in (
            s.bounty_rune,
            s.power_rune,
            s.tomb_of_knowledge,
            s.neutral_items,
            s.observer_wards,
            s.buyback_ready,
        )
    )


def test_global_section_serialized_as_global():
    data = Settings().model_dump(mode="json", by_alias=True)
    assert "global" in data
    assert data["bounty_rune"]["action"] == {"type": "sound", "sound": "bounty_rune.wav"}


def test_partial_settings_take_defaults():
    s = Settings.model_validate(
        {"global": {"volume": 0.5}, "power_rune": {"enabled": True, "interval_sec": 60}}
    )
    assert s.global_.volume == 0.5
    assert s.power_rune.enabled is True
    assert s.power_rune.interval_sec == 60
    assert s.power_rune.action == BeepAction()
    assert s.bounty_rune == Settings().bounty_rune


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(ValidationError):
        s.bounty_rune = SpawnRule()


def test_negative_lead_time_rejected():
    with pytest.raises(ValidationError):
        SpawnRule(lead_time_sec=-1)


def test_parse_action_variants():
    assert parse_action({"type": "beep", "freq": 500, "duration_ms": 80}) == BeepAction(
        freq=500, duration_ms=80
    )
    assert parse_action({"type": "sound", "sound": "power_rune.wav"}) == SoundAction(
        sound="power_rune.wav"
    )
    assert parse_action({"type": "playfile", "path": "/tmp/a.wav"}) == PlayFileAction(
        path="/tmp/a.wav"
    )


def test_parse_action_unknown_tag():
    with pytest.raises(ValidationError):
        parse_action({"type": "speak", "text": "hello"})
