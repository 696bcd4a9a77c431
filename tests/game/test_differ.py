"""SnapshotDiffer — change gates from the ``previously`` mirror."""

from __future__ import annotations

from match_announcer.game.differ import SnapshotDiffer, has_previous, lookup
from match_announcer.game.models import GameSnapshot

_PATHS = ("/map/clock_time", "/player/gold_reliable", "/hero/buyback_cost")


def test_lookup_nested_value():
    doc = {"map": {"clock_time": 10}, "items": {"slots": [{"name": "ward"}]}}
    assert lookup(doc, "/map/clock_time") == 10
    assert lookup(doc, "/items/slots/0/name") == "ward"


def test_lookup_missing_returns_default():
    doc = {"map": {"clock_time": 10}}
    assert lookup(doc, "/map/paused") is None
    assert lookup(doc, "/hero/buyback_cost", "absent") == "absent"
    assert lookup(doc, "/map/clock_time/deeper") is None


def test_has_previous_counts_falsy_values():
    snap = GameSnapshot(previously={"map": {"clock_time": 0, "paused": False}})
    assert has_previous(snap, "/map/clock_time") is True
    assert has_previous(snap, "/map/paused") is True
    assert has_previous(snap, "/map/game_state") is False


def test_first_snapshot_has_no_changes():
    flags = SnapshotDiffer(_PATHS).diff(GameSnapshot())
    assert flags == {path: False for path in _PATHS}


def test_flags_follow_previously_mirror():
    snap = GameSnapshot(previously={"player": {"gold_reliable": 100}})
    flags = SnapshotDiffer(_PATHS).diff(snap)
    assert flags["/player/gold_reliable"] is True
    assert flags["/map/clock_time"] is False


def test_any_changed():
    differ = SnapshotDiffer(_PATHS)
    flags = differ.diff(GameSnapshot(previously={"hero": {"buyback_cost": 700}}))
    assert differ.any_changed(flags, ("/player/gold_reliable", "/hero/buyback_cost")) is True
    assert differ.any_changed(flags, ("/map/clock_time",)) is False


def test_duplicate_paths_collapse():
    assert SnapshotDiffer(["/a", "/b", "/a"]).paths == ("/a", "/b")
