"""SnapshotParser — converts a raw game state integration body to a GameSnapshot."""

from __future__ import annotations

from typing import Any

from match_announcer.game.models import GameSnapshot, GameState, MapState

# Top-level resource sections copied verbatim into the snapshot.
_SECTIONS: tuple[str, ...] = ("player", "hero", "abilities", "items", "previously")


def as_int(value: Any) -> int | None:
    """Return *value* as an int, or None when it is not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


class SnapshotParser:
    """Parses a raw telemetry dict into a :class:`GameSnapshot`.

    The raw dict uses the game's own section names (``"map"``, ``"player"``,
    ``"hero"``, ``"previously"`` ...).  Missing or malformed values never
    raise: a ``map`` section without a usable ``clock_time`` is dropped and
    other sections fall back to empty dicts.
    """

    def parse(self, raw: dict) -> GameSnapshot:
        """Convert *raw* telemetry body to a :class:`GameSnapshot`."""
        sections = {name: _as_dict(raw.get(name)) for name in _SECTIONS}
        return GameSnapshot(map=self._parse_map(raw.get("map")), **sections)

    @staticmethod
    def _parse_map(raw: Any) -> MapState | None:
        if not isinstance(raw, dict):
            return None
        clock_time = as_int(raw.get("clock_time"))
        if clock_time is None:
            return None

        raw_state = str(raw.get("game_state") or "")
        return MapState(
            clock_time=clock_time,
            game_state=GameState.from_raw(raw_state),
            raw_game_state=raw_state,
            paused=bool(raw.get("paused", False)),
            ward_purchase_cooldown=as_int(raw.get("ward_purchase_cooldown")),
            matchid=str(raw.get("matchid") or ""),
        )
