"""Game state snapshot models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class GameState(str, Enum):
    """Map phase as reported by the game state integration."""

    PRE_GAME = "DOTA_GAMERULES_STATE_PRE_GAME"
    IN_PROGRESS = "DOTA_GAMERULES_STATE_GAME_IN_PROGRESS"
    OTHER = "OTHER"

    @classmethod
    def from_raw(cls, raw: str) -> GameState:
        """Map a raw state string to a member; unknown states become OTHER."""
        try:
            return cls(raw)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class MapState:
    """The ``map`` section of a snapshot."""

    clock_time: int
    """In-match clock in seconds. Negative during the pre-game countdown."""

    game_state: GameState
    """Normalized map phase."""

    raw_game_state: str = ""
    """State string exactly as received (kept for logging)."""

    paused: bool = False

    ward_purchase_cooldown: int | None = None
    """Seconds until the next observer ward restock, when reported."""

    matchid: str = ""


@dataclass(frozen=True)
class GameSnapshot:
    """One parsed report of the current match state.

    ``previously`` mirrors the previous values of every field that changed
    since the last report; a field absent from it did not change (or there
    was no previous report at all).
    """

    map: MapState | None = None
    player: dict[str, Any] = field(default_factory=dict)
    hero: dict[str, Any] = field(default_factory=dict)
    abilities: dict[str, Any] = field(default_factory=dict)
    items: dict[str, Any] = field(default_factory=dict)
    previously: dict[str, Any] = field(default_factory=dict)

    @property
    def clock_time(self) -> int | None:
        return self.map.clock_time if self.map is not None else None

    @property
    def game_state(self) -> GameState:
        return self.map.game_state if self.map is not None else GameState.OTHER
