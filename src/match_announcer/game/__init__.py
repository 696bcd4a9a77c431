"""Game state integration snapshots.

Public API
----------
GameSnapshot    - one parsed report of match state
GameState       - map phase
MapState        - the ``map`` section of a snapshot
SnapshotParser  - raw JSON body → GameSnapshot
SnapshotDiffer  - change gates from the ``previously`` mirror
"""

from match_announcer.game.differ import SnapshotDiffer, has_previous, lookup
from match_announcer.game.models import GameSnapshot, GameState, MapState
from match_announcer.game.parser import SnapshotParser

__all__ = [
    "GameSnapshot",
    "GameState",
    "MapState",
    "SnapshotDiffer",
    "SnapshotParser",
    "has_previous",
    "lookup",
]
