"""SnapshotDiffer — change gates derived from the ``previously`` mirror."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from match_announcer.game.models import GameSnapshot

_MISSING = object()


def lookup(document: Any, path: str, default: Any = None) -> Any:
    """Resolve a slash-separated *path* (``"/map/clock_time"``) inside *document*.

    Returns *default* when any segment is absent.
    """
    node = document
    for token in path.strip("/").split("/"):
        if isinstance(node, dict) and token in node:
            node = node[token]
        elif isinstance(node, list) and token.isdigit() and int(token) < len(node):
            node = node[int(token)]
        else:
            return default
    return node


def has_previous(snapshot: GameSnapshot, path: str) -> bool:
    """True if *snapshot* carries a previous value for the field at *path*."""
    return lookup(snapshot.previously, path, _MISSING) is not _MISSING


class SnapshotDiffer:
    """Computes "changed since the last tick" flags for a fixed set of fields.

    The telemetry source reports the previous value of every changed field
    under ``previously``.  On the first report after a connection or a new
    match there is nothing there, so every flag is False and gated rules stay
    silent even if their arithmetic would match.

    Parameters
    ----------
    paths:
        Field paths referenced by the configured rules.
    """

    def __init__(self, paths: Iterable[str]) -> None:
        self._paths = tuple(dict.fromkeys(paths))

    @property
    def paths(self) -> tuple[str, ...]:
        return self._paths

    def diff(self, snapshot: GameSnapshot) -> dict[str, bool]:
        """Return ``{path: changed}`` for every watched path."""
        return {path: has_previous(snapshot, path) for path in self._paths}

    @staticmethod
    def any_changed(flags: dict[str, bool], paths: Iterable[str]) -> bool:
        """True if at least one of *paths* is flagged as changed."""
        return any(flags.get(path, False) for path in paths)
