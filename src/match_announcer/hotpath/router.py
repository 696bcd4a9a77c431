"""NotificationRouter — turns notify actions into audio commands."""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from match_announcer.hotpath.audio import AudioCommand, Beep, PlayBytes, PlayFile, SetVolume
from match_announcer.settings.models import BeepAction, PlayFileAction, SoundAction

_logger = logging.getLogger(__name__)

BUNDLED_ASSETS = Path(__file__).resolve().parent.parent / "assets"


class SoundLibrary:
    """Bundled notification sounds, looked up by relative path (``sound/<name>``).

    Contents are read once and cached.  Paths escaping the asset root are
    treated as unknown.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self._root = Path(root).resolve() if root else BUNDLED_ASSETS
        self._cache: dict[str, bytes] = {}
        self._lock = threading.Lock()

    @property
    def root(self) -> Path:
        return self._root

    def get(self, relative: str) -> bytes | None:
        """Return the asset's bytes, or None if there is no such asset."""
        with self._lock:
            if relative in self._cache:
                return self._cache[relative]

        path = (self._root / relative).resolve()
        if self._root not in path.parents or not path.is_file():
            return None
        try:
            data = path.read_bytes()
        except OSError:
            return None

        with self._lock:
            self._cache[relative] = data
        return data


class NotificationRouter:
    """Resolves notify actions and submits the resulting commands.

    Resolution is best-effort: an unknown bundled sound or an unreadable file
    produces no command and no error.

    Parameters
    ----------
    dispatcher:
        An :class:`~match_announcer.hotpath.audio.AudioDispatcher` (anything
        with ``submit(command)``).
    library:
        Bundled sound table; the packaged assets by default.
    """

    def __init__(self, dispatcher, library: SoundLibrary | None = None) -> None:
        self._dispatcher = dispatcher
        self._library = library or SoundLibrary()

    def command_for(self, action) -> AudioCommand | None:
        """Build the audio command for *action*, or None if it cannot be resolved."""
        if isinstance(action, BeepAction):
            return Beep(action.freq, action.duration_ms)
        if isinstance(action, SoundAction):
            data = self._library.get(f"sound/{action.sound}")
            if data is None:
                _logger.debug("Unknown bundled sound %r", action.sound)
                return None
            return PlayBytes(data)
        if isinstance(action, PlayFileAction):
            try:
                handle = open(action.path, "rb")  # noqa: SIM115
            except OSError as exc:
                _logger.debug("Cannot open %s: %s", action.path, exc)
                return None
            return PlayFile(handle)
        raise TypeError(f"Unknown notify action: {action!r}")

    def dispatch(self, action) -> bool:
        """Submit the command for *action*. Returns True if one was sent."""
        command = self.command_for(action)
        if command is None:
            return False
        self._dispatcher.submit(command)
        return True

    def set_volume(self, level: float) -> None:
        self._dispatcher.submit(SetVolume(level))
