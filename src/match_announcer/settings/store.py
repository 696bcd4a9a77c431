"""SettingsStore — atomically swapped settings with JSON file persistence."""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from pydantic import ValidationError

from match_announcer.settings.models import Settings

_logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "settings.json"


class SettingsStore:
    """Holds the current :class:`Settings` value.

    Readers always get a complete settings object: :meth:`replace` swaps the
    reference under a lock and never mutates the previous value.

    Parameters
    ----------
    path:
        JSON file used by :meth:`save`.
    settings:
        Initial settings; defaults when omitted.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_SETTINGS_FILE,
        settings: Settings | None = None,
    ) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._settings = settings or Settings()

    @classmethod
    def load(cls, path: str | Path = DEFAULT_SETTINGS_FILE) -> SettingsStore:
        """Read settings from *path*, falling back to defaults if it is missing or invalid."""
        path = Path(path)
        try:
            settings = Settings.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except FileNotFoundError:
            settings = Settings()
        except (OSError, ValueError, ValidationError) as exc:
            _logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
            settings = Settings()
        return cls(path, settings)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current(self) -> Settings:
        with self._lock:
            return self._settings

    def replace(self, settings: Settings) -> None:
        """Swap in a new settings object as a whole."""
        with self._lock:
            self._settings = settings

    def save(self) -> None:
        """Persist the current settings.

        The JSON is written to a ``.stage`` file first and then renamed over
        the real file, so a failed write never truncates existing settings.

        Raises
        ------
        OSError
            If the stage file cannot be written or renamed.
        """
        serialized = json.dumps(self.current.model_dump(mode="json", by_alias=True), indent=2)
        stage = self._path.with_suffix(".stage")
        stage.write_text(serialized, encoding="utf-8")
        os.replace(stage, self._path)
