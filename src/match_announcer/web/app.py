"""FastAPI web application — game state endpoint and settings API."""

from __future__ import annotations

import logging

from fastapi import Body, FastAPI, HTTPException
from pydantic import ValidationError

from match_announcer import __version__
from match_announcer.game.parser import SnapshotParser
from match_announcer.hotpath.engine import AnnouncerEngine
from match_announcer.settings.models import Settings, parse_action
from match_announcer.settings.store import SettingsStore
from match_announcer.web.schemas import HealthResponse

_logger = logging.getLogger(__name__)


def create_app(
    engine: AnnouncerEngine,
    store: SettingsStore,
    parser: SnapshotParser | None = None,
) -> FastAPI:
    """Build the web app around an already wired engine and settings store."""
    snapshot_parser = parser or SnapshotParser()
    app = FastAPI(title="Match Announcer", version=__version__)

    # -----------------------------------------------------------------------
    # Game state integration
    # -----------------------------------------------------------------------

    @app.post("/")
    def game_state_update(state: dict = Body(...)) -> None:
        """Receive one telemetry report; notifications are fire-and-forget."""
        engine.evaluate_and_dispatch(snapshot_parser.parse(state))

    # -----------------------------------------------------------------------
    # Settings API
    # -----------------------------------------------------------------------

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    @app.get("/api/settings", response_model=Settings)
    def settings_load() -> Settings:
        return store.current

    @app.post("/api/settings")
    def settings_save(settings: Settings) -> None:
        """Replace the settings as a whole, apply the volume and persist."""
        store.replace(settings)
        engine.set_volume(settings.global_.volume)
        try:
            store.save()
        except OSError as exc:
            _logger.error("Failed to save settings to %s: %s", store.path, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @app.post("/api/trigger")
    def trigger(action: dict = Body(...)) -> None:
        """Play a notify action right away (the "test this sound" button)."""
        try:
            parsed = parse_action(action)
        except ValidationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        engine.trigger(parsed)

    return app
