"""AnnouncerEngine — connects game snapshots to rules and audio output."""

from __future__ import annotations

import logging
import threading

from match_announcer.game.differ import SnapshotDiffer, lookup
from match_announcer.game.models import GameSnapshot, GameState
from match_announcer.game.parser import as_int
from match_announcer.hotpath.rules import ClockEventScheduler, LatchTracker
from match_announcer.settings.models import LevelRule, Settings
from match_announcer.settings.store import SettingsStore

_logger = logging.getLogger(__name__)

CLOCK_TIME = "/map/clock_time"
GAME_STATE = "/map/game_state"
WARD_COOLDOWN = "/map/ward_purchase_cooldown"
BUYBACK_INPUTS: tuple[str, ...] = (
    "/player/gold_reliable",
    "/hero/buyback_cost",
    "/hero/buyback_cooldown",
)

# Periodic rules in evaluation order, with the log line printed when they fire.
SPAWN_RULES: tuple[tuple[str, str], ...] = (
    ("bounty_rune", "bounty runes about to spawn"),
    ("power_rune", "power runes about to spawn"),
    ("tomb_of_knowledge", "tomb of knowledge about to spawn"),
    ("neutral_items", "neutral items can be dropped"),
)

_CLOCK_STATES = frozenset({GameState.PRE_GAME, GameState.IN_PROGRESS})


class AnnouncerEngine:
    """Evaluates the configured rules against each snapshot and fires notifications.

    Settings are re-read from the store on every call.  Latches and the last
    evaluated clock value are guarded by one lock that is released before
    any command is routed to the audio worker.

    Parameters
    ----------
    store:
        A :class:`~match_announcer.settings.store.SettingsStore`.
    router:
        A :class:`~match_announcer.hotpath.router.NotificationRouter`.
    scheduler:
        Clock rule evaluator; a :class:`ClockEventScheduler` by default.
    """

    def __init__(
        self,
        store: SettingsStore,
        router,
        scheduler: ClockEventScheduler | None = None,
    ) -> None:
        self._store = store
        self._router = router
        self._scheduler = scheduler or ClockEventScheduler()
        self._differ = SnapshotDiffer((CLOCK_TIME, GAME_STATE, WARD_COOLDOWN, *BUYBACK_INPUTS))
        self._latches = LatchTracker()
        self._lock = threading.Lock()
        self._last_clock: int | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate_and_dispatch(self, snapshot: GameSnapshot) -> None:
        """Fire every rule triggered by *snapshot*. Never raises."""
        try:
            actions = self.evaluate(snapshot)
        except Exception:
            _logger.exception("Snapshot evaluation failed")
            return
        for action in actions:
            self.trigger(action)

    def trigger(self, action) -> None:
        """Play *action* directly, independent of any rule."""
        try:
            self._router.dispatch(action)
        except Exception:
            _logger.exception("Failed to dispatch %r", action)

    def set_volume(self, level: float) -> None:
        """1.0 = 100%."""
        self._router.set_volume(level)

    def evaluate(self, snapshot: GameSnapshot) -> list:
        """Return the notify actions of every rule firing on *snapshot*."""
        settings = self._store.current
        if settings.global_.suspend_all or snapshot.map is None:
            return []

        flags = self._differ.diff(snapshot)
        fired: list = []
        with self._lock:
            if flags[GAME_STATE]:
                _logger.info(
                    "%s -> %s",
                    lookup(snapshot.previously, GAME_STATE),
                    snapshot.map.raw_game_state,
                )
                self._latches.reset()
                self._last_clock = None

            if snapshot.game_state is GameState.IN_PROGRESS:
                fired.extend(self._level_rules(settings, snapshot, flags))

            if snapshot.game_state in _CLOCK_STATES and flags[CLOCK_TIME]:
                clock_time = snapshot.map.clock_time
                if clock_time != self._last_clock:
                    self._last_clock = clock_time
                    fired.extend(self._clock_rules(settings, clock_time))
        return fired

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _clock_rules(self, settings: Settings, clock_time: int) -> list:
        fired = []
        for name, description in SPAWN_RULES:
            rule = getattr(settings, name)
            if self._scheduler.evaluate(rule, clock_time):
                _logger.info(
                    "%d there are %s in %d sec", clock_time, description, rule.lead_time_sec
                )
                fired.append(rule.action)
        return fired

    def _level_rules(self, settings: Settings, snapshot: GameSnapshot, flags) -> list:
        fired = []

        buyback: LevelRule = settings.buyback_ready
        if buyback.enabled and self._differ.any_changed(flags, BUYBACK_INPUTS):
            latch = self._latches.latch("buyback_ready")
            if self._latches.evaluate(self._buyback_ready(snapshot), latch):
                _logger.info("%d buyback is ready", snapshot.map.clock_time)
                fired.append(buyback.action)

        wards: LevelRule = settings.observer_wards
        if (
            wards.enabled
            and flags[WARD_COOLDOWN]
            and snapshot.map.ward_purchase_cooldown == wards.lead_time_sec
        ):
            _logger.info(
                "%d there are observer wards about to spawn in %d sec",
                snapshot.map.clock_time,
                wards.lead_time_sec,
            )
            fired.append(wards.action)

        return fired

    @staticmethod
    def _buyback_ready(snapshot: GameSnapshot) -> bool:
        gold = as_int(snapshot.player.get("gold_reliable"))
        cost = as_int(snapshot.hero.get("buyback_cost"))
        cooldown = as_int(snapshot.hero.get("buyback_cooldown"))
        if gold is None or cost is None:
            return False
        return gold - cost > 0 and (cooldown or 0) == 0
