"""Hot-path rules — ClockEventScheduler and LatchTracker."""

from __future__ import annotations

from dataclasses import dataclass

from match_announcer.settings.models import SpawnRule


class ClockEventScheduler:
    """Decides whether a match clock tick is a notification tick for a :class:`SpawnRule`.

    A rule with occurrences at ``first + k * interval`` notifies at
    ``first - lead + k * interval`` for every k >= 0.  The remainder is taken
    relative to the first occurrence, so rules whose first occurrence is not
    a multiple of the interval stay aligned.

    Stateless: evaluating the same tick twice returns the same answer twice.
    Callers must skip repeated clock values (pauses, duplicate reports).
    """

    def evaluate(self, rule: SpawnRule, clock_time: int) -> bool:
        """Return True if *rule* fires at *clock_time*."""
        interval = rule.interval_sec
        if not rule.enabled or interval <= 0:
            return False

        first_notify = rule.first_occurrence_sec - rule.lead_time_sec
        if clock_time < first_notify:
            return False
        if clock_time == first_notify:
            return True

        elapsed = (clock_time - rule.first_occurrence_sec) % interval
        return elapsed == (interval - rule.lead_time_sec) % interval


@dataclass
class Latch:
    """Edge-detection cell for one level-triggered rule."""

    name: str
    held: bool = False


class LatchTracker:
    """Turns level conditions into rising-edge events.

    A latched condition is announced once when it becomes true and again only
    after it has been false at least once in between.
    """

    def __init__(self) -> None:
        self._latches: dict[str, Latch] = {}

    def latch(self, name: str) -> Latch:
        """Return the latch for *name*, creating an unset one on first use."""
        if name not in self._latches:
            self._latches[name] = Latch(name)
        return self._latches[name]

    @staticmethod
    def evaluate(condition: bool, latch: Latch) -> bool:
        """Update *latch* with *condition*; return True on a rising edge."""
        if condition and not latch.held:
            latch.held = True
            return True
        if not condition and latch.held:
            latch.held = False
        return False

    def reset(self) -> None:
        """Clear every latch (new match)."""
        for latch in self._latches.values():
            latch.held = False
