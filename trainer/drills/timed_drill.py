"""Countdown controller for the timed counting drill."""

import logging
from dataclasses import dataclass

from config import config
from trainer.drills.counting_session import CountingSession
from trainer.drills.events import EventEmitter, EventType
from trainer.drills.scheduler import AsyncioScheduler, Scheduler, TaskSlot
from trainer.drills.stats import accuracy_percent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimedDrillSummary:
    """Counting stats frozen at the moment the countdown expired."""

    attempts: int
    corrects: int
    accuracy: int


class TimedDrill:
    """
    One-second countdown over a counting session.

    The drill only observes the session's cumulative stats; dealing and
    guessing carry on independently of the timer. Starting a new drill
    replaces any countdown already running.
    """

    def __init__(
        self,
        session: CountingSession,
        scheduler: Scheduler | None = None,
        tick_seconds: float | None = None,
    ) -> None:
        self._session = session
        self._tick_seconds = (
            config.counting.tick_seconds if tick_seconds is None else tick_seconds
        )
        self._ticker = TaskSlot(scheduler or AsyncioScheduler(), name="timed-drill tick")

        self.active = False
        self.seconds_remaining = 0
        self.summary: TimedDrillSummary | None = None

    @property
    def events(self) -> EventEmitter:
        """Return the event emitter shared with the counting session."""
        return self._session.events

    def start(self, duration_seconds: int | None = None) -> None:
        """Arm the countdown, clearing any previous summary."""
        duration = config.counting.timed_seconds if duration_seconds is None else duration_seconds
        if duration <= 0:
            raise ValueError("Timed drill duration must be positive")

        self._ticker.schedule(self._tick_seconds, self._tick)
        self.seconds_remaining = duration
        self.summary = None
        self.active = True
        self.events.emit_new(EventType.TIMED_DRILL_STARTED, seconds=duration)

    def cancel(self) -> None:
        """Stop the countdown without producing a summary."""
        was_active = self.active
        self._ticker.cancel()
        self.active = False
        self.seconds_remaining = 0
        if was_active:
            self.events.emit_new(EventType.TIMED_DRILL_CANCELLED)

    def _tick(self) -> None:
        self.seconds_remaining = max(0, self.seconds_remaining - 1)
        if self.seconds_remaining > 0:
            self._ticker.schedule(self._tick_seconds, self._tick)
            self.events.emit_new(
                EventType.TIMED_DRILL_TICK, seconds_remaining=self.seconds_remaining
            )
            return

        stats = self._session.stats
        self.summary = TimedDrillSummary(
            attempts=stats.attempts,
            corrects=stats.corrects,
            accuracy=accuracy_percent(stats.corrects, stats.attempts),
        )
        self.active = False
        logger.info(
            "Timed drill complete: %d/%d correct (%d%%)",
            self.summary.corrects,
            self.summary.attempts,
            self.summary.accuracy,
        )
        self.events.emit_new(EventType.TIMED_DRILL_COMPLETED, summary=self.summary)
