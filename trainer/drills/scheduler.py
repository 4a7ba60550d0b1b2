"""Cancellable scheduled callbacks for drill timers.

Sessions never hold raw timer handles. Each logical timer lives in a
``TaskSlot``: scheduling into the slot cancels whatever it held before, and
a callback that fires after being superseded is dropped.
"""

import asyncio
import heapq
import itertools
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class ScheduledTask(Protocol):
    """Handle to a pending callback."""

    def cancel(self) -> None:
        ...

    def cancelled(self) -> bool:
        ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callback) -> ScheduledTask:
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class _FrameTask:
    """Pending callback on a FrameScheduler."""

    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class FrameScheduler:
    """
    Scheduler driven by a virtual clock.

    Game loops call ``update(dt)`` once per frame with the elapsed seconds;
    due callbacks run in order of their due time.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, _FrameTask]] = []
        self._sequence = itertools.count()

    @property
    def now(self) -> float:
        """Return the virtual time in seconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Return the number of callbacks still waiting to run."""
        return sum(1 for _, _, task in self._queue if not task.cancelled())

    def call_later(self, delay: float, callback: Callback) -> _FrameTask:
        task = _FrameTask(self._now + max(0.0, delay), callback)
        heapq.heappush(self._queue, (task.due, next(self._sequence), task))
        return task

    def update(self, dt: float) -> int:
        """
        Advance the clock by ``dt`` seconds and run every due callback.

        Returns:
            The number of callbacks that ran
        """
        target = self._now + dt
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            if task.cancelled():
                continue
            task.callback()
            ran += 1
        self._now = target
        return ran


class TaskSlot:
    """
    Holds at most one scheduled callback for a logical timer.

    Every ``schedule`` call bumps a generation counter; a wrapped callback
    only runs if its generation is still current, so a handle that escaped
    cancellation can never act on newer state.
    """

    def __init__(self, scheduler: Scheduler, name: str = "task") -> None:
        self._scheduler = scheduler
        self._name = name
        self._task: ScheduledTask | None = None
        self._generation = 0

    @property
    def active(self) -> bool:
        """Check if a callback is pending."""
        return self._task is not None and not self._task.cancelled()

    @property
    def generation(self) -> int:
        return self._generation

    def schedule(self, delay: float, callback: Callback) -> ScheduledTask:
        """
        Schedule a new callback, replacing any pending one.

        If the scheduler refuses the callback the slot is left untouched.
        """
        generation = self._generation + 1

        def run() -> None:
            if generation != self._generation:
                logger.debug("Dropped stale %s callback", self._name)
                return
            self._task = None
            callback()

        task = self._scheduler.call_later(delay, run)
        self.cancel()
        self._generation = generation
        self._task = task
        return task

    def cancel(self) -> None:
        """Cancel the pending callback, if any, and invalidate old handles."""
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None
