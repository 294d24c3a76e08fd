"""
Periodic task scheduling for the session controller.

The analyzer never owns a thread: periodic snapshots are requested through a
``Scheduler`` and cancelled through the ``ScheduledTask`` handle it returns.

Classes:
    - ScheduledTask: Cancellable handle for a repeating callback.
    - Scheduler: Protocol implemented by the schedulers below.
    - AsyncioScheduler: Repeats callbacks on an asyncio event loop.
    - ManualScheduler: Virtual clock that fires callbacks as time is advanced.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Protocol


class ScheduledTask:
    """Handle for a repeating callback; cancel() is idempotent."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval!r}.")
        self.interval = interval
        self.callback = callback
        self._cancelled = False
        self._on_cancel: Callable[[], None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None

    def run(self) -> None:
        if not self._cancelled:
            self.callback()


class Scheduler(Protocol):
    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledTask: ...


class AsyncioScheduler:
    """Schedules repeating callbacks with ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        task = ScheduledTask(interval, callback)
        handle: asyncio.TimerHandle | None = None

        def _tick() -> None:
            nonlocal handle
            if task.cancelled:
                return
            handle = self.loop.call_later(interval, _tick)
            task.run()

        def _cancel() -> None:
            if handle is not None:
                handle.cancel()

        handle = self.loop.call_later(interval, _tick)
        task._on_cancel = _cancel
        return task


class ManualScheduler:
    """
    Deterministic scheduler driven by a virtual clock.

    Time only moves when ``advance`` or ``advance_to`` is called; every tick
    that falls due in between is fired in chronological order, with the clock
    set to the tick time while its callback runs. Ticks due at the same time
    fire in the order they were queued.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, ScheduledTask]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def call_every(
        self, interval: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        task = ScheduledTask(interval, callback)
        self._push(self._now + interval, task)
        return task

    @property
    def pending(self) -> int:
        """Number of live (not cancelled) periodic tasks."""
        return sum(1 for _, _, task in self._queue if not task.cancelled)

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards by {seconds!r}.")
        self.advance_to(self._now + seconds)

    def advance_to(self, target: float) -> None:
        if target < self._now:
            raise ValueError(
                f"Cannot move the clock backwards from {self._now} to {target}."
            )
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self._now = due
            self._push(due + task.interval, task)
            task.run()
        self._now = target

    def _push(self, due: float, task: ScheduledTask) -> None:
        heapq.heappush(self._queue, (due, next(self._sequence), task))
