"""Owned, cancellable recurring tick."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    The loop is looked up lazily so the scheduler can be built outside of a
    running loop and used once one exists.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


class ScheduledTick:
    """A fixed-interval tick that re-arms only after the previous call returns.

    ``cancel`` is idempotent and guarantees that no further callback runs,
    including one that was already armed.
    """

    def __init__(self, scheduler: Scheduler, interval: float, callback: Callable[[], None]) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self._scheduler = scheduler
        self._interval = interval
        self._callback = callback
        self._handle: TimerHandle | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        if self._active:
            return
        self._active = True
        self._arm()

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Tick cancelled.")

    def _arm(self) -> None:
        self._handle = self._scheduler.call_later(self._interval, self._fire)

    def _fire(self) -> None:
        self._handle = None
        if not self._active:
            return
        try:
            self._callback()
        finally:
            if self._active:
                self._arm()

    def __enter__(self) -> "ScheduledTick":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.cancel()
        return False
