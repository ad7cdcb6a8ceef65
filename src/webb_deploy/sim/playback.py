"""Playback controller: the only writer of PlaybackState."""

from __future__ import annotations

import logging
import math
from typing import Callable

from webb_deploy.domain.events import ChangeKind, PlaybackChange
from webb_deploy.domain.types import (
    PlaybackSnapshot,
    PlaybackState,
    PlaybackStatus,
    StepDirection,
)
from webb_deploy.rules.schedule import DeploymentRules, default_rules
from webb_deploy.sim.evaluator import evaluate
from webb_deploy.sim.resolver import clamp_progress, event_progress, resolve_event, resolve_event_index
from webb_deploy.sim.ticker import AsyncioScheduler, ScheduledTick, Scheduler

logger = logging.getLogger(__name__)

Listener = Callable[[PlaybackChange], None]


class PlaybackController:
    """Advances progress over time and publishes fresh snapshots.

    Listeners are notified after every change and pull ``snapshot()``.
    The recurring tick exists only while playing; pause, reset, completion and
    ``close`` all release it.
    """

    def __init__(
        self,
        rules: DeploymentRules | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.rules = rules or default_rules()
        self._scheduler = scheduler or AsyncioScheduler()
        self._playback = PlaybackState(speed_multiplier=self.rules.playback.default_speed)
        self._tick: ScheduledTick | None = None
        self._listeners: list[Listener] = []
        self._closed = False
        self._snapshot = self._build_snapshot()

    @property
    def playback(self) -> PlaybackState:
        """Copy of the live playback state."""
        return PlaybackState(
            overall_progress=self._playback.overall_progress,
            speed_multiplier=self._playback.speed_multiplier,
            status=self._playback.status,
        )

    @property
    def status(self) -> PlaybackStatus:
        return self._playback.status

    @property
    def progress(self) -> float:
        return self._playback.overall_progress

    @property
    def event_count(self) -> int:
        return len(self.rules.timeline)

    @property
    def tick_active(self) -> bool:
        return self._tick is not None and self._tick.active

    def snapshot(self) -> PlaybackSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Operations

    def play(self) -> None:
        if self._closed or self._playback.status == PlaybackStatus.PLAYING:
            return
        if self._playback.overall_progress >= 1.0:
            logger.debug("Replaying deployment from the start.")
            self._playback.overall_progress = 0.0
        self._playback.status = PlaybackStatus.PLAYING
        self._acquire_tick()
        self._publish(ChangeKind.STATUS)

    def pause(self) -> None:
        if self._playback.status != PlaybackStatus.PLAYING:
            return
        self._release_tick()
        self._playback.status = PlaybackStatus.PAUSED
        self._publish(ChangeKind.STATUS)

    def toggle(self) -> None:
        if self._playback.status == PlaybackStatus.PLAYING:
            self.pause()
        else:
            self.play()

    def seek(self, progress: float) -> None:
        self._playback.overall_progress = clamp_progress(progress)
        self._publish(ChangeKind.SEEK)

    def reset(self) -> None:
        self._release_tick()
        self._playback.status = PlaybackStatus.STOPPED
        self._playback.overall_progress = 0.0
        self._publish(ChangeKind.RESET)

    def step(self, direction: StepDirection) -> None:
        count = self.event_count
        current = self._playback.overall_progress
        index = resolve_event_index(current, count)
        if StepDirection(direction) == StepDirection.FORWARD:
            target = index + 1
        elif current > event_progress(index, count) and not math.isclose(current, event_progress(index, count)):
            target = index
        else:
            target = index - 1
        self.pause()
        self.seek(event_progress(target, count))

    def set_speed(self, multiplier: float) -> None:
        config = self.rules.playback
        if math.isnan(multiplier) or multiplier <= 0:
            clamped = config.min_speed
        else:
            clamped = max(config.min_speed, min(config.max_speed, multiplier))
        if clamped != multiplier:
            logger.debug("Playback speed %s clamped to %s.", multiplier, clamped)
        self._playback.speed_multiplier = clamped
        self._publish(ChangeKind.SPEED)

    def jump_to_event(self, index: int) -> None:
        self.seek(event_progress(index, self.event_count))

    def jump_to_preset(self, name: str) -> None:
        try:
            target = self.rules.presets[name]
        except KeyError:
            raise KeyError(f"Unknown preset: {name}") from None
        self.pause()
        self.seek(target)

    def skip_to_end(self) -> None:
        self.pause()
        self.seek(1.0)

    def tick(self) -> None:
        if self._playback.status != PlaybackStatus.PLAYING:
            return
        delta = self._playback.speed_multiplier * self.rules.playback.tick_delta
        progress = min(1.0, self._playback.overall_progress + delta)
        self._playback.overall_progress = progress
        if progress >= 1.0:
            self._release_tick()
            self._playback.status = PlaybackStatus.STOPPED
            logger.info("Deployment sequence complete.")
            self._publish(ChangeKind.COMPLETE)
            return
        self._publish(ChangeKind.TICK)

    def close(self) -> None:
        self._release_tick()
        if self._playback.status == PlaybackStatus.PLAYING:
            self._playback.status = PlaybackStatus.PAUSED
        self._listeners.clear()
        self._closed = True
        self._snapshot = self._build_snapshot()

    def __enter__(self) -> "PlaybackController":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    # Internals

    def _acquire_tick(self) -> None:
        self._release_tick()
        self._tick = ScheduledTick(self._scheduler, self.rules.playback.tick_interval, self.tick)
        self._tick.start()

    def _release_tick(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None

    def _build_snapshot(self) -> PlaybackSnapshot:
        progress = self._playback.overall_progress
        event = resolve_event(progress, self.rules.timeline)
        return PlaybackSnapshot(
            state=evaluate(progress, self.rules),
            event_index=event.index,
            event=event,
            status=self._playback.status,
            speed_multiplier=self._playback.speed_multiplier,
        )

    def _publish(self, kind: ChangeKind) -> None:
        self._snapshot = self._build_snapshot()
        change = PlaybackChange(kind=kind, progress=self._playback.overall_progress)
        for listener in list(self._listeners):
            listener(change)
