from __future__ import annotations

from dataclasses import dataclass

from webb_deploy.domain.actions import (
    Action,
    JumpToEvent,
    JumpToPreset,
    Pause,
    Play,
    Reset,
    Seek,
    SetSpeed,
    SkipToEnd,
    Step,
)
from webb_deploy.domain.types import PlaybackSnapshot, StepDirection
from webb_deploy.sim.playback import PlaybackController


@dataclass()
class ActionResult:
    ok: bool
    message: str | None
    message_kind: str | None
    snapshot: PlaybackSnapshot


def apply_action(controller: PlaybackController, action: Action) -> ActionResult:
    def ok(message: str | None, kind: str = "info") -> ActionResult:
        return ActionResult(ok=True, message=message, message_kind=kind, snapshot=controller.snapshot())

    def fail(message: str) -> ActionResult:
        return ActionResult(ok=False, message=message, message_kind="error", snapshot=controller.snapshot())

    if isinstance(action, Play):
        controller.play()
        return ok("Playback started", "accent")

    if isinstance(action, Pause):
        controller.pause()
        return ok("Playback paused")

    if isinstance(action, Seek):
        controller.seek(action.progress)
        return ok(f"Seeked to day {controller.snapshot().state.mission_day:.1f}")

    if isinstance(action, Reset):
        controller.reset()
        return ok("Deployment reset")

    if isinstance(action, Step):
        try:
            direction = StepDirection(action.direction)
        except ValueError:
            return fail(f"Unknown step direction: {action.direction}")
        controller.step(direction)
        return ok(f"Milestone: {controller.snapshot().event.label}")

    if isinstance(action, SetSpeed):
        controller.set_speed(action.multiplier)
        return ok(f"Playback speed {controller.snapshot().speed_multiplier:g}x")

    if isinstance(action, JumpToEvent):
        controller.jump_to_event(action.index)
        return ok(f"Milestone: {controller.snapshot().event.label}")

    if isinstance(action, JumpToPreset):
        try:
            controller.jump_to_preset(action.name)
        except KeyError:
            return fail(f"Unknown preset: {action.name}")
        return ok(f"Jumped to {action.name}", "accent")

    if isinstance(action, SkipToEnd):
        controller.skip_to_end()
        return ok("Skipped to end")

    return fail("Unknown action")
