from __future__ import annotations

from hypothesis import settings
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, precondition, rule, run_state_machine_as_test

from tests.helpers.factories import make_controller
from tests.helpers.invariants import assert_snapshot_consistent
from tests.helpers.strategies import any_progress_strategy, direction_strategy, speed_strategy
from webb_deploy.domain.types import PlaybackStatus, StepDirection
from webb_deploy.rules.schedule import default_rules


class PlaybackStateMachine(RuleBasedStateMachine):
    def __init__(self) -> None:
        super().__init__()
        self.rules = default_rules()
        self.controller, self.scheduler = make_controller(rules=self.rules)

    @rule()
    def play(self) -> None:
        self.controller.play()
        assert self.controller.status == PlaybackStatus.PLAYING

    @rule()
    def pause(self) -> None:
        was_playing = self.controller.status == PlaybackStatus.PLAYING
        before = self.controller.playback
        self.controller.pause()
        if was_playing:
            assert self.controller.status == PlaybackStatus.PAUSED
        else:
            assert self.controller.playback == before

    @rule(progress=any_progress_strategy())
    def seek(self, progress: float) -> None:
        status = self.controller.status
        self.controller.seek(progress)
        assert self.controller.progress == max(0.0, min(1.0, progress))
        assert self.controller.status == status

    @rule()
    def reset(self) -> None:
        self.controller.reset()
        assert self.controller.progress == 0.0
        assert self.controller.status == PlaybackStatus.STOPPED

    @rule(direction=direction_strategy())
    def step(self, direction: StepDirection) -> None:
        before = self.controller.snapshot().event_index
        self.controller.step(direction)
        after = self.controller.snapshot().event_index
        assert self.controller.status != PlaybackStatus.PLAYING
        if direction == StepDirection.FORWARD:
            assert after >= before
        else:
            assert after <= before

    @rule(multiplier=speed_strategy())
    def set_speed(self, multiplier: float) -> None:
        progress = self.controller.progress
        self.controller.set_speed(multiplier)
        assert self.controller.progress == progress

    @rule(index=st.integers(min_value=-3, max_value=15))
    def jump(self, index: int) -> None:
        self.controller.jump_to_event(index)
        expected = max(0, min(len(self.rules.timeline) - 1, index))
        assert self.controller.snapshot().event_index == expected

    @precondition(lambda self: self.controller.status == PlaybackStatus.PLAYING)
    @rule(seconds=st.floats(min_value=0.0, max_value=3.0))
    def advance_clock(self, seconds: float) -> None:
        before = self.controller.progress
        self.scheduler.advance(seconds)
        assert self.controller.progress >= before

    @invariant()
    def snapshot_matches_playback(self) -> None:
        snapshot = self.controller.snapshot()
        assert snapshot.state.overall_progress == self.controller.progress
        assert snapshot.status == self.controller.status
        assert_snapshot_consistent(snapshot, self.rules)

    @invariant()
    def tick_exists_only_while_playing(self) -> None:
        playing = self.controller.status == PlaybackStatus.PLAYING
        assert self.controller.tick_active == playing
        assert len(self.scheduler.pending) == (1 if playing else 0)

    def teardown(self) -> None:
        self.controller.close()
        assert self.scheduler.pending == []


def test_playback_state_machine() -> None:
    run_state_machine_as_test(
        PlaybackStateMachine,
        settings=settings(max_examples=25, stateful_step_count=30),
    )
