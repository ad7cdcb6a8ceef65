from __future__ import annotations

import asyncio

from tests.helpers.factories import make_controller
from webb_deploy.domain.types import PlaybackStatus
from webb_deploy.sim.evaluator import evaluate
from webb_deploy.ui.app import DeploymentApp
from webb_deploy.ui.widgets import _bar, subsystem_lines


def test_bar_is_clamped_to_width() -> None:
    assert _bar(0.0, width=4) == "[    ]"
    assert _bar(0.5, width=4) == "[██  ]"
    assert _bar(3.0, width=4) == "[████]"


def test_subsystem_lines_report_every_subsystem() -> None:
    lines = subsystem_lines(evaluate(1.0))
    assert len(lines) == 5
    assert lines[0].startswith("SOLAR ARRAY")
    assert "+0.0°" in lines[0]
    assert "100%" in lines[2]
    assert "100%" in lines[3]
    assert lines[4].startswith("MIRROR WINGS")
    assert lines[4].count("+0.0°") == 2


def test_app_exposes_playback_actions() -> None:
    for name in ("toggle", "step_forward", "step_back", "reset", "skip_to_end", "faster", "slower"):
        assert hasattr(DeploymentApp, f"action_{name}")


def test_key_bindings_drive_controller() -> None:
    controller, scheduler = make_controller()

    async def scenario() -> None:
        app = DeploymentApp(controller)
        async with app.run_test() as pilot:
            await pilot.press("right")
            assert controller.snapshot().event_index == 1
            await pilot.press("space")
            assert controller.status == PlaybackStatus.PLAYING
            await pilot.press("space")
            assert controller.status == PlaybackStatus.PAUSED
            await pilot.press("r")
            assert controller.progress == 0.0

    asyncio.run(scenario())
    assert scheduler.pending == []
