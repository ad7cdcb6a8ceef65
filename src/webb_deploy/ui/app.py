from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer

from webb_deploy.domain.events import PlaybackChange
from webb_deploy.domain.types import StepDirection
from webb_deploy.sim.playback import PlaybackController
from webb_deploy.ui.widgets import DeploymentPanel, HeaderBar, TimelinePanel


class DeploymentApp(App[None]):
    CSS_PATH = "app.tcss"

    BINDINGS = [
        Binding("space", "toggle", "Play/Pause"),
        Binding("right", "step_forward", "Next"),
        Binding("left", "step_back", "Prev"),
        Binding("r", "reset", "Reset"),
        Binding("e", "skip_to_end", "End"),
        Binding("plus", "faster", "Faster"),
        Binding("minus", "slower", "Slower"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, controller: PlaybackController | None = None) -> None:
        super().__init__()
        self.controller = controller or PlaybackController()
        self._unsubscribe = self.controller.subscribe(self._on_change)

    def compose(self) -> ComposeResult:
        yield HeaderBar(self.controller, classes="header-bar")
        with Horizontal(id="panels"):
            yield DeploymentPanel(self.controller, classes="box", id="deployment-panel")
            yield TimelinePanel(self.controller, classes="box", id="timeline-panel")
        yield Footer()

    def on_unmount(self) -> None:
        self._unsubscribe()
        self.controller.close()

    def _on_change(self, change: PlaybackChange) -> None:
        self.refresh_panels()

    def refresh_panels(self) -> None:
        for widget_type in (HeaderBar, DeploymentPanel, TimelinePanel):
            for widget in self.query(widget_type):
                widget.refresh()

    def action_toggle(self) -> None:
        self.controller.toggle()

    def action_step_forward(self) -> None:
        self.controller.step(StepDirection.FORWARD)

    def action_step_back(self) -> None:
        self.controller.step(StepDirection.BACK)

    def action_reset(self) -> None:
        self.controller.reset()

    def action_skip_to_end(self) -> None:
        self.controller.skip_to_end()

    def action_faster(self) -> None:
        self.controller.set_speed(self.controller.playback.speed_multiplier * 2)

    def action_slower(self) -> None:
        self.controller.set_speed(self.controller.playback.speed_multiplier / 2)
