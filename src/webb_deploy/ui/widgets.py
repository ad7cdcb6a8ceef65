from __future__ import annotations

from textual.widgets import Static

from webb_deploy.domain.types import DeploymentState, PlaybackSnapshot, PlaybackStatus
from webb_deploy.sim.playback import PlaybackController


def _pct(value: float) -> int:
    return int(max(0.0, min(1.0, value)) * 100)


def _bar(value: float, width: int = 24) -> str:
    value = max(0.0, min(1.0, value))
    filled = int(value * width)
    return "[" + ("█" * filled) + (" " * (width - filled)) + "]"


def _fmt_angle(degrees: float) -> str:
    return f"{degrees:+6.1f}°"


def _status_label(status: PlaybackStatus) -> tuple[str, str]:
    """Return (label, rich_color_name)."""
    if status == PlaybackStatus.PLAYING:
        return ("PLAYING", "#4ade80")
    if status == PlaybackStatus.PAUSED:
        return ("PAUSED", "#f0b429")
    return ("STOPPED", "#a7adb5")


def _stage_title(snapshot: PlaybackSnapshot) -> str:
    return snapshot.state.stage.value.replace("_", " ").upper()


def subsystem_lines(state: DeploymentState) -> list[str]:
    offsets = " ".join(f"{offset:+.2f}" for offset in state.sunshield_layer_offsets)
    left, right = state.mirror_wing_rotations
    return [
        f"SOLAR ARRAY       {_fmt_angle(state.solar_array_angle)}",
        f"SUNSHIELD LAYERS  {offsets}",
        f"SUNSHIELD TENSION {_bar(state.sunshield_tension)} {_pct(state.sunshield_tension):>3}%",
        f"SECONDARY MIRROR  {_bar(state.secondary_mirror_extension)} {_pct(state.secondary_mirror_extension):>3}%",
        f"MIRROR WINGS      L {_fmt_angle(left)}  R {_fmt_angle(right)}",
    ]


class HeaderBar(Static):
    """Single-line status header. Uses rich markup for styling."""

    def __init__(self, controller: PlaybackController, **kwargs) -> None:
        super().__init__(markup=True, **kwargs)
        self.controller = controller

    def render(self) -> str:
        snapshot = self.controller.snapshot()
        label, color = _status_label(snapshot.status)
        return (
            f"[bold]DAY:[/] {snapshot.state.mission_day:4.1f}  |  "
            f"[bold]STAGE:[/] {_stage_title(snapshot)}  |  "
            f"[bold]SPEED:[/] {snapshot.speed_multiplier:g}x  |  "
            f"[bold {color}]{label}[/]"
        )


class DeploymentPanel(Static):
    def __init__(self, controller: PlaybackController, **kwargs) -> None:
        super().__init__(markup=True, **kwargs)
        self.controller = controller

    def render(self) -> str:
        state = self.controller.snapshot().state
        lines = [
            "[bold]MECHANICAL STATE[/]",
            f"PROGRESS          {_bar(state.overall_progress)} {_pct(state.overall_progress):>3}%",
            "",
            *subsystem_lines(state),
        ]
        return "\n".join(lines)


class TimelinePanel(Static):
    def __init__(self, controller: PlaybackController, **kwargs) -> None:
        super().__init__(markup=True, **kwargs)
        self.controller = controller

    def render(self) -> str:
        snapshot = self.controller.snapshot()
        lines = ["[bold]TIMELINE[/]"]
        for event in self.controller.rules.timeline:
            row = f"Day {event.day:>2} {event.time}  {event.label}"
            if event.index == snapshot.event_index:
                lines.append(f"[reverse]> {row}[/]")
            else:
                lines.append(f"  {row}")
        lines.extend(["", f"[dim]{snapshot.event.description}[/]"])
        return "\n".join(lines)
