"""Common types and enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DeploymentStage(str, Enum):
    """Discrete milestone stages, in timeline order."""

    LAUNCH = "launch"
    SEPARATION = "separation"
    SOLAR_ARRAY = "solar_array"
    SUNSHIELD_PALLET = "sunshield_pallet"
    SUNSHIELD_SEPARATION = "sunshield_separation"
    SUNSHIELD_TENSIONING = "sunshield_tensioning"
    SECONDARY_MIRROR = "secondary_mirror"
    PRIMARY_MIRROR_WINGS = "primary_mirror_wings"
    COMPLETE = "complete"


class Subsystem(str, Enum):
    SOLAR_ARRAY = "solar_array"
    SUNSHIELD = "sunshield"
    SECONDARY_MIRROR = "secondary_mirror"
    PRIMARY_MIRROR = "primary_mirror"


class StateField(str, Enum):
    """DeploymentState fields a phase can drive."""

    SOLAR_ARRAY_ANGLE = "solar_array_angle"
    SUNSHIELD_LAYER_OFFSETS = "sunshield_layer_offsets"
    SUNSHIELD_TENSION = "sunshield_tension"
    SECONDARY_MIRROR_EXTENSION = "secondary_mirror_extension"
    MIRROR_WING_ROTATIONS = "mirror_wing_rotations"


class PlaybackStatus(str, Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class StepDirection(str, Enum):
    FORWARD = "forward"
    BACK = "back"


@dataclass(frozen=True, slots=True)
class PhaseDefinition:
    """One time-windowed motion for a single DeploymentState field.

    ``stowed`` and ``deployed`` are tuples so scalar and per-layer fields share
    one interpolation path; scalar fields carry one element.
    """

    id: str
    subsystem: Subsystem
    start: float
    end: float
    field: StateField
    stowed: tuple[float, ...]
    deployed: tuple[float, ...]


@dataclass(frozen=True, slots=True)
class TimelineEvent:
    index: int
    day: int
    time: str
    label: str
    description: str
    stage: DeploymentStage


@dataclass(frozen=True, slots=True)
class DeploymentState:
    """Mechanical configuration at one progress value."""

    stage: DeploymentStage
    overall_progress: float
    stage_progress: float
    solar_array_angle: float
    sunshield_layer_offsets: tuple[float, ...]
    sunshield_tension: float
    secondary_mirror_extension: float
    mirror_wing_rotations: tuple[float, float]
    total_days: float = 14.0

    @property
    def mission_day(self) -> float:
        return self.overall_progress * self.total_days


@dataclass()
class PlaybackState:
    overall_progress: float = 0.0
    speed_multiplier: float = 1.0
    status: PlaybackStatus = PlaybackStatus.STOPPED

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING


@dataclass(frozen=True, slots=True)
class PlaybackSnapshot:
    state: DeploymentState
    event_index: int
    event: TimelineEvent
    status: PlaybackStatus
    speed_multiplier: float

    @property
    def is_playing(self) -> bool:
        return self.status == PlaybackStatus.PLAYING
