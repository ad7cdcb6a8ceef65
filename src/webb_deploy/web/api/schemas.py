from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, validate_by_name=True)


class TimelineEvent(CamelModel):
    index: int
    day: int
    time: str
    label: str
    description: str
    stage: str


class DeploymentState(CamelModel):
    stage: str
    overall_progress: float = Field(..., alias="overallProgress")
    stage_progress: float = Field(..., alias="stageProgress")
    mission_day: float = Field(..., alias="missionDay")
    solar_array_angle: float = Field(..., alias="solarArrayAngle")
    sunshield_layer_offsets: List[float] = Field(..., alias="sunshieldLayerOffsets")
    sunshield_tension: float = Field(..., alias="sunshieldTension")
    secondary_mirror_extension: float = Field(..., alias="secondaryMirrorExtension")
    mirror_wing_rotations: List[float] = Field(..., alias="mirrorWingRotations")


class PlaybackSnapshot(CamelModel):
    status: str
    is_playing: bool = Field(..., alias="isPlaying")
    speed_multiplier: float = Field(..., alias="speedMultiplier")
    event_index: int = Field(..., alias="eventIndex")
    event: TimelineEvent
    state: DeploymentState


class PlaybackLimits(CamelModel):
    tick_interval: float = Field(..., alias="tickInterval")
    min_speed: float = Field(..., alias="minSpeed")
    max_speed: float = Field(..., alias="maxSpeed")
    total_days: float = Field(..., alias="totalDays")


class Preset(CamelModel):
    name: str
    progress: float


class TimelineResponse(CamelModel):
    events: List[TimelineEvent]
    presets: List[Preset]
    playback: PlaybackLimits


class ApiResponse(CamelModel):
    ok: bool
    message: Optional[str] = None
    message_kind: str = Field("info", alias="messageKind")
    state: Optional[PlaybackSnapshot] = None


class SeekRequest(CamelModel):
    progress: float


class StepRequest(CamelModel):
    direction: str


class SpeedRequest(CamelModel):
    multiplier: float


class JumpRequest(CamelModel):
    index: int


class PresetRequest(CamelModel):
    name: str
