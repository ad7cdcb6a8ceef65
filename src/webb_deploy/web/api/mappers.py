from __future__ import annotations

from webb_deploy.domain import types
from webb_deploy.rules.schedule import DeploymentRules
from webb_deploy.web.api import schemas


def build_snapshot_response(snapshot: types.PlaybackSnapshot) -> schemas.PlaybackSnapshot:
    return schemas.PlaybackSnapshot(
        status=snapshot.status.value,
        is_playing=snapshot.is_playing,
        speed_multiplier=snapshot.speed_multiplier,
        event_index=snapshot.event_index,
        event=_event(snapshot.event),
        state=_state(snapshot.state),
    )


def build_timeline_response(rules: DeploymentRules) -> schemas.TimelineResponse:
    config = rules.playback
    return schemas.TimelineResponse(
        events=[_event(event) for event in rules.timeline],
        presets=[schemas.Preset(name=name, progress=value) for name, value in rules.presets.items()],
        playback=schemas.PlaybackLimits(
            tick_interval=config.tick_interval,
            min_speed=config.min_speed,
            max_speed=config.max_speed,
            total_days=config.total_duration_units,
        ),
    )


def _event(event: types.TimelineEvent) -> schemas.TimelineEvent:
    return schemas.TimelineEvent(
        index=event.index,
        day=event.day,
        time=event.time,
        label=event.label,
        description=event.description,
        stage=event.stage.value,
    )


def _state(state: types.DeploymentState) -> schemas.DeploymentState:
    return schemas.DeploymentState(
        stage=state.stage.value,
        overall_progress=state.overall_progress,
        stage_progress=state.stage_progress,
        mission_day=state.mission_day,
        solar_array_angle=state.solar_array_angle,
        sunshield_layer_offsets=list(state.sunshield_layer_offsets),
        sunshield_tension=state.sunshield_tension,
        secondary_mirror_extension=state.secondary_mirror_extension,
        mirror_wing_rotations=list(state.mirror_wing_rotations),
    )
