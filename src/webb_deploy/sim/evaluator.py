"""Pure progress -> DeploymentState evaluation.

Each phase owns a ``[start, end)`` window and interpolates one state field
from its stowed to its deployed value with a smoothstep ease. Windows for
different subsystems overlap freely. When several phases drive the same
field, the latest phase (in schedule order) whose window has opened decides
the value, and before any of them opens the field holds the first phase's
stowed value.

``stage`` is looked up on the timeline, independently of the windows, so the
milestone label and the mechanical motion are allowed to disagree.
"""

from __future__ import annotations

from typing import Sequence

from webb_deploy.domain.types import (
    DeploymentStage,
    DeploymentState,
    PhaseDefinition,
    StateField,
    TimelineEvent,
)
from webb_deploy.rules.schedule import DeploymentRules, default_rules
from webb_deploy.sim.resolver import clamp_progress, resolve_event, resolve_event_index


def smoothstep(t: float) -> float:
    t = max(0.0, min(1.0, t))
    return t * t * (3.0 - 2.0 * t)


def window_progress(progress: float, start: float, end: float) -> float:
    """Linear position inside ``[start, end)``, clamped to [0, 1]."""
    if end <= start:
        return 1.0 if progress >= start else 0.0
    return max(0.0, min(1.0, (progress - start) / (end - start)))


def _interpolate(phase: PhaseDefinition, progress: float) -> tuple[float, ...]:
    eased = smoothstep(window_progress(progress, phase.start, phase.end))
    return tuple(s + (d - s) * eased for s, d in zip(phase.stowed, phase.deployed))


def field_value(phases: Sequence[PhaseDefinition], progress: float) -> tuple[float, ...]:
    active = phases[0]
    for phase in phases:
        if progress >= phase.start:
            active = phase
    return _interpolate(active, progress)


def stage_for(progress: float, timeline: Sequence[TimelineEvent]) -> DeploymentStage:
    return resolve_event(progress, timeline).stage


def stage_progress(progress: float, event_count: int) -> float:
    """Fraction travelled through the current milestone segment, in [0, 1)."""
    if event_count <= 1:
        return 0.0
    segments = event_count - 1
    index = resolve_event_index(progress, event_count)
    if index == segments:
        return 0.0
    return max(0.0, min(1.0, clamp_progress(progress) * segments - index))


def evaluate(progress: float, rules: DeploymentRules | None = None) -> DeploymentState:
    rules = rules or default_rules()
    progress = clamp_progress(progress)

    values: dict[StateField, tuple[float, ...]] = {}
    for field in StateField:
        phases = rules.phases_for(field)
        if phases:
            values[field] = field_value(phases, progress)
        else:
            values[field] = tuple(0.0 for _ in range(rules.arity(field)))

    wings = values[StateField.MIRROR_WING_ROTATIONS]
    return DeploymentState(
        stage=stage_for(progress, rules.timeline),
        overall_progress=progress,
        stage_progress=stage_progress(progress, len(rules.timeline)),
        solar_array_angle=values[StateField.SOLAR_ARRAY_ANGLE][0],
        sunshield_layer_offsets=values[StateField.SUNSHIELD_LAYER_OFFSETS],
        sunshield_tension=values[StateField.SUNSHIELD_TENSION][0],
        secondary_mirror_extension=values[StateField.SECONDARY_MIRROR_EXTENSION][0],
        mirror_wing_rotations=(wings[0], wings[1]),
        total_days=rules.playback.total_duration_units,
    )


def fully_stowed(rules: DeploymentRules | None = None) -> DeploymentState:
    return evaluate(0.0, rules)


def fully_deployed(rules: DeploymentRules | None = None) -> DeploymentState:
    return evaluate(1.0, rules)
