"""Data-driven deployment schedule."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from webb_deploy.domain.types import (
    DeploymentStage,
    PhaseDefinition,
    StateField,
    Subsystem,
    TimelineEvent,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

FIELD_ARITY: dict[StateField, int | None] = {
    StateField.SOLAR_ARRAY_ANGLE: 1,
    # Sunshield arity comes from ``layer_count``.
    StateField.SUNSHIELD_LAYER_OFFSETS: None,
    StateField.SUNSHIELD_TENSION: 1,
    StateField.SECONDARY_MIRROR_EXTENSION: 1,
    StateField.MIRROR_WING_ROTATIONS: 2,
}


class ScheduleError(ValueError):
    """Error loading or validating the deployment schedule."""


@dataclass(frozen=True)
class PlaybackConfig:
    tick_interval: float
    step_unit: float
    total_duration_units: float
    min_speed: float
    max_speed: float
    default_speed: float

    @property
    def tick_delta(self) -> float:
        """Progress added by one tick at speed 1."""
        return self.step_unit / self.total_duration_units


@dataclass(frozen=True)
class DeploymentRules:
    """Loaded and validated schedule, timeline and playback constants."""

    layer_count: int
    phases: tuple[PhaseDefinition, ...]
    timeline: tuple[TimelineEvent, ...]
    presets: dict[str, float]
    playback: PlaybackConfig

    def phases_for(self, field: StateField) -> tuple[PhaseDefinition, ...]:
        return tuple(phase for phase in self.phases if phase.field == field)

    def arity(self, field: StateField) -> int:
        arity = FIELD_ARITY[field]
        return self.layer_count if arity is None else arity

    @staticmethod
    def load(data_dir: Path) -> "DeploymentRules":
        """Load rules from ``schedule.json`` and ``timeline.json`` in data_dir."""
        schedule = _load_json(data_dir / "schedule.json")
        timeline = _load_timeline(data_dir / "timeline.json")

        path = data_dir / "schedule.json"
        layer_count = _integer(path, "layer_count", schedule.get("layer_count", 5))
        if layer_count < 1:
            raise ScheduleError(f"{path}: layer_count must be >= 1")

        return DeploymentRules(
            layer_count=layer_count,
            phases=_load_phases(path, schedule, layer_count),
            timeline=timeline,
            presets=_load_presets(path, schedule.get("presets", {})),
            playback=_load_playback(path, schedule.get("playback", {})),
        )


@lru_cache(maxsize=1)
def default_rules() -> DeploymentRules:
    return DeploymentRules.load(DATA_DIR)


def _load_json(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise ScheduleError(f"Schedule file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ScheduleError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ScheduleError(f"{path}: top level must be an object")
    return data


def _number(path: Path, name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ScheduleError(f"{path}: {name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ScheduleError(f"{path}: {name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ScheduleError(f"{path}: {name} must be finite, got {value!r}")
    return number


def _integer(path: Path, name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ScheduleError(f"{path}: {name} must be an integer, got {value!r}")
    return value


def _load_phases(path: Path, data: dict[str, Any], layer_count: int) -> tuple[PhaseDefinition, ...]:
    if "phases" not in data:
        raise ScheduleError(f"{path}: missing 'phases' key")
    if not isinstance(data["phases"], list):
        raise ScheduleError(f"{path}: phases must be a list")
    phases: list[PhaseDefinition] = []
    for item in data["phases"]:
        if not isinstance(item, dict):
            raise ScheduleError(f"{path}: phase entry must be object")
        phase_id = item.get("id")
        if not isinstance(phase_id, str):
            raise ScheduleError(f"{path}: phase.id must be string")
        try:
            field = StateField(item.get("field"))
        except ValueError as exc:
            raise ScheduleError(f"{path}: phase {phase_id!r} has unknown field {item.get('field')!r}") from exc
        try:
            subsystem = Subsystem(item.get("subsystem"))
        except ValueError as exc:
            raise ScheduleError(
                f"{path}: phase {phase_id!r} has unknown subsystem {item.get('subsystem')!r}"
            ) from exc

        window = item.get("window")
        if not isinstance(window, list) or len(window) != 2:
            raise ScheduleError(f"{path}: phase {phase_id!r} window must be [start, end]")
        start = _number(path, f"phase {phase_id!r} window start", window[0])
        end = _number(path, f"phase {phase_id!r} window end", window[1])
        if not (0.0 <= start <= end <= 1.0):
            raise ScheduleError(f"{path}: phase {phase_id!r} window must satisfy 0 <= start <= end <= 1")
        if phases and start < phases[-1].start:
            raise ScheduleError(f"{path}: phase {phase_id!r} starts before {phases[-1].id!r}")

        arity = layer_count if FIELD_ARITY[field] is None else FIELD_ARITY[field]
        phases.append(
            PhaseDefinition(
                id=phase_id,
                subsystem=subsystem,
                start=start,
                end=end,
                field=field,
                stowed=_expand_value(path, phase_id, item.get("stowed"), arity),
                deployed=_expand_value(path, phase_id, item.get("deployed"), arity),
            )
        )

    if not phases:
        raise ScheduleError(f"{path}: at least one phase is required")
    _warn_on_discontinuities(phases)
    return tuple(phases)


def _expand_value(path: Path, phase_id: str, value: Any, arity: int) -> tuple[float, ...]:
    """Normalize scalar, list or ``{"base", "step"}`` targets to a tuple of ``arity`` floats."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (_number(path, f"phase {phase_id!r} target", value),) * arity
    if isinstance(value, list):
        if len(value) != arity:
            raise ScheduleError(f"{path}: phase {phase_id!r} expects {arity} values, got {len(value)}")
        return tuple(_number(path, f"phase {phase_id!r} target", v) for v in value)
    if isinstance(value, dict) and "base" in value:
        base = _number(path, f"phase {phase_id!r} base", value["base"])
        step = _number(path, f"phase {phase_id!r} step", value.get("step", 0.0))
        return tuple(base + step * i for i in range(arity))
    raise ScheduleError(f"{path}: phase {phase_id!r} has invalid target value {value!r}")


def _warn_on_discontinuities(phases: list[PhaseDefinition]) -> None:
    last_by_field: dict[StateField, PhaseDefinition] = {}
    for phase in phases:
        previous = last_by_field.get(phase.field)
        if previous is not None and not all(
            math.isclose(a, b, abs_tol=1e-9) for a, b in zip(previous.deployed, phase.stowed)
        ):
            logger.warning(
                "Phase %s starts from %s but %s ends at %s; %s will jump.",
                phase.id,
                phase.stowed,
                previous.id,
                previous.deployed,
                phase.field.value,
            )
        last_by_field[phase.field] = phase


def _load_timeline(path: Path) -> tuple[TimelineEvent, ...]:
    data = _load_json(path)
    if "events" not in data:
        raise ScheduleError(f"{path}: missing 'events' key")
    events: list[TimelineEvent] = []
    if not isinstance(data["events"], list):
        raise ScheduleError(f"{path}: events must be a list")
    for index, item in enumerate(data["events"]):
        if not isinstance(item, dict):
            raise ScheduleError(f"{path}: event entry must be object")
        label = item.get("label")
        if not isinstance(label, str) or not label.strip():
            raise ScheduleError(f"{path}: event.label must be a non-empty string")
        try:
            stage = DeploymentStage(item.get("stage"))
        except ValueError as exc:
            raise ScheduleError(f"{path}: event {label!r} has unknown stage {item.get('stage')!r}") from exc
        description = item.get("description") or ""
        events.append(
            TimelineEvent(
                index=index,
                day=_integer(path, f"event {label!r} day", item.get("day", 0)),
                time=str(item.get("time", "00:00:00")),
                label=label,
                description=str(description),
                stage=stage,
            )
        )
    if not events:
        raise ScheduleError(f"{path}: timeline must contain at least one event")
    for previous, current in zip(events, events[1:]):
        if current.day < previous.day:
            raise ScheduleError(f"{path}: event {current.label!r} is earlier than {previous.label!r}")
    return tuple(events)


def _load_presets(path: Path, value: Any) -> dict[str, float]:
    if not isinstance(value, dict):
        raise ScheduleError(f"{path}: presets must be object")
    presets: dict[str, float] = {}
    for name, progress in value.items():
        presets[str(name)] = min(1.0, max(0.0, _number(path, f"preset {name!r}", progress)))
    return presets


def _load_playback(path: Path, data: Any) -> PlaybackConfig:
    if not isinstance(data, dict):
        raise ScheduleError(f"{path}: playback must be object")
    config = PlaybackConfig(
        tick_interval=_number(path, "playback.tick_interval", data.get("tick_interval", 0.1)),
        step_unit=_number(path, "playback.step_unit", data.get("step_unit", 0.01)),
        total_duration_units=_number(
            path, "playback.total_duration_units", data.get("total_duration_units", 14.0)
        ),
        min_speed=_number(path, "playback.min_speed", data.get("min_speed", 0.1)),
        max_speed=_number(path, "playback.max_speed", data.get("max_speed", 5.0)),
        default_speed=_number(path, "playback.default_speed", data.get("default_speed", 1.0)),
    )
    if config.tick_interval <= 0 or config.step_unit <= 0 or config.total_duration_units <= 0:
        raise ScheduleError(f"{path}: playback interval, step_unit and total_duration_units must be > 0")
    if not (0 < config.min_speed <= config.default_speed <= config.max_speed):
        raise ScheduleError(f"{path}: playback speeds must satisfy 0 < min <= default <= max")
    return config
