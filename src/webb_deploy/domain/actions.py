"""Action definitions for reducer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union

from webb_deploy.domain.types import StepDirection


@dataclass(frozen=True)
class Play:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class Seek:
    progress: float


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Step:
    direction: StepDirection


@dataclass(frozen=True)
class SetSpeed:
    multiplier: float


@dataclass(frozen=True)
class JumpToEvent:
    index: int


@dataclass(frozen=True)
class JumpToPreset:
    name: str


@dataclass(frozen=True)
class SkipToEnd:
    pass


Action: TypeAlias = Union[
    Play,
    Pause,
    Seek,
    Reset,
    Step,
    SetSpeed,
    JumpToEvent,
    JumpToPreset,
    SkipToEnd,
]
