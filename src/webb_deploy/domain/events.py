"""Playback change notifications."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChangeKind(str, Enum):
    TICK = "tick"
    SEEK = "seek"
    STATUS = "status"
    SPEED = "speed"
    RESET = "reset"
    COMPLETE = "complete"


@dataclass(frozen=True)
class PlaybackChange:
    kind: ChangeKind
    progress: float
