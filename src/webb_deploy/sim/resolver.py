"""Progress to milestone index mapping."""

from __future__ import annotations

import math
from typing import Sequence

from webb_deploy.domain.types import TimelineEvent

# Absorbs float error so that event_progress(i, n) resolves back to i.
_EPSILON = 1e-9


def clamp_progress(progress: float) -> float:
    if math.isnan(progress):
        return 0.0
    return max(0.0, min(1.0, progress))


def resolve_event_index(progress: float, event_count: int) -> int:
    if event_count < 1:
        raise ValueError(f"event_count must be >= 1, got {event_count}")
    progress = clamp_progress(progress)
    index = math.floor(progress * (event_count - 1) + _EPSILON)
    return min(event_count - 1, max(0, index))


def event_progress(index: int, event_count: int) -> float:
    """Exact progress value at which milestone ``index`` begins."""
    if event_count < 1:
        raise ValueError(f"event_count must be >= 1, got {event_count}")
    if event_count == 1:
        return 0.0
    index = min(event_count - 1, max(0, index))
    return index / (event_count - 1)


def resolve_event(progress: float, timeline: Sequence[TimelineEvent]) -> TimelineEvent:
    return timeline[resolve_event_index(progress, len(timeline))]
