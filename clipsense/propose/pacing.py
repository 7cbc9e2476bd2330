from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from clipsense.models import CutReason, CutSuggestion, FrameSample, PacingPlan, SpeedAdjustment, TimeRange
from clipsense.sampling import ensure_ordered

logger = logging.getLogger(__name__)

DEFAULT_SLOW_EDGE_THRESHOLD = 15.0
DEFAULT_REMOVAL_SECONDS = 1.0


class PacingMode(str, Enum):
    SLOW = "slow"
    BALANCED = "balanced"
    FAST = "fast"


@dataclass(frozen=True, slots=True)
class PacingProfile:
    confidence_threshold: float
    speed_range: tuple[float, float]


PACING_PROFILES: dict[PacingMode, PacingProfile] = {
    PacingMode.SLOW: PacingProfile(confidence_threshold=0.6, speed_range=(0.9, 1.1)),
    PacingMode.BALANCED: PacingProfile(confidence_threshold=0.7, speed_range=(0.9, 1.2)),
    PacingMode.FAST: PacingProfile(confidence_threshold=0.8, speed_range=(1.0, 1.5)),
}


def resolve_pacing_mode(mode: PacingMode | str) -> PacingMode:
    """Map a mode name onto the fixed table, falling back to balanced."""

    if isinstance(mode, PacingMode):
        return mode

    normalized = str(mode).lower().strip()
    try:
        return PacingMode(normalized)
    except ValueError:
        logger.warning("Unknown pacing mode '%s'; using balanced.", mode)
        return PacingMode.BALANCED


def plan_pacing(
    samples: Sequence[FrameSample],
    suggestions: Sequence[CutSuggestion],
    mode: PacingMode | str = PacingMode.BALANCED,
    *,
    slow_edge_threshold: float = DEFAULT_SLOW_EDGE_THRESHOLD,
) -> PacingPlan:
    """Build cuts, dead-segment removals and speed-ups for one edit.

    The three outputs are derived independently and are not reconciled.
    """

    ensure_ordered(samples, label="frame samples")
    profile = PACING_PROFILES[resolve_pacing_mode(mode)]

    cuts: list[float] = []
    removals: list[TimeRange] = []
    for suggestion in suggestions:
        if suggestion.confidence > profile.confidence_threshold:
            cuts.append(suggestion.time)

        if suggestion.reason is CutReason.LOW_MOTION:
            length = suggestion.duration if suggestion.duration else DEFAULT_REMOVAL_SECONDS
            removals.append(TimeRange(start=suggestion.time, end=suggestion.time + length))

    speed_up = profile.speed_range[1]
    adjustments = [
        SpeedAdjustment(start=prev.time, end=curr.time, speed_factor=speed_up)
        for prev, curr in zip(samples, samples[1:])
        if prev.edge_intensity < slow_edge_threshold
    ]

    logger.debug(
        "Pacing plan: %d cuts, %d speed adjustments, %d removals",
        len(cuts),
        len(adjustments),
        len(removals),
    )
    return PacingPlan(
        cuts=tuple(cuts),
        speed_adjustments=tuple(adjustments),
        remove_segments=tuple(removals),
    )
