from __future__ import annotations

import logging
from collections.abc import Sequence

from clipsense.errors import InvalidInputError
from clipsense.models import CutReason, CutSuggestion, FrameSample, SceneEvent
from clipsense.sampling import ensure_ordered

logger = logging.getLogger(__name__)

DEFAULT_MAJOR_SCENE_INTENSITY = 50.0
DEFAULT_LOW_MOTION_WINDOW = 5
DEFAULT_LOW_MOTION_EDGE_THRESHOLD = 10.0
DEFAULT_LOW_MOTION_CONFIDENCE = 0.7


def suggest_cuts(
    samples: Sequence[FrameSample],
    scenes: Sequence[SceneEvent],
    *,
    major_scene_intensity: float = DEFAULT_MAJOR_SCENE_INTENSITY,
    low_motion_window: int = DEFAULT_LOW_MOTION_WINDOW,
    low_motion_edge_threshold: float = DEFAULT_LOW_MOTION_EDGE_THRESHOLD,
    low_motion_confidence: float = DEFAULT_LOW_MOTION_CONFIDENCE,
) -> tuple[CutSuggestion, ...]:
    """Suggest cuts at major scene changes and at the start of low-motion stretches.

    Scene cuts come first, in scene order, followed by one low-motion
    suggestion per qualifying window position. Overlapping windows are not
    merged here.
    """

    if low_motion_window < 1:
        raise InvalidInputError(f"low_motion_window must be >= 1, got {low_motion_window}.")
    ensure_ordered(samples, label="frame samples")

    suggestions = [
        CutSuggestion(
            time=scene.time,
            reason=CutReason.SCENE_CHANGE,
            confidence=min(scene.intensity / 100.0, 1.0),
        )
        for scene in scenes
        if scene.intensity > major_scene_intensity
    ]
    scene_cut_count = len(suggestions)

    # the window never reaches the final sample
    for index in range(len(samples) - low_motion_window):
        window = samples[index : index + low_motion_window]
        mean_edge = sum(sample.edge_intensity for sample in window) / low_motion_window
        if mean_edge < low_motion_edge_threshold:
            suggestions.append(
                CutSuggestion(
                    time=window[0].time,
                    reason=CutReason.LOW_MOTION,
                    confidence=low_motion_confidence,
                    duration=window[-1].time - window[0].time,
                )
            )

    logger.debug(
        "Suggested %d scene cuts and %d low-motion cuts",
        scene_cut_count,
        len(suggestions) - scene_cut_count,
    )
    return tuple(suggestions)
