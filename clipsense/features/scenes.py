from __future__ import annotations

import logging
from collections.abc import Sequence

from clipsense.models import FrameSample, SceneEvent
from clipsense.sampling import ensure_ordered

logger = logging.getLogger(__name__)

DEFAULT_SCENE_THRESHOLD = 30.0


def detect_scene_changes(
    samples: Sequence[FrameSample],
    threshold: float = DEFAULT_SCENE_THRESHOLD,
) -> tuple[SceneEvent, ...]:
    """Emit a scene event wherever brightness or colourfulness jumps past ``threshold``.

    Each consecutive pair is compared once; the event is stamped with the later
    sample's time and carries the summed deltas as its intensity.
    """

    ensure_ordered(samples, label="frame samples")
    if len(samples) < 2:
        return ()

    events: list[SceneEvent] = []
    for prev, curr in zip(samples, samples[1:]):
        brightness_delta = abs(curr.brightness - prev.brightness)
        color_delta = abs(curr.colorfulness - prev.colorfulness)

        if brightness_delta > threshold or color_delta > threshold:
            events.append(SceneEvent(time=curr.time, intensity=brightness_delta + color_delta))

    logger.debug("Detected %d scene changes across %d samples", len(events), len(samples))
    return tuple(events)
