from __future__ import annotations

import logging
from collections.abc import Sequence

from clipsense.errors import InvalidInputError
from clipsense.models import Candidate, FrameSample, Segment
from clipsense.scoring.peaks import (
    DEFAULT_MOTION_THRESHOLD,
    DEFAULT_OVERSAMPLE_FACTOR,
    DEFAULT_SCORE_THRESHOLD,
    select_peak_candidates,
)

logger = logging.getLogger(__name__)


def build_segments(
    candidates: Sequence[Candidate],
    count: int,
    duration: float,
    media_duration: float,
) -> tuple[Segment, ...]:
    """Turn ranked peak candidates into disjoint highlight windows.

    Pipeline:
    1) centre a ``duration``-long window on each candidate, clamped to the media
    2) accept candidates greedily in rank order, skipping any window that
       touches or overlaps an accepted one
    3) stop after ``count`` acceptances
    4) return the accepted windows in timeline order
    """

    _validate_request(count, duration)
    if media_duration < 0:
        raise InvalidInputError(f"Media duration must be non-negative, got {media_duration}.")
    if count <= 0 or duration == 0 or media_duration == 0:
        return ()

    half = duration / 2
    selected: list[Segment] = []

    for candidate in candidates:
        start = max(0.0, candidate.time - half)
        end = min(media_duration, candidate.time + half)
        if end <= start:
            continue

        if _overlaps_selected(start, end, selected):
            continue

        selected.append(
            Segment(start=start, end=end, peak_time=candidate.time, score=candidate.ranking_score)
        )
        if len(selected) >= count:
            break

    logger.debug("Accepted %d of %d requested segments from %d candidates", len(selected), count, len(candidates))
    return tuple(sorted(selected, key=lambda segment: segment.start))


def find_best_moments(
    samples: Sequence[FrameSample],
    count: int = 3,
    duration: float = 60.0,
    media_duration: float | None = None,
    *,
    score_threshold: float = DEFAULT_SCORE_THRESHOLD,
    motion_threshold: float = DEFAULT_MOTION_THRESHOLD,
    oversample_factor: int = DEFAULT_OVERSAMPLE_FACTOR,
) -> tuple[Segment, ...]:
    """Select up to ``count`` non-overlapping highlight windows from scored frames.

    ``media_duration`` defaults to the last sample time. Fewer than two samples
    give no timeline to clip from and yield no segments.
    """

    _validate_request(count, duration)
    if len(samples) < 2:
        return ()
    if media_duration is None:
        media_duration = samples[-1].time

    candidates = select_peak_candidates(
        samples,
        count,
        score_threshold=score_threshold,
        motion_threshold=motion_threshold,
        oversample_factor=oversample_factor,
    )
    return build_segments(candidates, count=count, duration=duration, media_duration=media_duration)


def _validate_request(count: int, duration: float) -> None:
    if count < 0:
        raise InvalidInputError(f"Segment count must be non-negative, got {count}.")
    if duration < 0:
        raise InvalidInputError(f"Clip duration must be non-negative, got {duration}.")


def _overlaps_selected(start: float, end: float, selected: list[Segment]) -> bool:
    return any(segment.overlaps(start, end) for segment in selected)
