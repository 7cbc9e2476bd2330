from __future__ import annotations

import logging
from collections.abc import Sequence

from clipsense.errors import InvalidInputError
from clipsense.models import Candidate, FrameSample
from clipsense.sampling import ensure_ordered

logger = logging.getLogger(__name__)

DEFAULT_SCORE_THRESHOLD = 50.0
DEFAULT_MOTION_THRESHOLD = 20.0
DEFAULT_OVERSAMPLE_FACTOR = 3


def compute_motion(samples: Sequence[FrameSample]) -> list[Candidate]:
    """Pair each scored sample with the absolute score change from its predecessor."""

    ensure_ordered(samples, label="frame samples")

    candidates: list[Candidate] = []
    previous_score: float | None = None
    for index, sample in enumerate(samples):
        if sample.score is None:
            raise InvalidInputError(f"frame samples[{index}] has no interest score.")

        motion = 0.0 if previous_score is None else abs(sample.score - previous_score)
        candidates.append(Candidate(time=sample.time, score=sample.score, motion=motion))
        previous_score = sample.score

    return candidates


def select_peak_candidates(
    samples: Sequence[FrameSample],
    requested_count: int,
    *,
    score_threshold: float = DEFAULT_SCORE_THRESHOLD,
    motion_threshold: float = DEFAULT_MOTION_THRESHOLD,
    oversample_factor: int = DEFAULT_OVERSAMPLE_FACTOR,
) -> list[Candidate]:
    """Rank interesting or fast-changing frames, keeping ``oversample_factor`` x the request.

    The extra candidates leave room for the segment builder to reject
    overlapping windows. Equal rankings keep timeline order.
    """

    if requested_count < 0:
        raise InvalidInputError(f"requested_count must be non-negative, got {requested_count}.")

    candidates = compute_motion(samples)
    peaks = [
        candidate
        for candidate in candidates
        if candidate.score > score_threshold or candidate.motion > motion_threshold
    ]
    peaks.sort(key=lambda candidate: -candidate.ranking_score)

    limit = requested_count * max(oversample_factor, 1)
    logger.debug("Peak selection kept %d of %d candidates (limit %d)", min(len(peaks), limit), len(candidates), limit)
    return peaks[:limit]


def select_thumbnail_frames(samples: Sequence[FrameSample], count: int = 3) -> list[FrameSample]:
    """Pick the most colourful, most textured frames as thumbnail sources."""

    if count <= 0:
        return []
    ranked = sorted(samples, key=lambda sample: -(sample.colorfulness + sample.edge_intensity))
    return ranked[:count]
