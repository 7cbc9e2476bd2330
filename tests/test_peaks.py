from __future__ import annotations

import pytest

from clipsense.errors import InvalidInputError
from clipsense.scoring.peaks import compute_motion, select_peak_candidates, select_thumbnail_frames


def test_compute_motion_is_absolute_score_delta(frame_factory) -> None:
    frames = frame_factory(times=[0, 1, 2], scores=[10, 40, 25])

    candidates = compute_motion(frames)

    assert [candidate.motion for candidate in candidates] == [0.0, 30.0, 15.0]


def test_peaks_filter_and_rank_by_score_plus_motion(frame_factory) -> None:
    frames = frame_factory(times=[0, 1, 2, 3, 4, 5], scores=[10, 10, 10, 90, 10, 10])

    peaks = select_peak_candidates(frames, requested_count=1)

    assert [(peak.time, peak.ranking_score) for peak in peaks] == [(3.0, 170.0), (4.0, 90.0)]


def test_peaks_keep_three_times_the_requested_count(frame_factory) -> None:
    frames = frame_factory(times=list(range(10)), scores=[60 + idx for idx in range(10)])

    peaks = select_peak_candidates(frames, requested_count=2)

    assert len(peaks) == 6
    assert peaks[0].time == 9


def test_equal_rankings_keep_timeline_order(frame_factory) -> None:
    frames = frame_factory(times=[0, 1, 2], scores=[60, 60, 60])

    peaks = select_peak_candidates(frames, requested_count=3)

    assert [peak.time for peak in peaks] == [0, 1, 2]


def test_samples_without_scores_are_rejected(frame_factory) -> None:
    frames = frame_factory(times=[0, 1])

    with pytest.raises(InvalidInputError, match="no interest score"):
        select_peak_candidates(frames, requested_count=1)


def test_thumbnail_frames_prefer_colourful_textured_frames(frame_factory) -> None:
    frames = frame_factory(times=[0, 1, 2, 3], colorfulness=[10, 80, 5, 40], edges=[5, 10, 1, 60])

    picks = select_thumbnail_frames(frames, count=2)

    assert [frame.time for frame in picks] == [3, 1]
