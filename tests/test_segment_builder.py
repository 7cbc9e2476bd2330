from __future__ import annotations

import pytest

from clipsense.errors import InvalidInputError
from clipsense.models import Candidate
from clipsense.propose.segment_builder import build_segments, find_best_moments


def test_single_peak_is_centred_in_its_window(frame_factory) -> None:
    frames = frame_factory(times=[0, 1, 2, 3, 4, 5], scores=[10, 10, 10, 90, 10, 10])

    segments = find_best_moments(frames, count=1, duration=2)

    assert len(segments) == 1
    assert segments[0].start == pytest.approx(2.0)
    assert segments[0].end == pytest.approx(4.0)
    assert segments[0].peak_time == 3
    assert segments[0].score == pytest.approx(170.0)


def test_touching_windows_count_as_overlap() -> None:
    candidates = [Candidate(time=10, score=90, motion=0), Candidate(time=14, score=80, motion=0)]

    segments = build_segments(candidates, count=2, duration=4, media_duration=100)

    assert [segment.peak_time for segment in segments] == [10]


def test_partially_overlapping_windows_are_rejected() -> None:
    candidates = [Candidate(time=10, score=90, motion=0), Candidate(time=10.5, score=80, motion=0)]

    segments = build_segments(candidates, count=2, duration=1, media_duration=100)
    wide = build_segments(
        [Candidate(time=10, score=90, motion=0), Candidate(time=11, score=80, motion=0)],
        count=2,
        duration=10,
        media_duration=100,
    )

    assert len(segments) == 1
    assert len(wide) == 1


def test_output_is_chronological_and_non_overlapping() -> None:
    candidates = [
        Candidate(time=50, score=100, motion=10),
        Candidate(time=10, score=90, motion=5),
        Candidate(time=52, score=85, motion=0),
        Candidate(time=30, score=70, motion=0),
    ]

    segments = build_segments(candidates, count=3, duration=10, media_duration=60)

    assert [segment.peak_time for segment in segments] == [10, 30, 50]
    for first, second in zip(segments, segments[1:]):
        assert first.end < second.start


def test_windows_are_clamped_to_media_bounds() -> None:
    candidates = [Candidate(time=1, score=90, motion=0), Candidate(time=59, score=80, motion=0)]

    segments = build_segments(candidates, count=2, duration=10, media_duration=60)

    assert (segments[0].start, segments[0].end) == (0.0, 6.0)
    assert (segments[1].start, segments[1].end) == (54.0, 60.0)


def test_returns_fewer_segments_when_windows_run_out() -> None:
    candidates = [Candidate(time=5, score=90, motion=0)]

    segments = build_segments(candidates, count=4, duration=4, media_duration=20)

    assert len(segments) == 1


@pytest.mark.parametrize(("count", "duration", "media_duration"), [(0, 4, 20), (2, 0, 20), (2, 4, 0)])
def test_degenerate_requests_return_nothing(count, duration, media_duration) -> None:
    candidates = [Candidate(time=5, score=90, motion=0)]

    assert build_segments(candidates, count=count, duration=duration, media_duration=media_duration) == ()


def test_single_sample_yields_no_segments(frame_factory) -> None:
    frames = frame_factory(times=[3], scores=[99])

    assert find_best_moments(frames, count=1, duration=2, media_duration=10) == ()


def test_negative_duration_is_invalid() -> None:
    with pytest.raises(InvalidInputError):
        build_segments([], count=1, duration=-1, media_duration=10)


def test_negative_count_is_invalid() -> None:
    candidates = [Candidate(time=5, score=90, motion=0)]

    with pytest.raises(InvalidInputError, match="Segment count"):
        build_segments(candidates, count=-2, duration=4, media_duration=20)


@pytest.mark.parametrize(("count", "duration"), [(-1, 2), (1, -2)])
def test_find_best_moments_validates_request_before_short_inputs(frame_factory, count, duration) -> None:
    scored = frame_factory(times=[0, 1, 2, 3, 4, 5], scores=[10, 10, 10, 90, 10, 10])
    single = frame_factory(times=[3], scores=[99])

    with pytest.raises(InvalidInputError):
        find_best_moments(scored, count=count, duration=duration)
    with pytest.raises(InvalidInputError):
        find_best_moments(single, count=count, duration=duration)
