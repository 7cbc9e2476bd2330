from __future__ import annotations

import math

import pytest

from clipsense.errors import InvalidInputError
from clipsense.models import AudioLevelSample, FrameSample
from clipsense.sampling import collect_audio_levels, collect_frame_samples, sample_times


def test_sample_times_step_at_rate() -> None:
    assert sample_times(duration=1.0, rate=5) == [0.0, 0.2, 0.4, 0.6, 0.8]


def test_sample_times_spread_evenly_when_capped() -> None:
    times = sample_times(duration=100.0, rate=2, max_samples=50)

    assert len(times) == 50
    assert times[1] == pytest.approx(2.0)


def test_zero_duration_has_no_sample_times() -> None:
    assert sample_times(duration=0.0, rate=10) == []


def test_collect_frame_samples_buffers_a_generator(frame_factory) -> None:
    frames = frame_factory(times=[0, 1, 2])

    buffered = collect_frame_samples(frame for frame in frames)

    assert isinstance(buffered, tuple)
    assert list(buffered) == frames


def test_duplicate_timestamps_are_rejected(frame_factory) -> None:
    with pytest.raises(InvalidInputError, match="strictly increasing"):
        collect_frame_samples(frame_factory(times=[0, 1, 1]))


def test_out_of_range_brightness_is_rejected() -> None:
    frame = FrameSample(time=0, brightness=300, colorfulness=0, edge_intensity=0)

    with pytest.raises(InvalidInputError, match="brightness"):
        collect_frame_samples([frame])


def test_non_finite_measurements_are_rejected() -> None:
    frame = FrameSample(time=0, brightness=10, colorfulness=math.nan, edge_intensity=0)

    with pytest.raises(InvalidInputError, match="non-finite"):
        collect_frame_samples([frame])


def test_negative_audio_times_are_rejected() -> None:
    with pytest.raises(InvalidInputError, match="invalid time"):
        collect_audio_levels([AudioLevelSample(time=-1, level=10)])
