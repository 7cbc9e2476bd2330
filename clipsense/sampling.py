from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from clipsense.errors import InvalidInputError
from clipsense.models import AudioLevelSample, FrameSample

logger = logging.getLogger(__name__)


class _Timed(Protocol):
    @property
    def time(self) -> float: ...


T = TypeVar("T", bound=_Timed)


def sample_times(duration: float, rate: float, max_samples: int | None = None) -> list[float]:
    """Return the instants a sequential sampler should seek to.

    Without ``max_samples`` the sampler steps at ``1 / rate``; with a cap the
    samples are spread evenly across the whole duration instead.
    """

    if duration < 0:
        raise InvalidInputError(f"Media duration must be non-negative, got {duration}.")
    if rate <= 0:
        raise InvalidInputError(f"Sample rate must be positive, got {rate}.")

    total = int(math.floor(duration * rate))
    if max_samples is None:
        return [round(index / rate, 6) for index in range(total)]

    count = min(max(max_samples, 0), total)
    if count == 0:
        return []
    return [(index / count) * duration for index in range(count)]


def ensure_ordered(samples: Sequence[T], *, label: str = "samples", allow_empty: bool = True) -> None:
    """Fail fast on empty (when required), negative or non-increasing timestamps."""

    if not samples:
        if allow_empty:
            return
        raise InvalidInputError(f"Expected at least one of {label}, got an empty sequence.")

    previous: float | None = None
    for index, sample in enumerate(samples):
        time = sample.time
        if not math.isfinite(time) or time < 0:
            raise InvalidInputError(f"{label}[{index}] has invalid time {time!r}.")
        if previous is not None and time <= previous:
            raise InvalidInputError(
                f"{label} must be strictly increasing in time: "
                f"{label}[{index}].time={time} follows {previous}."
            )
        previous = time


def collect_frame_samples(producer: Iterable[FrameSample]) -> tuple[FrameSample, ...]:
    """Drain a sequential frame sampler into an immutable, validated buffer."""

    buffered = tuple(producer)
    ensure_ordered(buffered, label="frame samples")
    for index, sample in enumerate(buffered):
        values = (sample.brightness, sample.colorfulness, sample.edge_intensity)
        if any(not math.isfinite(value) for value in values):
            raise InvalidInputError(f"frame samples[{index}] carries a non-finite measurement.")
        if not 0 <= sample.brightness <= 255:
            raise InvalidInputError(f"frame samples[{index}] brightness {sample.brightness} is outside 0-255.")
        if sample.colorfulness < 0 or sample.edge_intensity < 0:
            raise InvalidInputError(f"frame samples[{index}] has a negative colorfulness or edge intensity.")

    logger.debug("Buffered %d frame samples", len(buffered))
    return buffered


def collect_audio_levels(producer: Iterable[AudioLevelSample]) -> tuple[AudioLevelSample, ...]:
    """Drain a sequential audio-level sampler into an immutable, validated buffer."""

    buffered = tuple(producer)
    ensure_ordered(buffered, label="audio levels")
    for index, sample in enumerate(buffered):
        if not math.isfinite(sample.level) or sample.level < 0:
            raise InvalidInputError(f"audio levels[{index}] has invalid level {sample.level!r}.")

    logger.debug("Buffered %d audio level samples", len(buffered))
    return buffered
