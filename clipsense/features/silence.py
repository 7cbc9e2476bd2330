from __future__ import annotations

import logging
from collections.abc import Sequence

from clipsense.errors import InvalidInputError
from clipsense.models import AudioLevelSample, LoudSegment, SilenceReport, SilenceWindow
from clipsense.sampling import ensure_ordered

logger = logging.getLogger(__name__)

DEFAULT_SILENCE_THRESHOLD = 30.0
DEFAULT_LOUD_THRESHOLD = 100.0
DEFAULT_MIN_SILENCE_DURATION = 0.5


def detect_silence(
    samples: Sequence[AudioLevelSample],
    *,
    silence_threshold: float = DEFAULT_SILENCE_THRESHOLD,
    loud_threshold: float = DEFAULT_LOUD_THRESHOLD,
    min_silence_duration: float = DEFAULT_MIN_SILENCE_DURATION,
    close_trailing_silence: bool = False,
) -> SilenceReport:
    """Split an audio level series into silent runs and loud markers.

    A run opens on the first sample below ``silence_threshold`` and closes on
    the next sample at or above it. A run still open at the end of the series
    is dropped unless ``close_trailing_silence`` is set, in which case it ends
    at the last sample time. Runs no longer than ``min_silence_duration`` are
    left out of ``silent_segments`` but still count toward ``total_silence``.
    """

    ensure_ordered(samples, label="audio levels", allow_empty=False)
    if min_silence_duration < 0:
        raise InvalidInputError(f"min_silence_duration must be non-negative, got {min_silence_duration}.")

    runs: list[SilenceWindow] = []
    loud: list[LoudSegment] = []
    open_start: float | None = None

    for sample in samples:
        if sample.level < silence_threshold:
            if open_start is None:
                open_start = sample.time
            continue

        if open_start is not None:
            runs.append(_close_run(open_start, sample.time))
            open_start = None

        if sample.level > loud_threshold:
            loud.append(LoudSegment(time=sample.time, level=sample.level))

    if open_start is not None:
        if close_trailing_silence:
            runs.append(_close_run(open_start, samples[-1].time))
        else:
            logger.debug("Dropping silent run still open at %.3fs", open_start)

    kept = tuple(run for run in runs if run.duration > min_silence_duration)
    report = SilenceReport(
        silent_segments=kept,
        loud_segments=tuple(loud),
        total_silence=sum(run.duration for run in runs),
        filtered_silence=sum(run.duration for run in kept),
    )

    logger.debug(
        "Silence analysis: %d runs, %d kept, %d loud markers, %.3fs total silence",
        len(runs),
        len(kept),
        len(loud),
        report.total_silence,
    )
    return report


def _close_run(start: float, end: float) -> SilenceWindow:
    return SilenceWindow(start=start, end=end, duration=end - start)
