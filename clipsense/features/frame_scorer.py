from __future__ import annotations

import math
from typing import Any

import numpy as np

from clipsense.errors import InvalidInputError
from clipsense.models import FrameSample, FrameStatistics, InterestStatistics

DEFAULT_PIXEL_STRIDE = 10
DEFAULT_EDGE_JUMP_THRESHOLD = 30
COLOR_VARIANCE_DIVISOR = 1000.0
EDGE_COUNT_DIVISOR = 10.0


def interest_score_from_statistics(color_variance_sum: float, edge_count: float) -> float:
    """Combine raw colour variance and edge counters into a unit-less interest score."""

    if color_variance_sum < 0 or edge_count < 0:
        raise InvalidInputError("Interest statistics must be non-negative.")
    return (color_variance_sum / COLOR_VARIANCE_DIVISOR) + (edge_count / EDGE_COUNT_DIVISOR)


def measure_interest(
    pixels: Any,
    *,
    pixel_stride: int = DEFAULT_PIXEL_STRIDE,
    edge_jump_threshold: int = DEFAULT_EDGE_JUMP_THRESHOLD,
) -> InterestStatistics:
    """Count colour variance over every Nth pixel and first-channel jumps between raster neighbours."""

    if pixel_stride < 1:
        raise InvalidInputError(f"pixel_stride must be >= 1, got {pixel_stride}.")

    rows = as_pixel_rows(pixels)
    if len(rows) == 0:
        return InterestStatistics(color_variance_sum=0.0, edge_count=0)

    sampled = rows[::pixel_stride, :3]
    r, g, b = sampled[:, 0], sampled[:, 1], sampled[:, 2]
    color_variance_sum = float(np.sum(np.abs(r - g) + np.abs(g - b) + np.abs(b - r)))

    first_channel = rows[:, 0]
    deltas = np.abs(np.diff(first_channel))
    edge_count = int(np.count_nonzero(deltas > edge_jump_threshold))

    return InterestStatistics(color_variance_sum=color_variance_sum, edge_count=edge_count)


def interest_score(
    pixels: Any,
    *,
    pixel_stride: int = DEFAULT_PIXEL_STRIDE,
    edge_jump_threshold: int = DEFAULT_EDGE_JUMP_THRESHOLD,
) -> float:
    stats = measure_interest(pixels, pixel_stride=pixel_stride, edge_jump_threshold=edge_jump_threshold)
    return interest_score_from_statistics(stats.color_variance_sum, stats.edge_count)


def measure_frame(pixels: Any) -> FrameStatistics:
    """Measure mean brightness, channel-mean colourfulness and mean edge intensity."""

    rows = as_pixel_rows(pixels)
    pixel_count = len(rows)
    if pixel_count == 0:
        return FrameStatistics(brightness=0.0, colorfulness=0.0, edge_intensity=0.0)

    rgb = rows[:, :3].astype(np.float64)
    brightness = float(np.mean(rgb.sum(axis=1) / 3.0))

    r_avg, g_avg, b_avg = (float(value) for value in rgb.mean(axis=0))
    colorfulness = math.sqrt((r_avg - g_avg) ** 2 + (g_avg - b_avg) ** 2 + (b_avg - r_avg) ** 2)

    edge_total = float(np.sum(np.abs(np.diff(rows[:, 0]))))
    edge_intensity = edge_total / pixel_count

    return FrameStatistics(brightness=brightness, colorfulness=colorfulness, edge_intensity=edge_intensity)


def build_frame_sample(
    time: float,
    pixels: Any,
    *,
    with_score: bool = True,
    pixel_stride: int = DEFAULT_PIXEL_STRIDE,
    edge_jump_threshold: int = DEFAULT_EDGE_JUMP_THRESHOLD,
) -> FrameSample:
    if time < 0:
        raise InvalidInputError(f"Frame time must be non-negative, got {time}.")

    stats = measure_frame(pixels)
    score = None
    if with_score:
        score = interest_score(pixels, pixel_stride=pixel_stride, edge_jump_threshold=edge_jump_threshold)

    return FrameSample(
        time=float(time),
        brightness=stats.brightness,
        colorfulness=stats.colorfulness,
        edge_intensity=stats.edge_intensity,
        score=score,
    )


def as_pixel_rows(pixels: Any) -> np.ndarray:
    """Flatten an (H, W, C) image or (N, C) pixel list into signed (N, C) rows.

    C must be 3 (RGB) or 4 (RGBA); alpha is carried along but never scored.
    Values must be whole numbers in 0-255; normalised float images are rejected.
    """

    array = np.asarray(pixels)
    if array.size == 0:
        return np.zeros((0, 3), dtype=np.int64)

    if array.ndim == 3:
        array = array.reshape(-1, array.shape[-1])
    if array.ndim != 2 or array.shape[1] not in (3, 4):
        raise InvalidInputError(
            f"Expected an (H, W, 3|4) image or (N, 3|4) pixel array, got shape {np.shape(pixels)}."
        )

    if array.dtype.kind == "f":
        if not np.all(np.isfinite(array)) or not np.array_equal(array, np.round(array)):
            raise InvalidInputError(
                "Pixel values must be whole numbers in 0-255; scale normalised float images before scoring."
            )
    elif array.dtype.kind not in "iu":
        raise InvalidInputError(f"Unsupported pixel dtype {array.dtype}; expected integer values in 0-255.")

    if array.min() < 0 or array.max() > 255:
        raise InvalidInputError(
            f"Pixel values must lie in 0-255, got range [{array.min()}, {array.max()}]."
        )
    return array.astype(np.int64)
