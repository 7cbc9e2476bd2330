from __future__ import annotations

from collections.abc import Sequence

import pytest

from clipsense.models import FrameSample


def make_frames(
    *,
    times: Sequence[float],
    brightness: Sequence[float] | None = None,
    colorfulness: Sequence[float] | None = None,
    edges: Sequence[float] | None = None,
    scores: Sequence[float] | None = None,
) -> list[FrameSample]:
    count = len(times)
    brightness = brightness if brightness is not None else [100.0] * count
    colorfulness = colorfulness if colorfulness is not None else [20.0] * count
    edges = edges if edges is not None else [50.0] * count

    return [
        FrameSample(
            time=float(times[idx]),
            brightness=float(brightness[idx]),
            colorfulness=float(colorfulness[idx]),
            edge_intensity=float(edges[idx]),
            score=float(scores[idx]) if scores is not None else None,
        )
        for idx in range(count)
    ]


@pytest.fixture
def frame_factory():
    return make_frames
