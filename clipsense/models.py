from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class FrameSample:
    """One timestamped visual measurement of a video frame."""

    time: float
    brightness: float
    colorfulness: float
    edge_intensity: float
    score: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AudioLevelSample:
    """Mean frequency-bin magnitude (0-255) of one audio window."""

    time: float
    level: float


@dataclass(frozen=True, slots=True)
class FrameStatistics:
    brightness: float
    colorfulness: float
    edge_intensity: float


@dataclass(frozen=True, slots=True)
class InterestStatistics:
    """Raw pixel counters the interest score is derived from."""

    color_variance_sum: float
    edge_count: int


@dataclass(frozen=True, slots=True)
class SceneEvent:
    time: float
    intensity: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A scored frame plus its score delta from the previous frame."""

    time: float
    score: float
    motion: float

    @property
    def ranking_score(self) -> float:
        return self.score + self.motion


@dataclass(frozen=True, slots=True)
class Segment:
    """A finalized highlight window."""

    start: float
    end: float
    peak_time: float
    score: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def overlaps(self, start: float, end: float) -> bool:
        # touching endpoints count as overlap
        return start <= self.end and end >= self.start

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class CutReason(str, Enum):
    SCENE_CHANGE = "scene_change"
    LOW_MOTION = "low_motion"


@dataclass(frozen=True, slots=True)
class CutSuggestion:
    time: float
    reason: CutReason
    confidence: float
    duration: float | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["reason"] = self.reason.value
        return payload


@dataclass(frozen=True, slots=True)
class TimeRange:
    start: float
    end: float


@dataclass(frozen=True, slots=True)
class SpeedAdjustment:
    start: float
    end: float
    speed_factor: float


@dataclass(frozen=True, slots=True)
class PacingPlan:
    """Cut points, speed-ups and removable dead segments for one edit.

    The three lists are independent and may overlap in time.
    """

    cuts: tuple[float, ...] = ()
    speed_adjustments: tuple[SpeedAdjustment, ...] = ()
    remove_segments: tuple[TimeRange, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SilenceWindow:
    start: float
    end: float
    duration: float


@dataclass(frozen=True, slots=True)
class LoudSegment:
    time: float
    level: float


@dataclass(frozen=True, slots=True)
class SilenceReport:
    """Silence/loudness decisions for one audio level series.

    ``total_silence`` sums every closed silent run, including the short runs
    dropped from ``silent_segments``; ``filtered_silence`` sums only the
    returned windows.
    """

    silent_segments: tuple[SilenceWindow, ...]
    loud_segments: tuple[LoudSegment, ...]
    total_silence: float
    filtered_silence: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ColorCluster:
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_dict(self) -> dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "hex": self.hex}


@dataclass(frozen=True, slots=True)
class MediaInfo:
    """Facts about the analyzed media supplied by the sampling side."""

    duration: float
    width: int = 0
    height: int = 0


@dataclass(frozen=True, slots=True)
class VideoAnalysis:
    """Bundled visual analysis of one media source."""

    key_frames: tuple[FrameSample, ...]
    scenes: tuple[SceneEvent, ...]
    suggested_cuts: tuple[CutSuggestion, ...]
    color_palette: tuple[ColorCluster, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key_frames": [frame.to_dict() for frame in self.key_frames],
            "scenes": [scene.to_dict() for scene in self.scenes],
            "suggested_cuts": [cut.to_dict() for cut in self.suggested_cuts],
            "color_palette": [color.to_dict() for color in self.color_palette],
        }
