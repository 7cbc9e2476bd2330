from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from clipsense.config import Settings
from clipsense.errors import InvalidInputError
from clipsense.features.frame_scorer import build_frame_sample
from clipsense.features.palette import extract_palette
from clipsense.features.scenes import detect_scene_changes
from clipsense.features.silence import detect_silence
from clipsense.models import (
    AudioLevelSample,
    ColorCluster,
    CutSuggestion,
    FrameSample,
    MediaInfo,
    PacingPlan,
    SceneEvent,
    Segment,
    SilenceReport,
    VideoAnalysis,
)
from clipsense.propose.pacing import PacingMode, plan_pacing
from clipsense.propose.segment_builder import find_best_moments
from clipsense.sampling import collect_audio_levels, collect_frame_samples
from clipsense.scoring.cuts import suggest_cuts

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Caller-owned handle for analysing one media source at a time.

    ``load`` binds a media source and its buffered samples; ``reset`` drops
    them before the next source. Analyses never mutate the bound samples.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._media: MediaInfo | None = None
        self._frames: tuple[FrameSample, ...] = ()
        self._audio: tuple[AudioLevelSample, ...] = ()

    @property
    def media(self) -> MediaInfo | None:
        return self._media

    @property
    def frame_samples(self) -> tuple[FrameSample, ...]:
        return self._frames

    @property
    def audio_levels(self) -> tuple[AudioLevelSample, ...]:
        return self._audio

    def load(
        self,
        media: MediaInfo,
        *,
        frame_samples: Iterable[FrameSample] = (),
        audio_levels: Iterable[AudioLevelSample] = (),
    ) -> AnalysisSession:
        if media.duration < 0:
            raise InvalidInputError(f"Media duration must be non-negative, got {media.duration}.")

        frames = collect_frame_samples(frame_samples)
        audio = collect_audio_levels(audio_levels)

        self._media = media
        self._frames = frames
        self._audio = audio
        logger.info(
            "Loaded media (%.3fs, %dx%d) with %d frame samples and %d audio levels",
            media.duration,
            media.width,
            media.height,
            len(frames),
            len(audio),
        )
        return self

    def score_frame(self, time: float, pixels: Any) -> FrameSample:
        """Measure one captured frame with the configured scorer settings."""

        scoring = self.settings.scoring
        return build_frame_sample(
            time,
            pixels,
            pixel_stride=scoring.pixel_stride,
            edge_jump_threshold=scoring.edge_jump_threshold,
        )

    def reset(self) -> None:
        self._media = None
        self._frames = ()
        self._audio = ()
        logger.debug("Analysis session reset")

    def analyze_video(self, palette_image: Any | None = None) -> VideoAnalysis:
        """Detect scenes and cut suggestions, plus a palette when a frame is supplied."""

        frames = self._require_frames()
        scenes = detect_scene_changes(frames, threshold=self.settings.scenes.threshold)
        cuts = self._suggest_cuts(frames, scenes)

        palette: tuple[ColorCluster, ...] = ()
        if palette_image is not None:
            palette_settings = self.settings.palette
            palette = extract_palette(
                palette_image,
                k=palette_settings.k,
                iterations=palette_settings.iterations,
                pixel_stride=palette_settings.pixel_stride,
            )

        logger.info("Video analysis: %d scenes, %d suggested cuts", len(scenes), len(cuts))
        return VideoAnalysis(key_frames=frames, scenes=scenes, suggested_cuts=cuts, color_palette=palette)

    def find_best_moments(self, count: int | None = None, duration: float | None = None) -> tuple[Segment, ...]:
        frames = self._require_frames()
        peaks = self.settings.peaks
        segments = find_best_moments(
            frames,
            count=peaks.default_count if count is None else count,
            duration=peaks.default_duration_seconds if duration is None else duration,
            media_duration=self._media.duration if self._media else None,
            score_threshold=peaks.score_threshold,
            motion_threshold=peaks.motion_threshold,
            oversample_factor=peaks.oversample_factor,
        )
        logger.info("Selected %d highlight segments", len(segments))
        return segments

    def plan_pacing(self, mode: PacingMode | str | None = None) -> PacingPlan:
        frames = self._require_frames()
        scenes = detect_scene_changes(frames, threshold=self.settings.scenes.threshold)
        cuts = self._suggest_cuts(frames, scenes)
        return plan_pacing(
            frames,
            cuts,
            mode or self.settings.pacing.mode,
            slow_edge_threshold=self.settings.pacing.slow_edge_threshold,
        )

    def analyze_audio(self) -> SilenceReport:
        self._require_media()
        silence = self.settings.silence
        report = detect_silence(
            self._audio,
            silence_threshold=silence.silence_threshold,
            loud_threshold=silence.loud_threshold,
            min_silence_duration=silence.min_silence_duration,
            close_trailing_silence=silence.close_trailing_silence,
        )
        logger.info(
            "Audio analysis: %d silent windows, %d loud markers",
            len(report.silent_segments),
            len(report.loud_segments),
        )
        return report

    def _suggest_cuts(
        self, frames: tuple[FrameSample, ...], scenes: tuple[SceneEvent, ...]
    ) -> tuple[CutSuggestion, ...]:
        cut_settings = self.settings.cuts
        return suggest_cuts(
            frames,
            scenes,
            major_scene_intensity=cut_settings.major_scene_intensity,
            low_motion_window=cut_settings.low_motion_window,
            low_motion_edge_threshold=cut_settings.low_motion_edge_threshold,
            low_motion_confidence=cut_settings.low_motion_confidence,
        )

    def _require_media(self) -> MediaInfo:
        if self._media is None:
            raise InvalidInputError("No media loaded; call load() before analysing.")
        return self._media

    def _require_frames(self) -> tuple[FrameSample, ...]:
        self._require_media()
        if not self._frames:
            raise InvalidInputError("No frame samples loaded for this media.")
        return self._frames
