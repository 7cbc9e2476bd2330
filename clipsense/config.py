from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path("configs/default.yaml")
ENV_PREFIX = "CLIPSENSE_"


class ScoringSettings(BaseModel):
    pixel_stride: int = 10
    edge_jump_threshold: int = 30


class SceneSettings(BaseModel):
    threshold: float = 30.0


class PeakSettings(BaseModel):
    score_threshold: float = 50.0
    motion_threshold: float = 20.0
    oversample_factor: int = 3
    default_count: int = 3
    default_duration_seconds: float = 60.0


class CutSettings(BaseModel):
    major_scene_intensity: float = 50.0
    low_motion_window: int = 5
    low_motion_edge_threshold: float = 10.0
    low_motion_confidence: float = 0.7


class PacingSettings(BaseModel):
    mode: str = "balanced"
    slow_edge_threshold: float = 15.0


class SilenceSettings(BaseModel):
    silence_threshold: float = 30.0
    loud_threshold: float = 100.0
    min_silence_duration: float = 0.5
    close_trailing_silence: bool = False


class PaletteSettings(BaseModel):
    k: int = 5
    iterations: int = 10
    pixel_stride: int = 10


class LoggingSettings(BaseModel):
    level: str = "INFO"


class Settings(BaseModel):
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    scenes: SceneSettings = Field(default_factory=SceneSettings)
    peaks: PeakSettings = Field(default_factory=PeakSettings)
    cuts: CutSettings = Field(default_factory=CutSettings)
    pacing: PacingSettings = Field(default_factory=PacingSettings)
    silence: SilenceSettings = Field(default_factory=SilenceSettings)
    palette: PaletteSettings = Field(default_factory=PaletteSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load typed settings from YAML with environment-variable overrides.

    A missing default config file yields the built-in defaults; an explicitly
    requested path must exist.
    """

    explicit_path = config_path or os.getenv(f"{ENV_PREFIX}CONFIG")
    resolved_path = Path(explicit_path or DEFAULT_CONFIG_PATH)

    if resolved_path.exists():
        raw_config = yaml.safe_load(resolved_path.read_text(encoding="utf-8")) or {}
    elif explicit_path:
        raise FileNotFoundError(f"Config file not found: {resolved_path}")
    else:
        raw_config = {}

    data = Settings.model_validate(raw_config).model_dump(mode="python")

    for key, raw_value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        suffix = key[len(ENV_PREFIX) :]
        if suffix == "CONFIG":
            continue

        path = [part.lower() for part in suffix.split("__")]
        _apply_override(data, path, raw_value)

    return Settings.model_validate(data)


def _apply_override(data: dict[str, Any], path: list[str], raw_value: str) -> None:
    current: Any = data
    for segment in path[:-1]:
        if not isinstance(current, dict) or segment not in current:
            return
        current = current[segment]

    if not isinstance(current, dict):
        return

    final_key = path[-1]
    if final_key not in current:
        return

    current[final_key] = _coerce_value(raw_value, current[final_key])


def _coerce_value(raw_value: str, existing_value: Any) -> Any:
    if isinstance(existing_value, bool):
        return raw_value.lower() in {"1", "true", "yes", "on"}
    if isinstance(existing_value, int) and not isinstance(existing_value, bool):
        return int(raw_value)
    if isinstance(existing_value, float):
        return float(raw_value)
    return raw_value
