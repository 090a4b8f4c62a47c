"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from wallseed_renderer import Color, ParseError
from wallseed_renderer.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_FILL_RATIO,
    DEFAULT_HEIGHT,
    DEFAULT_MIN_PIXEL_SIZE,
    DEFAULT_TEXT,
    DEFAULT_WIDTH,
    MAX_DIMENSION,
)


CONFIG_VERSION = 1


@dataclass
class SeedConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    background: str = DEFAULT_BACKGROUND
    text: str = DEFAULT_TEXT
    output: str = "background.png"


@dataclass
class TextConfig:
    pixel_size: int | None = None
    min_pixel_size: int = DEFAULT_MIN_PIXEL_SIZE
    fill_ratio: float = DEFAULT_FILL_RATIO


@dataclass
class RasterConfig:
    hinting: bool = True
    antialias: bool = True


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    seed: SeedConfig = field(default_factory=SeedConfig)
    text: TextConfig = field(default_factory=TextConfig)
    raster: RasterConfig = field(default_factory=RasterConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Wallseed"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Wallseed"
    return Path.home() / ".config" / "wallseed"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _clamp_dimension(value: Any, default: int) -> int:
    try:
        return max(1, min(MAX_DIMENSION, int(value)))
    except (TypeError, ValueError):
        return default


def _normalize_seed(cfg: AppConfig) -> None:
    cfg.seed.width = _clamp_dimension(cfg.seed.width, DEFAULT_WIDTH)
    cfg.seed.height = _clamp_dimension(cfg.seed.height, DEFAULT_HEIGHT)
    try:
        cfg.seed.background = Color.parse(str(cfg.seed.background)).format()
    except ParseError:
        cfg.seed.background = DEFAULT_BACKGROUND
    cfg.seed.text = str(cfg.seed.text)


def _normalize_text(cfg: AppConfig) -> None:
    if cfg.text.pixel_size is not None:
        cfg.text.pixel_size = _clamp_dimension(cfg.text.pixel_size, DEFAULT_MIN_PIXEL_SIZE)
    cfg.text.min_pixel_size = _clamp_dimension(cfg.text.min_pixel_size, DEFAULT_MIN_PIXEL_SIZE)
    try:
        ratio = float(cfg.text.fill_ratio)
    except (TypeError, ValueError):
        ratio = DEFAULT_FILL_RATIO
    cfg.text.fill_ratio = ratio if 0.0 < ratio <= 1.0 else DEFAULT_FILL_RATIO


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        seed=_merge(SeedConfig, data.get("seed", {})),
        text=_merge(TextConfig, data.get("text", {})),
        raster=_merge(RasterConfig, data.get("raster", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
    )

    _normalize_seed(cfg)
    _normalize_text(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
