"""Diagnostics payload for the doctor command."""

from __future__ import annotations

import platform
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

import freetype

from wallseed_renderer import FontProvider, SystemFontProvider

from .config import AppConfig, config_path
from .logging_setup import log_dir


FONT_SAMPLE_SIZE = 10


def _freetype_version() -> str:
    try:
        return ".".join(str(part) for part in freetype.version())
    except Exception:
        return "unknown"


def build_doctor_payload(cfg: AppConfig, provider: FontProvider | None = None) -> dict[str, Any]:
    fonts = (provider or SystemFontProvider()).list_fonts()
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "freetype": _freetype_version(),
        "config_path": str(config_path()),
        "log_dir": str(log_dir()),
        "config": asdict(cfg),
        "fonts": {
            "count": len(fonts),
            "sample": [str(f) for f in fonts[:FONT_SAMPLE_SIZE]],
        },
    }
