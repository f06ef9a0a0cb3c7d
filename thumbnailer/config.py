"""Configuration for the thumbnailer.

``ThumbnailSettings`` is the value passed to the library. ``ConfigManager``
persists user defaults in the home directory at:
  ~/.thumbnailer/config.json

Environment variables can override stored values:
  - THUMBNAILER_MAX_WORKERS
  - THUMBNAILER_UPSCALE
  - THUMBNAILER_JPEG_QUALITY
  - THUMBNAILER_WEBP_QUALITY
  - THUMBNAILER_BACKGROUND  (e.g. "255,255,255")
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThumbnailSettings:
    """Options shared by the resize pipeline and the encoders.

    Attributes:
        max_workers: Cap for the resize pool; None sizes it to the CPU count.
        upscale: Enlarge sources smaller than the box to fit it.
        jpeg_quality: JPEG quality (1-95).
        webp_quality: WEBP quality (0-100).
        background: RGB colour that transparent pixels are flattened onto
            for formats without alpha.
    """

    max_workers: Optional[int] = None
    upscale: bool = True
    jpeg_quality: int = 85
    webp_quality: int = 80
    background: Tuple[int, int, int] = (255, 255, 255)

    def __post_init__(self) -> None:
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if not 1 <= self.jpeg_quality <= 95:
            raise ValueError(f"jpeg_quality must be between 1 and 95, got {self.jpeg_quality}")
        if not 0 <= self.webp_quality <= 100:
            raise ValueError(f"webp_quality must be between 0 and 100, got {self.webp_quality}")
        if len(self.background) != 3 or not all(0 <= c <= 255 for c in self.background):
            raise ValueError(f"background must be an RGB triple in 0-255, got {self.background}")


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _parse_rgb(value: Any) -> Tuple[int, int, int]:
    if isinstance(value, str):
        value = [part for part in value.split(",") if part.strip()]
    parts = tuple(int(c) for c in value)
    if len(parts) != 3:
        raise ValueError(f"Expected three colour components, got {value!r}")
    return parts  # type: ignore[return-value]


class ConfigManager:
    """Simple JSON-backed configuration manager."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or (Path.home() / ".thumbnailer")
        self.config_file = self.config_dir / "config.json"
        self._config: Dict[str, Any] = {
            "resize": {
                "max_workers": None,
                "upscale": True,
            },
            "encode": {
                "jpeg_quality": 85,
                "webp_quality": 80,
                "background": [255, 255, 255],
            },
        }
        self._loaded = False

    def load(self) -> None:
        if self._loaded:
            return
        try:
            if self.config_file.exists():
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        for section, values in data.items():
                            if isinstance(values, dict) and isinstance(self._config.get(section), dict):
                                self._config[section].update(values)
                            else:
                                self._config[section] = values
        except (OSError, ValueError) as e:
            LOGGER.warning("Ignoring unreadable config file %s: %s", self.config_file, e)
        finally:
            self._loaded = True

    def save(self) -> None:
        self.load()
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self._config, f, indent=2)

    # Generic getters/setters
    def get(self, *keys: str, default: Any = None) -> Any:
        self.load()
        node: Any = self._config
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def set(self, value: Any, *keys: str) -> None:
        self.load()
        node: Dict[str, Any] = self._config
        for key in keys[:-1]:
            if key not in node or not isinstance(node[key], dict):
                node[key] = {}
            node = node[key]  # type: ignore[assignment]
        node[keys[-1]] = value

    # Typed helpers
    def get_max_workers(self) -> Optional[int]:
        env_val = os.getenv("THUMBNAILER_MAX_WORKERS")
        if env_val:
            return int(env_val)
        value = self.get("resize", "max_workers")
        return int(value) if value is not None else None

    def set_max_workers(self, max_workers: Optional[int]) -> None:
        self.set(max_workers, "resize", "max_workers")
        self.save()

    def get_upscale(self) -> bool:
        env_val = os.getenv("THUMBNAILER_UPSCALE")
        if env_val:
            return _parse_bool(env_val)
        return bool(self.get("resize", "upscale", default=True))

    def set_upscale(self, upscale: bool) -> None:
        self.set(upscale, "resize", "upscale")
        self.save()

    def get_jpeg_quality(self) -> int:
        env_val = os.getenv("THUMBNAILER_JPEG_QUALITY")
        if env_val:
            return int(env_val)
        return int(self.get("encode", "jpeg_quality", default=85))

    def set_jpeg_quality(self, quality: int) -> None:
        self.set(quality, "encode", "jpeg_quality")
        self.save()

    def get_webp_quality(self) -> int:
        env_val = os.getenv("THUMBNAILER_WEBP_QUALITY")
        if env_val:
            return int(env_val)
        return int(self.get("encode", "webp_quality", default=80))

    def set_webp_quality(self, quality: int) -> None:
        self.set(quality, "encode", "webp_quality")
        self.save()

    def get_background(self) -> Tuple[int, int, int]:
        env_val = os.getenv("THUMBNAILER_BACKGROUND")
        if env_val:
            return _parse_rgb(env_val)
        return _parse_rgb(self.get("encode", "background", default=[255, 255, 255]))

    # Convenience
    def settings(self) -> ThumbnailSettings:
        return ThumbnailSettings(
            max_workers=self.get_max_workers(),
            upscale=self.get_upscale(),
            jpeg_quality=self.get_jpeg_quality(),
            webp_quality=self.get_webp_quality(),
            background=self.get_background(),
        )
