"""Thumbnail size catalog.

Every size class maps to a fixed maximum (width, height) box. Thumbnails are
scaled to fit inside the box while keeping the source aspect ratio.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class ThumbnailSize(Enum):
    ICON = (64, 64)
    SMALL = (128, 128)
    MEDIUM = (256, 256)
    LARGE = (512, 512)
    LARGER = (1024, 1024)

    def dimensions(self) -> Tuple[int, int]:
        """Return the (max_width, max_height) box of this size class."""
        return self.value

    @classmethod
    def from_name(cls, name: str) -> "ThumbnailSize":
        key = name.strip().upper()
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown thumbnail size '{name}' (expected one of: {valid})") from None


def dimensions(size: ThumbnailSize) -> Tuple[int, int]:
    return size.dimensions()
