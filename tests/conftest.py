from __future__ import annotations

import io
from typing import Callable, Tuple

import pytest
from PIL import Image

_ENV_VARS = (
    "THUMBNAILER_MAX_WORKERS",
    "THUMBNAILER_UPSCALE",
    "THUMBNAILER_JPEG_QUALITY",
    "THUMBNAILER_WEBP_QUALITY",
    "THUMBNAILER_BACKGROUND",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_image_bytes() -> Callable[..., bytes]:
    """Factory encoding a solid-colour image of the given size and format."""

    def _make(
        size: Tuple[int, int] = (400, 300),
        fmt: str = "PNG",
        mode: str = "RGB",
        color=(200, 30, 30),
    ) -> bytes:
        image = Image.new(mode, size, color=color)
        buffer = io.BytesIO()
        image.save(buffer, format=fmt)
        return buffer.getvalue()

    return _make


@pytest.fixture
def png_bytes(make_image_bytes) -> bytes:
    return make_image_bytes()
