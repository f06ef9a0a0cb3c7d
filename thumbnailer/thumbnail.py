"""Thumbnail value object and the public ``create_thumbnails`` entry point.

Example:
    with open("photo.png", "rb") as f:
        thumbs = create_thumbnails(f, "image/png", [ThumbnailSize.SMALL, ThumbnailSize.MEDIUM])

    out = io.BytesIO()
    thumbs[0].write_png(out)
"""

from __future__ import annotations

import io
import logging
from enum import Enum
from typing import Any, BinaryIO, Dict, Iterable, List, Optional, Tuple, Union

from PIL import Image

from .config import ThumbnailSettings
from .errors import EncodeFailure, IoFailure
from .formats import get_base_image
from .resize import resize_images
from .size import ThumbnailSize

LOGGER = logging.getLogger(__name__)


class OutputFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"

    @property
    def pil_format(self) -> str:
        return self.name

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"

    @property
    def extension(self) -> str:
        return ".jpg" if self is OutputFormat.JPEG else f".{self.value}"

    @property
    def keeps_alpha(self) -> bool:
        return self is not OutputFormat.JPEG

    @classmethod
    def from_name(cls, name: str) -> "OutputFormat":
        key = name.strip().lower().lstrip(".")
        if key == "jpg":
            key = "jpeg"
        try:
            return cls(key)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown output format '{name}' (expected one of: {valid})") from None


def _to_8bit(image: Image.Image) -> Image.Image:
    """Scale high-bit-depth samples down to 8-bit ``L``.

    Integer images are treated as 16-bit (0-65535); float images as 0.0-1.0.
    """
    if image.mode == "I" or image.mode.startswith("I;16"):
        return image.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    if image.mode == "F":
        return image.point(lambda v: v * 255).convert("L")
    return image


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA", "RGBa", "La") or (
        image.mode == "P" and "transparency" in image.info
    )


class Thumbnail:
    """A resized image ready to be encoded.

    Thumbnails are created by ``create_thumbnails``. Encoding consumes the
    thumbnail; a second encode raises ``EncodeFailure``.
    """

    def __init__(self, image: Image.Image, settings: Optional[ThumbnailSettings] = None):
        self._inner: Optional[Image.Image] = image
        self._size: Tuple[int, int] = image.size
        self._mode = image.mode
        self._settings = settings or ThumbnailSettings()

    def __repr__(self) -> str:
        return f"Thumbnail(width={self.width}, height={self.height}, mode={self._mode!r})"

    def dimensions(self) -> Tuple[int, int]:
        """Return the size of the thumbnail as (width, height)."""
        return self._size

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def consumed(self) -> bool:
        return self._inner is None

    def _converted(self, image: Image.Image, fmt: OutputFormat) -> Image.Image:
        image = _to_8bit(image)
        if fmt.keeps_alpha:
            return image if image.mode == "RGBA" else image.convert("RGBA")
        if _has_alpha(image):
            # Flatten alpha against the background colour
            rgba = image.convert("RGBA")
            background = Image.new("RGB", rgba.size, self._settings.background)
            background.paste(rgba, mask=rgba.split()[3])
            return background
        return image if image.mode == "RGB" else image.convert("RGB")

    def _save_kwargs(self, fmt: OutputFormat) -> Dict[str, Any]:
        if fmt is OutputFormat.JPEG:
            return {"quality": self._settings.jpeg_quality, "optimize": True, "progressive": True}
        if fmt is OutputFormat.WEBP:
            return {"quality": self._settings.webp_quality}
        return {"optimize": True}

    def encode_as(self, fmt: Union[OutputFormat, str], writer: BinaryIO) -> None:
        """Encode the thumbnail and write it to ``writer``.

        Args:
            fmt: Output format (``OutputFormat`` or its name, e.g. "jpg").
            writer: Writable binary sink.

        Raises:
            EncodeFailure: the image could not be encoded or was already encoded.
            IoFailure: writing to ``writer`` failed.
        """
        if not isinstance(fmt, OutputFormat):
            fmt = OutputFormat.from_name(fmt)
        if self._inner is None:
            raise EncodeFailure("Thumbnail has already been encoded")
        image, self._inner = self._inner, None

        out = io.BytesIO()
        try:
            self._converted(image, fmt).save(out, format=fmt.pil_format, **self._save_kwargs(fmt))
        except (OSError, ValueError, KeyError) as e:
            raise EncodeFailure(f"Could not encode thumbnail as {fmt.value}: {e}") from e

        data = out.getvalue()
        try:
            writer.write(data)
        except OSError as e:
            raise IoFailure(f"Failed to write thumbnail: {e}") from e
        LOGGER.debug("Encoded %dx%d thumbnail as %s (%d bytes)", self.width, self.height, fmt.value, len(data))

    def write_png(self, writer: BinaryIO) -> None:
        self.encode_as(OutputFormat.PNG, writer)

    def write_jpeg(self, writer: BinaryIO) -> None:
        self.encode_as(OutputFormat.JPEG, writer)

    def write_webp(self, writer: BinaryIO) -> None:
        self.encode_as(OutputFormat.WEBP, writer)

    def to_bytes(self, fmt: Union[OutputFormat, str] = OutputFormat.PNG) -> bytes:
        out = io.BytesIO()
        self.encode_as(fmt, out)
        return out.getvalue()


def create_thumbnails(
    reader: BinaryIO,
    media_type: str,
    sizes: Iterable[ThumbnailSize],
    settings: Optional[ThumbnailSettings] = None,
) -> List[Thumbnail]:
    """Create thumbnails of the requested sizes from an image stream.

    Args:
        reader: Seekable binary stream with the image content
        media_type: Declared MIME type of the content (not sniffed)
        sizes: Requested size classes; the result follows this order
        settings: Resize and encoding options (defaults if None)

    Returns:
        One ``Thumbnail`` per requested size.

    Raises:
        UnsupportedFormat, DecodeFailure, IoFailure
    """
    settings = settings or ThumbnailSettings()
    image = get_base_image(reader, media_type)
    sizes = list(sizes)
    resized = resize_images(image, sizes, upscale=settings.upscale, max_workers=settings.max_workers)
    return [Thumbnail(img, settings) for img in resized]
