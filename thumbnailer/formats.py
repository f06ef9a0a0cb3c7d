"""Decoder registry keyed by declared media type.

The media type supplied by the caller selects the decoder; the bytes are never
sniffed. A mismatch between the declared type and the real content surfaces
as a ``DecodeFailure`` from the codec.
"""

from __future__ import annotations

import io
import logging
import struct
from typing import BinaryIO, Callable, Dict, List

from PIL import Image

from .errors import DecodeFailure, IoFailure, UnsupportedFormat

LOGGER = logging.getLogger(__name__)

Decoder = Callable[[BinaryIO], Image.Image]

# Errors Pillow raises for unidentified, truncated or otherwise broken input.
# UnidentifiedImageError is an OSError.
_CODEC_ERRORS = (OSError, SyntaxError, ValueError, EOFError, struct.error, Image.DecompressionBombError)


def _pillow_decoder(pil_format: str) -> Decoder:
    def decode(buffer: BinaryIO) -> Image.Image:
        img = Image.open(buffer, formats=[pil_format])
        # Force the full decode now; resize tasks share this image across threads.
        img.load()
        return img

    decode.__name__ = f"decode_{pil_format.lower()}"
    return decode


_DECODERS: Dict[str, Decoder] = {}


def normalize_media_type(media_type: str) -> str:
    return media_type.split(";", 1)[0].strip().lower()


def register_decoder(media_type: str, decoder: Decoder) -> None:
    """Register (or replace) the decoder used for a media type.

    Args:
        media_type: MIME type such as ``image/png``; parameters are ignored.
        decoder: Callable taking a seekable binary buffer and returning a
            fully loaded ``PIL.Image.Image``.
    """
    _DECODERS[normalize_media_type(media_type)] = decoder


def supported_media_types() -> List[str]:
    return sorted(_DECODERS)


def is_supported(media_type: str) -> bool:
    return normalize_media_type(media_type) in _DECODERS


def _register_builtin_decoders() -> None:
    mapping = {
        "image/png": "PNG",
        "image/x-png": "PNG",
        "image/jpeg": "JPEG",
        "image/jpg": "JPEG",
        "image/pjpeg": "JPEG",
        "image/gif": "GIF",
        "image/bmp": "BMP",
        "image/x-bmp": "BMP",
        "image/x-ms-bmp": "BMP",
        "image/webp": "WEBP",
        "image/tiff": "TIFF",
        "image/x-icon": "ICO",
        "image/vnd.microsoft.icon": "ICO",
    }
    for media_type, pil_format in mapping.items():
        register_decoder(media_type, _pillow_decoder(pil_format))


_register_builtin_decoders()


def get_base_image(reader: BinaryIO, media_type: str) -> Image.Image:
    """Decode the reader's content into a single in-memory image.

    Args:
        reader: Seekable binary stream positioned at the start of the content.
        media_type: Declared MIME type of the content.

    Returns:
        The decoded image in the codec's native mode.

    Raises:
        UnsupportedFormat: no decoder is registered for ``media_type``.
        IoFailure: reading ``reader`` failed.
        DecodeFailure: the content is not a valid image of that type.
    """
    decoder = _DECODERS.get(normalize_media_type(media_type))
    if decoder is None:
        raise UnsupportedFormat(media_type)

    try:
        data = reader.read()
    except OSError as e:
        raise IoFailure(f"Failed to read image data: {e}") from e

    try:
        img = decoder(io.BytesIO(data))
    except _CODEC_ERRORS as e:
        raise DecodeFailure(f"Could not decode content as {media_type}: {e}") from e

    width, height = img.size
    if width == 0 or height == 0:
        raise DecodeFailure(f"Decoded {media_type} image has no pixels ({width}x{height})")

    LOGGER.debug("Decoded %s image %dx%d (mode %s)", media_type, width, height, img.mode)
    return img
