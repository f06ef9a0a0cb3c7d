"""Fixed-size thumbnail generation for raster images."""

import logging

from .config import ConfigManager, ThumbnailSettings
from .errors import DecodeFailure, EncodeFailure, IoFailure, ThumbError, UnsupportedFormat
from .formats import register_decoder, supported_media_types
from .size import ThumbnailSize
from .thumbnail import OutputFormat, Thumbnail, create_thumbnails

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConfigManager",
    "DecodeFailure",
    "EncodeFailure",
    "IoFailure",
    "OutputFormat",
    "ThumbError",
    "Thumbnail",
    "ThumbnailSettings",
    "ThumbnailSize",
    "UnsupportedFormat",
    "create_thumbnails",
    "register_decoder",
    "supported_media_types",
]
