"""Errors raised by the thumbnail pipeline.

Every failure is a ``ThumbError``. Callers can catch the base class or one of
the four kinds to decide whether to retry, reject the input or report it.
"""

from __future__ import annotations


class ThumbError(Exception):
    """Base class for all thumbnail errors."""

    retryable = False


class UnsupportedFormat(ThumbError):
    """No decoder is registered for the declared media type."""

    def __init__(self, media_type: str):
        super().__init__(f"Unsupported media type: {media_type}")
        self.media_type = media_type


class DecodeFailure(ThumbError):
    """The bytes could not be decoded as the declared media type."""


class IoFailure(ThumbError):
    """Reading the source or writing the sink failed."""

    retryable = True


class EncodeFailure(ThumbError):
    """The thumbnail could not be encoded into the requested format."""
