from __future__ import annotations

import io

import pytest
from PIL import Image

from thumbnailer import formats
from thumbnailer.errors import DecodeFailure, IoFailure, UnsupportedFormat
from thumbnailer.formats import get_base_image, is_supported, register_decoder, supported_media_types


class ExplodingReader(io.BytesIO):
    """Reader whose read() fails like a broken transport."""

    def read(self, *args):
        raise OSError("connection reset")


@pytest.fixture
def isolated_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(formats, "_DECODERS", dict(formats._DECODERS))


def test_common_raster_types_are_registered() -> None:
    for media_type in ("image/png", "image/jpeg", "image/gif", "image/bmp", "image/webp", "image/tiff"):
        assert media_type in supported_media_types()


def test_media_type_is_normalized() -> None:
    assert is_supported("IMAGE/PNG; charset=binary")
    assert not is_supported("application/pdf")


@pytest.mark.parametrize(
    "media_type,fmt",
    [("image/png", "PNG"), ("image/jpeg", "JPEG"), ("image/jpg", "JPEG"), ("image/bmp", "BMP"), ("image/gif", "GIF")],
)
def test_decodes_declared_type(make_image_bytes, media_type: str, fmt: str) -> None:
    data = make_image_bytes(size=(40, 20), fmt=fmt)

    img = get_base_image(io.BytesIO(data), media_type)

    assert img.size == (40, 20)


def test_keeps_native_mode(make_image_bytes) -> None:
    data = make_image_bytes(size=(10, 10), fmt="GIF")

    img = get_base_image(io.BytesIO(data), "image/gif")

    assert img.mode == "P"


def test_unsupported_type_does_not_read_the_stream() -> None:
    with pytest.raises(UnsupportedFormat) as exc_info:
        get_base_image(ExplodingReader(b""), "application/pdf")

    assert exc_info.value.media_type == "application/pdf"
    assert not exc_info.value.retryable


def test_read_error_is_io_failure() -> None:
    with pytest.raises(IoFailure) as exc_info:
        get_base_image(ExplodingReader(b""), "image/png")

    assert exc_info.value.retryable
    assert isinstance(exc_info.value.__cause__, OSError)


def test_garbage_bytes_are_decode_failure() -> None:
    with pytest.raises(DecodeFailure):
        get_base_image(io.BytesIO(b"definitely not an image"), "image/png")


def test_empty_stream_is_decode_failure() -> None:
    with pytest.raises(DecodeFailure):
        get_base_image(io.BytesIO(b""), "image/jpeg")


def test_declared_type_is_not_corrected(make_image_bytes) -> None:
    jpeg = make_image_bytes(fmt="JPEG")

    with pytest.raises(DecodeFailure):
        get_base_image(io.BytesIO(jpeg), "image/png")


def test_truncated_png_is_decode_failure() -> None:
    noise = Image.effect_noise((128, 128), 80)
    buffer = io.BytesIO()
    noise.save(buffer, format="PNG")
    data = buffer.getvalue()

    with pytest.raises(DecodeFailure):
        get_base_image(io.BytesIO(data[: len(data) // 2]), "image/png")


def test_registered_decoder_is_used(isolated_registry) -> None:
    register_decoder("Image/X-Test", lambda buffer: Image.new("L", (len(buffer.read()), 3)))

    img = get_base_image(io.BytesIO(b"12345"), "image/x-test")

    assert img.size == (5, 3)
    assert is_supported("image/x-test")


def test_zero_area_image_is_decode_failure(isolated_registry) -> None:
    register_decoder("image/x-empty", lambda buffer: Image.new("RGB", (0, 7)))

    with pytest.raises(DecodeFailure, match="no pixels"):
        get_base_image(io.BytesIO(b"x"), "image/x-empty")
