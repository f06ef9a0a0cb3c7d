from __future__ import annotations

import pytest

from thumbnailer.size import ThumbnailSize, dimensions


def test_every_size_has_a_box() -> None:
    assert dimensions(ThumbnailSize.ICON) == (64, 64)
    assert dimensions(ThumbnailSize.SMALL) == (128, 128)
    assert dimensions(ThumbnailSize.MEDIUM) == (256, 256)
    assert dimensions(ThumbnailSize.LARGE) == (512, 512)
    assert dimensions(ThumbnailSize.LARGER) == (1024, 1024)
    for size in ThumbnailSize:
        assert size.dimensions() == dimensions(size)


def test_from_name_is_case_insensitive() -> None:
    assert ThumbnailSize.from_name("small") is ThumbnailSize.SMALL
    assert ThumbnailSize.from_name(" Larger ") is ThumbnailSize.LARGER


def test_from_name_rejects_unknown_size() -> None:
    with pytest.raises(ValueError, match="huge"):
        ThumbnailSize.from_name("huge")
