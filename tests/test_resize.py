from __future__ import annotations

import pytest
from PIL import Image

from thumbnailer import resize
from thumbnailer.resize import fit_dimensions, resize_images
from thumbnailer.size import ThumbnailSize


def test_fit_landscape_into_square_box() -> None:
    assert fit_dimensions(4000, 3000, 300, 300) == (300, 225)


def test_fit_upscales_small_source_by_default() -> None:
    assert fit_dimensions(100, 200, 300, 300) == (150, 300)


def test_fit_without_upscale_leaves_small_source_unchanged() -> None:
    assert fit_dimensions(100, 200, 300, 300, upscale=False) == (100, 200)


def test_fit_without_upscale_still_downscales() -> None:
    assert fit_dimensions(4000, 3000, 300, 300, upscale=False) == (300, 225)


def test_fit_never_returns_zero() -> None:
    assert fit_dimensions(10000, 1, 64, 64) == (64, 1)


def test_fit_touches_one_side_of_the_box() -> None:
    for width, height in [(1, 1), (17, 3), (640, 480), (3, 1000), (999, 1001)]:
        w, h = fit_dimensions(width, height, 256, 256)
        assert w <= 256 and h <= 256
        assert w == 256 or h == 256


def test_zero_sizes_do_no_work(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*args, **kwargs):
        raise AssertionError("resize should not run")

    monkeypatch.setattr(resize, "_resize_one", fail)

    assert resize_images(Image.new("RGB", (10, 10)), []) == []


@pytest.mark.parametrize("max_workers", [None, 1, 4])
def test_results_follow_request_order(max_workers) -> None:
    image = Image.new("RGB", (400, 300), color="blue")
    sizes = [ThumbnailSize.LARGE, ThumbnailSize.ICON, ThumbnailSize.MEDIUM, ThumbnailSize.ICON]

    results = resize_images(image, sizes, max_workers=max_workers)

    assert [r.size for r in results] == [(512, 384), (64, 48), (256, 192), (64, 48)]
    assert results[1] is not results[3]


def test_base_image_is_not_modified() -> None:
    image = Image.new("P", (300, 150), color=5)

    results = resize_images(image, [ThumbnailSize.SMALL, ThumbnailSize.ICON])

    assert image.mode == "P"
    assert image.size == (300, 150)
    assert [r.mode for r in results] == ["RGB", "RGB"]


def test_palette_with_transparency_keeps_alpha() -> None:
    image = Image.new("P", (20, 20), color=0)
    image.info["transparency"] = 0

    (result,) = resize_images(image, [ThumbnailSize.ICON])

    assert result.mode == "RGBA"
    assert result.size == (64, 64)


def test_worker_failure_propagates(monkeypatch: pytest.MonkeyPatch) -> None:
    original = resize._resize_one

    def flaky(image, size, upscale):
        if size is ThumbnailSize.MEDIUM:
            raise MemoryError("out of memory")
        return original(image, size, upscale)

    monkeypatch.setattr(resize, "_resize_one", flaky)

    with pytest.raises(MemoryError):
        resize_images(
            Image.new("RGB", (50, 50)),
            [ThumbnailSize.SMALL, ThumbnailSize.MEDIUM, ThumbnailSize.LARGE],
            max_workers=3,
        )
