"""Multi-size resize pipeline.

One decoded base image is resized to every requested size class. Each resize
only reads the base image, so the sizes are fanned out over a thread pool and
collected back in request order.
"""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image

from .size import ThumbnailSize

LOGGER = logging.getLogger(__name__)


def fit_dimensions(
    width: int,
    height: int,
    max_width: int,
    max_height: int,
    upscale: bool = True,
) -> Tuple[int, int]:
    """Largest (w, h) with the source aspect ratio that fits in the box.

    Args:
        width: Source width
        height: Source height
        max_width: Box width
        max_height: Box height
        upscale: When False, sources already inside the box keep their size

    Returns:
        (w, h), each side at least 1 pixel.
    """
    ratio = min(max_width / width, max_height / height)
    if not upscale:
        ratio = min(ratio, 1.0)
    # Round half up; Python's round() would round half to even.
    new_width = max(int(math.floor(width * ratio + 0.5)), 1)
    new_height = max(int(math.floor(height * ratio + 0.5)), 1)
    return new_width, new_height


def _resampleable(image: Image.Image) -> Image.Image:
    """Return an image in a mode Pillow can resample with LANCZOS.

    Pillow falls back to nearest-neighbour for palette and bilevel images,
    and only resamples 16-bit integer samples reliably as 32-bit ``I``.
    """
    if image.mode == "P":
        return image.convert("RGBA" if "transparency" in image.info else "RGB")
    if image.mode == "1":
        return image.convert("L")
    if image.mode.startswith("I;16"):
        return image.convert("I")
    return image


def _resize_one(image: Image.Image, size: ThumbnailSize, upscale: bool) -> Image.Image:
    max_width, max_height = size.dimensions()
    target = fit_dimensions(image.width, image.height, max_width, max_height, upscale=upscale)
    return image.resize(target, Image.LANCZOS)


def resize_images(
    image: Image.Image,
    sizes: Sequence[ThumbnailSize],
    upscale: bool = True,
    max_workers: Optional[int] = None,
) -> List[Image.Image]:
    """Resize ``image`` to every requested size.

    Args:
        image: Decoded base image; it is never modified.
        sizes: Requested size classes. Duplicates produce separate outputs.
        upscale: Enlarge images smaller than the box
        max_workers: Optional cap for the pool size

    Returns:
        One image per entry of ``sizes``, in the same order.
    """
    total = len(sizes)
    if total == 0:
        return []

    source = _resampleable(image)
    pool_size = max_workers or min(32, os.cpu_count() or 4, total)
    pool_size = min(pool_size, total)

    if pool_size == 1:
        return [_resize_one(source, size, upscale) for size in sizes]

    LOGGER.debug("Resizing %dx%d image to %d sizes on %d workers", source.width, source.height, total, pool_size)
    collected: Dict[int, Image.Image] = {}

    with ThreadPoolExecutor(max_workers=pool_size) as executor:
        future_to_idx = {executor.submit(_resize_one, source, size, upscale): idx for idx, size in enumerate(sizes)}
        try:
            for fut in as_completed(future_to_idx):
                collected[future_to_idx[fut]] = fut.result()
        except BaseException:
            for pending in future_to_idx:
                pending.cancel()
            raise

    # Return results in the original order
    return [collected[idx] for idx in range(total)]
