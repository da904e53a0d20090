"""Decoded BMP → PIL Image."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from PIL import Image

if TYPE_CHECKING:
    from .decoder import BMPImage

log = logging.getLogger(__name__)


def to_pil(image: BMPImage, alpha: bool = True) -> Image.Image:
    """Convert a decoded image to a Pillow image.

    Indexed images become mode ``"P"`` with the color table as palette,
    direct images mode ``"RGBA"``. With ``alpha=False`` direct images are
    returned as ``"RGB"``, which suits 32-bit files whose 4th byte is unused.
    """
    size = (image.width, image.height)

    if image.indexed:
        img = Image.frombytes("P", size, image.pixels)
        img.putpalette(image.color_model.flat_rgb())
        return img

    img = Image.frombytes("RGBA", size, image.pixels)
    if not alpha:
        return img.convert("RGB")
    return img
