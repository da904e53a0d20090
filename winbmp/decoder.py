"""Decoder facade: header → color table → pixel rows.

Two entry points mirror each other:

  decode_config(source)  header (+ color table) only
  decode(source)         full image

The source is read strictly forward, exactly once. A :class:`Decoder`
instance is single-use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .header import RawHeader, read_header
from .palette import RGBA, ColorModel, read_color_table
from .reader import ByteReader, Source
from .unpack import unpack_pixels

if TYPE_CHECKING:
    from PIL import Image

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedConfig:
    """Color model and dimensions of a BMP image."""

    color_model: ColorModel
    width: int
    height: int


@dataclass(frozen=True)
class BMPImage:
    """A decoded BMP image.

    ``pixels`` is row-major with row 0 at the top and no row padding. Indexed
    images hold one palette index per pixel, direct images R, G, B, A bytes.
    """

    width: int
    height: int
    color_model: ColorModel
    pixels: bytes

    @property
    def indexed(self) -> bool:
        return self.color_model.indexed

    @property
    def bytes_per_pixel(self) -> int:
        return 1 if self.indexed else 4

    @property
    def stride(self) -> int:
        return self.width * self.bytes_per_pixel

    @property
    def config(self) -> DecodedConfig:
        return DecodedConfig(self.color_model, self.width, self.height)

    def row(self, y: int) -> bytes:
        return self.pixels[y * self.stride : (y + 1) * self.stride]

    def pixel(self, x: int, y: int) -> int | tuple[int, ...]:
        """Palette index (indexed) or (R, G, B, A) tuple at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        i = y * self.stride + x * self.bytes_per_pixel
        if self.indexed:
            return self.pixels[i]
        return tuple(self.pixels[i : i + 4])

    def to_pil(self, alpha: bool = True) -> Image.Image:
        from .imaging import to_pil

        return to_pil(self, alpha=alpha)


class Decoder:
    """Single-use BMP decoder bound to one byte source."""

    def __init__(self, source: Source):
        self._reader = ByteReader(source)
        self._used = False
        self.header: RawHeader | None = None
        self.config: DecodedConfig | None = None

    def _claim(self) -> None:
        if self._used:
            raise RuntimeError("Decoder instances are single-use; create a new one per source")
        self._used = True

    def _read_config(self) -> DecodedConfig:
        self.header = read_header(self._reader)
        h = self.header

        model: ColorModel
        if h.indexed:
            model = read_color_table(self._reader, h.num_color)
        else:
            model = RGBA

        self.config = DecodedConfig(color_model=model, width=h.width, height=h.height)
        return self.config

    def decode_config(self) -> DecodedConfig:
        """Parse the headers (and color table) without touching pixel data."""
        self._claim()
        return self._read_config()

    def decode(self) -> BMPImage:
        """Parse the headers and unpack every pixel row."""
        self._claim()
        config = self._read_config()
        pixels = unpack_pixels(self._reader, self.header)
        log.debug("Decoded %dx%d image (%d bytes)", config.width, config.height, len(pixels))
        return BMPImage(
            width=config.width,
            height=config.height,
            color_model=config.color_model,
            pixels=pixels,
        )


def decode_config(source: Source) -> DecodedConfig:
    """Read width, height and color model of the BMP in *source*."""
    return Decoder(source).decode_config()


def decode(source: Source) -> BMPImage:
    """Decode the BMP in *source*."""
    return Decoder(source).decode()
