"""Color models: the BMP color table (indexed images) and direct RGBA."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Union

from .reader import ByteReader

log = logging.getLogger(__name__)

RGBAColor = tuple[int, int, int, int]


@dataclass(frozen=True)
class RGBAModel:
    """Direct color: every pixel carries its own R, G, B, A bytes."""

    name: str = "rgba"

    @property
    def indexed(self) -> bool:
        return False


RGBA = RGBAModel()


@dataclass(frozen=True)
class ColorTable:
    """Ordered palette of (R, G, B, A) entries in on-disk order."""

    entries: tuple[RGBAColor, ...] = ()

    @property
    def indexed(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> RGBAColor:
        return self.entries[index]

    def __iter__(self) -> Iterator[RGBAColor]:
        return iter(self.entries)

    def flat_rgb(self, size: int = 256) -> list[int]:
        """Flat [R,G,B,R,G,B,...] list padded with black to *size* entries."""
        flat: list[int] = []
        for r, g, b, _a in self.entries[:size]:
            flat.extend([r, g, b])
        while len(flat) < size * 3:
            flat.extend([0, 0, 0])
        return flat


ColorModel = Union[RGBAModel, ColorTable]


def parse_color_table(data: bytes, num_color: int) -> ColorTable:
    """Build a color table from ``num_color`` B,G,R,X quads."""
    entries = []
    for i in range(num_color):
        b, g, r = data[4 * i], data[4 * i + 1], data[4 * i + 2]
        entries.append((r, g, b, 0xFF))
    return ColorTable(tuple(entries))


def read_color_table(reader: ByteReader, num_color: int) -> ColorTable:
    """Read the color table that immediately follows the DIB header."""
    data = reader.read_exact(num_color * 4, "color table")
    table = parse_color_table(data, num_color)
    log.debug("Color table: %d entries", len(table))
    return table
