"""BMP file header and DIB header parser.

File layout consumed here::

    0   2  "BM"
    2   4  file size          (unchecked)
    6   4  reserved           (unchecked)
    10  4  pixel data offset
    14  4  DIB header length  (40/52/60/96/108/112/120/124)
    ..     rest of the DIB header

Offsets of the DIB fields below are relative to the start of the DIB header.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import (
    BadOffsetError,
    BadSignatureError,
    InvalidGeometryError,
    UnsupportedBitDepthError,
    UnsupportedCompressionError,
    UnsupportedHeaderLengthError,
)
from .reader import ByteReader, Source, i32, u16, u32

log = logging.getLogger(__name__)

SIGNATURE = b"BM"
FORMAT_NAME = "bmp"

FILE_HEADER_LEN = 14
INFO_HEADER_LEN = 40  # BITMAPINFOHEADER, the shortest supported DIB header

SUPPORTED_DIB_LENGTHS: frozenset[int] = frozenset({40, 52, 60, 96, 108, 112, 120, 124})
INDEXED_DEPTHS: frozenset[int] = frozenset({1, 4, 8})
DIRECT_DEPTHS: frozenset[int] = frozenset({16, 24, 32})

BI_RGB = 0
BI_BITFIELDS = 3

# XOR of the R/G/B masks for the standard 555 and 888 layouts
_TRIVIAL_MASKS: dict[int, int] = {
    16: 0x7FFF,
    32: 0x00FFFFFF,
}


@dataclass(frozen=True)
class RawHeader:
    """Fields read off the file header and DIB header."""

    offset: int
    dib_len: int
    width: int
    height: int  # always positive, see top_down
    top_down: bool
    bpp: int
    compression: int  # after the trivial bitfields rule
    num_color: int
    red_mask: int = 0
    green_mask: int = 0
    blue_mask: int = 0

    @property
    def indexed(self) -> bool:
        return self.bpp in INDEXED_DEPTHS

    @property
    def color_table_len(self) -> int:
        """Size in bytes of the color table that follows the DIB header."""
        return self.num_color * 4 if self.indexed else 0

    def summary(self) -> dict[str, int | bool]:
        return {
            "width": self.width,
            "height": self.height,
            "top_down": self.top_down,
            "bpp": self.bpp,
            "compression": self.compression,
            "colors": self.num_color,
            "offset": self.offset,
            "dib_header_length": self.dib_len,
        }


def matches_signature(prefix: bytes) -> bool:
    """Return True if *prefix* starts with the BMP magic bytes."""
    return bytes(prefix[:2]) == SIGNATURE


def is_trivial_bitfields(bpp: int, red_mask: int, green_mask: int, blue_mask: int) -> bool:
    """Check whether BI_BITFIELDS masks describe the plain 555/888 layout.

    This only recognises the masks a BI_RGB image of the same depth would
    use. Arbitrary masks (565, alpha masks, ...) are not decoded.
    """
    expected = _TRIVIAL_MASKS.get(bpp)
    return expected is not None and (red_mask ^ green_mask ^ blue_mask) == expected


def expected_offset(dib_len: int, bpp: int, num_color: int) -> int:
    offset = FILE_HEADER_LEN + dib_len
    if bpp in INDEXED_DEPTHS:
        offset += num_color * 4
    return offset


def read_header(reader: ByteReader | Source) -> RawHeader:
    """Read and validate the file header and the DIB header.

    Leaves *reader* positioned at the first byte after the DIB header.
    """
    if not isinstance(reader, ByteReader):
        reader = ByteReader(reader)

    sig = reader.read_exact(2, "file signature")
    if sig != SIGNATURE:
        raise BadSignatureError(sig)

    head = sig + reader.read_exact(FILE_HEADER_LEN + 4 - 2, "file header")
    offset = u32(head, 10)
    dib_len = u32(head, FILE_HEADER_LEN)
    if dib_len not in SUPPORTED_DIB_LENGTHS:
        raise UnsupportedHeaderLengthError(dib_len)

    dib = head[FILE_HEADER_LEN:] + reader.read_exact(dib_len - 4, "DIB header")

    width = i32(dib, 4)
    raw_height = i32(dib, 8)
    if width <= 0 or raw_height == 0:
        raise InvalidGeometryError(width, raw_height)
    # negative height means rows are stored top to bottom
    top_down = raw_height < 0
    height = abs(raw_height)

    bpp = u16(dib, 14)
    compression = u16(dib, 16)
    num_color = u32(dib, 32)

    red_mask = green_mask = blue_mask = 0
    if dib_len > INFO_HEADER_LEN:
        red_mask, green_mask, blue_mask = u32(dib, 40), u32(dib, 44), u32(dib, 48)

    if (
        compression == BI_BITFIELDS
        and dib_len > INFO_HEADER_LEN
        and is_trivial_bitfields(bpp, red_mask, green_mask, blue_mask)
    ):
        log.debug("BI_BITFIELDS masks match the %d-bit default layout", bpp)
        compression = BI_RGB

    if compression != BI_RGB:
        raise UnsupportedCompressionError(compression)

    if bpp not in INDEXED_DEPTHS and bpp not in DIRECT_DEPTHS:
        raise UnsupportedBitDepthError(bpp)

    want = expected_offset(dib_len, bpp, num_color)
    if offset != want:
        raise BadOffsetError(offset, want)

    log.debug(
        "BMP header: %dx%d bpp=%d dib_len=%d colors=%d top_down=%s",
        width,
        height,
        bpp,
        dib_len,
        num_color,
        top_down,
    )

    return RawHeader(
        offset=offset,
        dib_len=dib_len,
        width=width,
        height=height,
        top_down=top_down,
        bpp=bpp,
        compression=compression,
        num_color=num_color,
        red_mask=red_mask,
        green_mask=green_mask,
        blue_mask=blue_mask,
    )
