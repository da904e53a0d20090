"""Pixel unpackers for uncompressed BMP pixel data.

Supports 1-, 4- and 8-bit paletted rows and 16-, 24- and 32-bit direct color.
Every on-disk row is padded to a multiple of 4 bytes. Rows are stored bottom-up
unless the header height was negative. The returned buffer is always unpadded
with row 0 at the visual top.

Indexed output holds one palette index per pixel; direct output holds
R, G, B, A bytes per pixel.
"""

from __future__ import annotations

import logging
from typing import Callable

from .header import RawHeader
from .reader import ByteReader

log = logging.getLogger(__name__)


def extract_index(byte: int, bit_depth: int, position: int) -> int:
    """Return the palette index at *position* within a packed *byte*.

    Position 0 is the most significant group of ``bit_depth`` bits, i.e. the
    leftmost pixel.

    >>> extract_index(0b1011_0000, 4, 0)
    11
    >>> extract_index(0b0100_0000, 1, 1)
    1
    """
    if bit_depth not in (1, 4, 8):
        raise ValueError(f"unsupported bit depth for packed indices: {bit_depth}")
    per_byte = 8 // bit_depth
    if not 0 <= position < per_byte:
        raise ValueError(f"position {position} out of range for {bit_depth}-bit pixels")
    shift = 8 - bit_depth * (position + 1)
    return (byte >> shift) & ((1 << bit_depth) - 1)


def row_size(width: int, bpp: int) -> int:
    """Bytes per on-disk row, including padding to a 4-byte boundary."""
    if bpp == 16:
        return (width * 2 + 3) & ~3
    if bpp == 24:
        return (width * 3 + 3) & ~3
    if bpp == 32:
        return width * 4
    return (width * bpp + 31) // 32 * 4


def _read_rows(reader: ByteReader, header: RawHeader, convert: Callable[[bytes], bytes]) -> bytes:
    """Read every on-disk row, convert it and return the rows top first.

    Output is only built from rows that were actually read, so a truncated
    file fails on its first short row whatever size the header declares.
    """
    src_len = row_size(header.width, header.bpp)
    rows: list[bytes] = []
    for _ in range(header.height):
        rows.append(convert(reader.read_exact(src_len, "pixel row")))
    if not header.top_down:
        rows.reverse()
    return b"".join(rows)


def _decode_indexed(reader: ByteReader, header: RawHeader) -> bytes:
    """Unpack 1/4/8-bit rows into one index byte per pixel."""
    width, bpp = header.width, header.bpp
    per_byte = 8 // bpp

    def convert(row: bytes) -> bytes:
        if bpp == 8:
            return row[:width]
        return bytes(extract_index(row[x // per_byte], bpp, x % per_byte) for x in range(width))

    return _read_rows(reader, header, convert)


def _decode_16bit(reader: ByteReader, header: RawHeader) -> bytes:
    """Unpack 16-bit 555 rows.

    Each pixel is a little-endian word with blue in bits 10-14, green in
    bits 5-9 and red in bits 0-4. Channels are scaled to 8 bits with ``<< 3``.
    """
    width = header.width

    def convert(row: bytes) -> bytes:
        out = bytearray(width * 4)
        for x in range(width):
            word = row[2 * x] | (row[2 * x + 1] << 8)
            i = 4 * x
            out[i] = (word & 0x1F) << 3
            out[i + 1] = ((word >> 5) & 0x1F) << 3
            out[i + 2] = ((word >> 10) & 0x1F) << 3
            out[i + 3] = 0xFF
        return bytes(out)

    return _read_rows(reader, header, convert)


def _decode_24bit(reader: ByteReader, header: RawHeader) -> bytes:
    """Unpack 24-bit B,G,R rows. Channel values are copied, never rescaled."""
    width = header.width
    used = width * 3

    def convert(row: bytes) -> bytes:
        out = bytearray(width * 4)
        out[0::4] = row[2:used:3]
        out[1::4] = row[1:used:3]
        out[2::4] = row[0:used:3]
        out[3::4] = b"\xff" * width
        return bytes(out)

    return _read_rows(reader, header, convert)


def _decode_32bit(reader: ByteReader, header: RawHeader) -> bytes:
    """Unpack 32-bit B,G,R,A rows by swapping B and R in place."""

    def convert(row: bytes) -> bytes:
        out = bytearray(row)
        # BGRA -> RGBA; the 4th byte is left as stored
        out[0::4], out[2::4] = out[2::4], out[0::4]
        return bytes(out)

    return _read_rows(reader, header, convert)


_Unpacker = Callable[[ByteReader, RawHeader], bytes]

_UNPACKERS: dict[int, _Unpacker] = {
    1: _decode_indexed,
    4: _decode_indexed,
    8: _decode_indexed,
    16: _decode_16bit,
    24: _decode_24bit,
    32: _decode_32bit,
}


def unpack_pixels(reader: ByteReader, header: RawHeader) -> bytes:
    """Read all pixel rows described by *header* from *reader*.

    *reader* must be positioned at the first pixel row (after the color
    table for indexed images).
    """
    log.debug(
        "Unpacking %dx%d %d-bit pixels (%s)",
        header.width,
        header.height,
        header.bpp,
        "top-down" if header.top_down else "bottom-up",
    )
    return _UNPACKERS[header.bpp](reader, header)
