import io
import struct

import pytest


def build_bmp(
    width,
    height,
    bpp,
    rows,
    palette=None,
    *,
    top_down=False,
    dib_len=40,
    compression=0,
    masks=(0, 0, 0),
    num_color=None,
    offset=None,
):
    """Assemble BMP file bytes.

    ``rows`` are unpadded pixel rows in visual order (top first); they are
    padded to 4 bytes and written bottom-up unless ``top_down`` is set.
    ``palette`` is a list of (R, G, B) tuples.
    """
    palette = palette or []
    if num_color is None:
        num_color = len(palette)
    color_table = b"".join(bytes((b, g, r, 0)) for r, g, b in palette)

    padded = [row + b"\x00" * (-len(row) % 4) for row in rows]
    if not top_down:
        padded = padded[::-1]
    pixel_data = b"".join(padded)

    if offset is None:
        offset = 14 + dib_len + len(color_table)

    dib = struct.pack(
        "<IiiHHIIiiII",
        dib_len,
        width,
        -height if top_down else height,
        1,
        bpp,
        compression,
        len(pixel_data),
        2835,
        2835,
        num_color,
        0,
    )
    if dib_len > 40:
        dib += struct.pack("<III", *masks)
    dib += b"\x00" * (dib_len - len(dib))

    file_size = 14 + len(dib) + len(color_table) + len(pixel_data)
    file_header = b"BM" + struct.pack("<IHHI", file_size, 0, 0, offset)
    return file_header + dib + color_table + pixel_data


@pytest.fixture
def make_bmp():
    return build_bmp


@pytest.fixture
def bw_palette():
    return [(0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF)]


@pytest.fixture
def sample_1bit(make_bmp, bw_palette):
    """8x3 1-bit image with alternating bit patterns."""
    return make_bmp(8, 3, 1, [b"\xa5", b"\x29", b"\x4a"], bw_palette)


@pytest.fixture
def sample_24bit(make_bmp):
    """3x2 24-bit image; rows need one pad byte each."""
    rows = [
        bytes([1, 2, 3, 4, 5, 6, 7, 8, 9]),
        bytes([10, 20, 30, 40, 50, 60, 70, 80, 90]),
    ]
    return make_bmp(3, 2, 24, rows)


class TrickleReader(io.RawIOBase):
    """Returns at most one byte per read call."""

    def __init__(self, data):
        self._buf = io.BytesIO(data)

    def readable(self):
        return True

    def read(self, n=-1):
        return self._buf.read(1 if n != 0 else 0)


class FailingReader(io.RawIOBase):
    """Serves *limit* bytes, then raises OSError."""

    def __init__(self, data, limit):
        self._buf = io.BytesIO(data)
        self._limit = limit

    def readable(self):
        return True

    def read(self, n=-1):
        if self._buf.tell() >= self._limit:
            raise OSError("device went away")
        n = min(n, self._limit - self._buf.tell())
        return self._buf.read(n)


@pytest.fixture
def trickle_reader():
    return TrickleReader


@pytest.fixture
def failing_reader():
    return FailingReader
