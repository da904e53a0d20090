import pytest

from winbmp.errors import UnexpectedEOFError
from winbmp.header import DIRECT_DEPTHS, INDEXED_DEPTHS, read_header
from winbmp.reader import ByteReader
from winbmp.unpack import _UNPACKERS, extract_index, row_size, unpack_pixels


def _unpack(data):
    reader = ByteReader(data)
    header = read_header(reader)
    # skip the color table
    reader.read_exact(header.color_table_len)
    return unpack_pixels(reader, header)


@pytest.mark.parametrize("bit_depth", [1, 4, 8])
def test_extract_index_exhaustive(bit_depth):
    for byte in range(256):
        bits = format(byte, "08b")
        for pos in range(8 // bit_depth):
            want = int(bits[pos * bit_depth : (pos + 1) * bit_depth], 2)
            assert extract_index(byte, bit_depth, pos) == want


def test_extract_index_msb_first():
    assert [extract_index(0b1000_0001, 1, p) for p in range(8)] == [1, 0, 0, 0, 0, 0, 0, 1]
    assert extract_index(0xAB, 4, 0) == 0xA
    assert extract_index(0xAB, 4, 1) == 0xB
    assert extract_index(0xAB, 8, 0) == 0xAB


@pytest.mark.parametrize("bit_depth,pos", [(1, 8), (1, -1), (4, 2), (8, 1), (3, 0), (16, 0)])
def test_extract_index_invalid(bit_depth, pos):
    with pytest.raises(ValueError):
        extract_index(0xFF, bit_depth, pos)


@pytest.mark.parametrize(
    "width,bpp,expected",
    [
        (1, 1, 4),
        (32, 1, 4),
        (33, 1, 8),
        (7, 4, 4),
        (9, 4, 8),
        (5, 8, 8),
        (1, 16, 4),
        (3, 16, 8),
        (1, 24, 4),
        (4, 24, 12),
        (5, 24, 16),
        (3, 32, 12),
    ],
)
def test_row_size(width, bpp, expected):
    assert row_size(width, bpp) == expected


def test_unpack_4bit_odd_width(make_bmp):
    palette = [(i, i, i) for i in range(16)]
    rows = [bytes([0x12, 0x30]), bytes([0xF0, 0xE0])]
    pix = _unpack(make_bmp(3, 2, 4, rows, palette))
    assert pix == bytes([1, 2, 3, 0xF, 0, 0xE])


def test_unpack_1bit_narrower_than_byte(make_bmp, bw_palette):
    # only the first two bits of each row byte are pixels
    rows = [b"\x80", b"\x7f"]
    pix = _unpack(make_bmp(2, 2, 1, rows, bw_palette))
    assert pix == bytes([1, 0, 0, 1])


def test_unpack_1bit_spans_bytes(make_bmp, bw_palette):
    rows = [b"\xff\x80"]
    pix = _unpack(make_bmp(9, 1, 1, rows, bw_palette))
    assert pix == bytes([1] * 9)


def test_unpack_8bit(make_bmp):
    palette = [(i, 0, 0) for i in range(6)]
    rows = [bytes([0, 1, 2]), bytes([3, 4, 5])]
    assert _unpack(make_bmp(3, 2, 8, rows, palette)) == bytes(range(6))


def test_unpack_16bit_blue_max(make_bmp):
    # blue occupies bits 10-14
    pix = _unpack(make_bmp(1, 1, 16, [(0x7C00).to_bytes(2, "little")]))
    assert pix == bytes([0, 0, 0xF8, 0xFF])


def test_unpack_16bit_channels(make_bmp):
    words = [0x001F, 0x03E0, 0x7FFF, 0x8000]
    row = b"".join(w.to_bytes(2, "little") for w in words)
    pix = _unpack(make_bmp(4, 1, 16, [row]))
    assert pix == bytes(
        [0xF8, 0, 0, 0xFF]
        + [0, 0xF8, 0, 0xFF]
        + [0xF8, 0xF8, 0xF8, 0xFF]
        + [0, 0, 0, 0xFF]
    )


def test_unpack_16bit_low_bits_scaled(make_bmp):
    # red=1, green=2, blue=3
    word = 1 | (2 << 5) | (3 << 10)
    pix = _unpack(make_bmp(1, 1, 16, [word.to_bytes(2, "little")]))
    assert pix == bytes([8, 16, 24, 0xFF])


def test_unpack_24bit_identity(sample_24bit):
    pix = _unpack(sample_24bit)
    assert pix == bytes(
        [3, 2, 1, 255, 6, 5, 4, 255, 9, 8, 7, 255]
        + [30, 20, 10, 255, 60, 50, 40, 255, 90, 80, 70, 255]
    )


def test_unpack_24bit_full_byte_range(make_bmp):
    values = list(range(256))
    row = bytes(values[:255])  # 85 pixels
    pix = _unpack(make_bmp(85, 1, 24, [row]))
    for x in range(85):
        b, g, r = row[3 * x : 3 * x + 3]
        assert pix[4 * x : 4 * x + 4] == bytes([r, g, b, 0xFF])


def test_unpack_32bit_swaps_and_keeps_alpha(make_bmp):
    rows = [bytes([1, 2, 3, 4, 5, 6, 7, 0]), bytes([9, 10, 11, 0x80, 0, 0, 0xFF, 0xFF])]
    pix = _unpack(make_bmp(2, 2, 32, rows))
    assert pix == bytes([3, 2, 1, 4, 7, 6, 5, 0, 11, 10, 9, 0x80, 0xFF, 0, 0, 0xFF])


def test_unpack_consumes_row_padding(make_bmp):
    rows = [b"\x01\x02\x03", b"\x04\x05\x06"]
    data = make_bmp(1, 2, 24, rows) + b"trailer"
    reader = ByteReader(data)
    header = read_header(reader)
    unpack_pixels(reader, header)
    assert reader.read_exact(7) == b"trailer"


def test_every_supported_depth_has_an_unpacker():
    assert set(_UNPACKERS) == INDEXED_DEPTHS | DIRECT_DEPTHS


def test_unpack_short_row(sample_24bit):
    with pytest.raises(UnexpectedEOFError):
        _unpack(sample_24bit[:-1])
