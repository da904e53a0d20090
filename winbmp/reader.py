"""Forward-only byte reader used by the decoder.

Wraps any object with a ``read(n)`` method. Reads never seek, and every
fixed-size read either returns exactly the requested number of bytes or
raises :class:`~winbmp.errors.UnexpectedEOFError`.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO, Union

from .errors import UnexpectedEOFError

Source = Union[BinaryIO, bytes, bytearray, memoryview]

MAX_CHUNK = 1 << 20


class ByteReader:
    """Sequential little-endian reader over a byte source."""

    def __init__(self, source: Source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self.f = source
        self.consumed = 0

    def read_exact(self, n: int, what: str = "data") -> bytes:
        """Read exactly *n* bytes.

        Sources such as pipes may return short reads before the end of data,
        so keep reading until *n* bytes arrive or the source returns nothing.
        Reads are capped at ``MAX_CHUNK`` so a bogus size never allocates more
        than the data actually present.
        """
        if n <= 0:
            return b""
        parts: list[bytes] = []
        got = 0
        while got < n:
            chunk = self.f.read(min(n - got, MAX_CHUNK))
            if not chunk:
                break
            parts.append(chunk)
            got += len(chunk)
        self.consumed += got
        if got < n:
            raise UnexpectedEOFError(n, got, what)
        return b"".join(parts)


def u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def u32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<I", data, offset)[0]


def i32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<i", data, offset)[0]
