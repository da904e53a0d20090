"""Exception hierarchy for BMP decoding.

Every failure aborts the current decode. Structural problems with the input
raise a :class:`FormatError` subclass; running out of bytes where the format
requires a fixed-size read raises :class:`UnexpectedEOFError`. Errors raised
by the byte source itself (``OSError`` and friends) are never wrapped.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class FormatErrorKind(str, Enum):
    """Why an input is not a supported BMP."""

    BAD_SIGNATURE = "bad_signature"
    UNSUPPORTED_HEADER_LENGTH = "unsupported_header_length"
    UNSUPPORTED_HEADER = "unsupported_header_length"  # alias
    INVALID_GEOMETRY = "invalid_geometry"
    UNSUPPORTED_COMPRESSION = "unsupported_compression"
    BAD_OFFSET = "bad_offset"
    UNSUPPORTED_BIT_DEPTH = "unsupported_bit_depth"


class DecodeError(Exception):
    """Base class for all BMP decoding errors."""


class FormatError(DecodeError):
    """The input is structurally not a supported BMP."""

    kind: FormatErrorKind

    def __init__(self, kind: FormatErrorKind, field: str, value: Any, message: str = ""):
        self.kind = kind
        self.field = field
        self.value = value
        self.message = message or f"bmp: invalid {field} (got: {value!r})"
        super().__init__(self.message)


class BadSignatureError(FormatError):
    """The file does not start with "BM"."""

    def __init__(self, value: bytes):
        super().__init__(
            FormatErrorKind.BAD_SIGNATURE,
            "signature",
            value,
            f"bmp: invalid file signature (got: {value!r})",
        )


class UnsupportedHeaderLengthError(FormatError):
    """The DIB header length is not one of the supported sizes."""

    def __init__(self, value: int):
        super().__init__(
            FormatErrorKind.UNSUPPORTED_HEADER_LENGTH,
            "dib_len",
            value,
            f"bmp: unsupported DIB header length (got: {value})",
        )


class InvalidGeometryError(FormatError):
    """Width is not positive or height is zero."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(
            FormatErrorKind.INVALID_GEOMETRY,
            "width" if width <= 0 else "height",
            width if width <= 0 else height,
            "bmp: width must be greater than zero and height must be non-zero "
            f"(width: {width}, height: {height})",
        )


class UnsupportedCompressionError(FormatError):
    """Compressed pixel data other than trivial bitfields."""

    def __init__(self, value: int):
        super().__init__(
            FormatErrorKind.UNSUPPORTED_COMPRESSION,
            "compression",
            value,
            f"bmp: unsupported compression method (got: {value})",
        )


class BadOffsetError(FormatError):
    """Pixel data offset disagrees with the header and color table sizes."""

    def __init__(self, value: int, expected: int):
        self.expected = expected
        super().__init__(
            FormatErrorKind.BAD_OFFSET,
            "offset",
            value,
            f"bmp: incorrect pixel data offset (got: {value}, expected: {expected})",
        )


class UnsupportedBitDepthError(FormatError):
    """Bits per pixel outside 1, 4, 8, 16, 24 and 32."""

    def __init__(self, value: int):
        super().__init__(
            FormatErrorKind.UNSUPPORTED_BIT_DEPTH,
            "bpp",
            value,
            f"bmp: unsupported number of bits per pixel (got: {value})",
        )


class UnexpectedEOFError(DecodeError, EOFError):
    """Fewer bytes were available than the format requires."""

    def __init__(self, expected: int, got: int, what: str = "data"):
        self.expected = expected
        self.got = got
        self.what = what
        super().__init__(f"bmp: unexpected EOF reading {what} (wanted {expected} bytes, got {got})")
