"""Windows Bitmap (BMP) decoder."""

__version__ = "0.1.0"

from .decoder import BMPImage, DecodedConfig, Decoder, decode, decode_config
from .errors import (
    BadOffsetError,
    BadSignatureError,
    DecodeError,
    FormatError,
    FormatErrorKind,
    InvalidGeometryError,
    UnexpectedEOFError,
    UnsupportedBitDepthError,
    UnsupportedCompressionError,
    UnsupportedHeaderLengthError,
)
from .header import FORMAT_NAME, SIGNATURE, RawHeader, matches_signature, read_header
from .palette import RGBA, ColorTable, RGBAModel
from .unpack import extract_index

__all__ = [
    "__version__",
    "decode",
    "decode_config",
    "Decoder",
    "BMPImage",
    "DecodedConfig",
    "RawHeader",
    "read_header",
    "ColorTable",
    "RGBAModel",
    "RGBA",
    "extract_index",
    "matches_signature",
    "SIGNATURE",
    "FORMAT_NAME",
    "DecodeError",
    "FormatError",
    "FormatErrorKind",
    "BadSignatureError",
    "UnsupportedHeaderLengthError",
    "InvalidGeometryError",
    "UnsupportedCompressionError",
    "BadOffsetError",
    "UnsupportedBitDepthError",
    "UnexpectedEOFError",
]
