"""Byte codecs and the shareable token framing for game records."""

from .binary import DecodeError
from .formats import CANONICAL_FORMAT, Format, decode, encode
from .token import TokenError, from_token, to_token

__all__ = [
    "CANONICAL_FORMAT",
    "DecodeError",
    "Format",
    "TokenError",
    "decode",
    "encode",
    "from_token",
    "to_token",
]
