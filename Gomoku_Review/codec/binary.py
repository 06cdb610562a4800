"""Bit-level helpers for the coordinate stream: zigzag, Morton interleave, 14-bit varint."""

U32_MASK = 0xFFFFFFFF


class DecodeError(ValueError):
    """Raised when a byte stream cannot be turned back into a game."""


def zigzag_encode(n: int) -> int:
    """Map a signed 32-bit int onto an unsigned one, keeping small magnitudes small."""
    return ((n << 1) ^ (n >> 31)) & U32_MASK


def zigzag_decode(u: int) -> int:
    return (u >> 1) ^ -(u & 1)


def _scatter(v: int) -> int:
    v &= 0xFFFF
    v = (v | (v << 8)) & 0x00FF00FF
    v = (v | (v << 4)) & 0x0F0F0F0F
    v = (v | (v << 2)) & 0x33333333
    return (v | (v << 1)) & 0x55555555


def _gather(v: int) -> int:
    v &= 0x55555555
    v = (v | (v >> 1)) & 0x33333333
    v = (v | (v >> 2)) & 0x0F0F0F0F
    v = (v | (v >> 4)) & 0x00FF00FF
    return (v | (v >> 8)) & 0x0000FFFF


def interleave(x: int, y: int) -> int:
    """Morton code: x takes the even bits, y the odd bits."""
    return _scatter(x) | (_scatter(y) << 1)


def deinterleave(code: int):
    return _gather(code), _gather(code >> 1)


def write_var_u14(buf: bytearray, val: int):
    """Append val (< 2**14) as one byte, or two when it needs more than 7 bits."""
    if val & 0x3F80:
        buf.append((val & 0x7F) | 0x80)
        val >>= 7
    buf.append(val & 0x7F)


def read_var_u14(data, pos: int):
    """Read one varint starting at pos. Returns (value, next_pos)."""
    if pos >= len(data):
        raise DecodeError("stream ended before a value")
    lo = data[pos]
    pos += 1
    hi = 0
    if lo & 0x80:
        if pos >= len(data):
            raise DecodeError("stream ended inside a two-byte value")
        hi = data[pos]
        pos += 1
        if hi & 0x80:
            raise DecodeError("continuation bit set on second byte")
    return (hi << 7) | (lo & 0x7F), pos
