"""Wire formats for the applied moves of a game.

Two formats exist and neither can read the other's bytes, so the caller
always names one explicitly:

``Format.COORDINATE``
    One varint per move. The point is re-centred on the middle of the board,
    each offset is zigzag-encoded, the two halves are Morton-interleaved and
    shifted left once to make room for the stone parity bit.

``Format.RUN_LENGTH``
    One byte ``y * 15 + x`` per move with Black/White alternation implied.
    Consecutive moves by the same stone are bracketed by ``0xFF`` / ``0xFE``;
    leaving a bracket flips the stone once. A game opened by White starts
    with an empty ``0xFF 0xFE`` bracket.

Decoding replays every move through ``GameLedger.place`` so the result is
always a reachable game; any bad byte rejects the whole stream.
"""

from enum import Enum

from Gomoku_Review.Board import BLACK, BOARD_SIZE, Point, WHITE, opposite
from Gomoku_Review.codec.binary import (
    DecodeError,
    deinterleave,
    interleave,
    read_var_u14,
    write_var_u14,
    zigzag_decode,
    zigzag_encode,
)

BEGIN_SEQUENCE = 0xFF
END_SEQUENCE = 0xFE

# Cell bytes must never collide with the control bytes.
if BOARD_SIZE * BOARD_SIZE >= END_SEQUENCE:
    raise RuntimeError(f"board of {BOARD_SIZE}x{BOARD_SIZE} cells does not fit below the control bytes")

CENTER = BOARD_SIZE // 2


class Format(Enum):
    COORDINATE = "coordinate"
    RUN_LENGTH = "run-length"


CANONICAL_FORMAT = Format.RUN_LENGTH


class _Alternation:
    """Stone-to-play state for the run-length format."""

    def __init__(self):
        self.stone = BLACK
        self.in_sequence = False

    def begin(self):
        if self.in_sequence:
            raise DecodeError("sequence opened twice")
        self.in_sequence = True

    def end(self):
        if not self.in_sequence:
            raise DecodeError("sequence closed without being opened")
        self.in_sequence = False
        self.stone = opposite(self.stone)

    def advance(self):
        if not self.in_sequence:
            self.stone = opposite(self.stone)


def _encode_coordinate(moves) -> bytes:
    buf = bytearray()
    for pos, stone in moves:
        index = interleave(zigzag_encode(pos.x - CENTER), zigzag_encode(pos.y - CENTER))
        write_var_u14(buf, (index << 1) | (stone - 1))
    return bytes(buf)


def _encode_run_length(moves) -> bytes:
    buf = bytearray()
    if moves and moves[0].stone == WHITE:
        buf += bytes((BEGIN_SEQUENCE, END_SEQUENCE))

    last_stone = None
    in_sequence = False
    for pos, stone in moves:
        if stone == last_stone:
            if not in_sequence:
                # The previous move opens the sequence too.
                buf.insert(len(buf) - 1, BEGIN_SEQUENCE)
                in_sequence = True
        elif in_sequence:
            buf.append(END_SEQUENCE)
            in_sequence = False
        buf.append(pos.y * BOARD_SIZE + pos.x)
        last_stone = stone

    if in_sequence:
        buf.append(END_SEQUENCE)
    return bytes(buf)


def _replay(ledger, pos, stone):
    if not ledger.board.contains(pos):
        raise DecodeError(f"point {tuple(pos)} out of board")
    if not ledger.place(pos, stone):
        raise DecodeError(f"point {tuple(pos)} already occupied")


def _decode_coordinate(data, ledger):
    pos = 0
    while pos < len(data):
        val, pos = read_var_u14(data, pos)
        stone = (val & 1) + 1
        ux, uy = deinterleave(val >> 1)
        point = Point(zigzag_decode(ux) + CENTER, zigzag_decode(uy) + CENTER)
        _replay(ledger, point, stone)


def _decode_run_length(data, ledger):
    turn = _Alternation()
    for byte in data:
        if byte == BEGIN_SEQUENCE:
            turn.begin()
        elif byte == END_SEQUENCE:
            turn.end()
        else:
            _replay(ledger, Point(byte % BOARD_SIZE, byte // BOARD_SIZE), turn.stone)
            turn.advance()
    if turn.in_sequence:
        raise DecodeError("sequence left open at end of stream")


def encode(moves, fmt: Format = CANONICAL_FORMAT) -> bytes:
    """Encode a sequence of Moves."""
    moves = list(moves)
    if fmt is Format.COORDINATE:
        return _encode_coordinate(moves)
    if fmt is Format.RUN_LENGTH:
        return _encode_run_length(moves)
    raise ValueError(f"unknown format: {fmt!r}")


def decode(data, fmt: Format, ledger_factory):
    """Build a ledger with ledger_factory and replay the moves in data onto it.

    Raises DecodeError on any bad input; the half-built ledger is never returned.
    """
    data = bytes(data)
    ledger = ledger_factory()
    if fmt is Format.COORDINATE:
        _decode_coordinate(data, ledger)
    elif fmt is Format.RUN_LENGTH:
        _decode_run_length(data, ledger)
    else:
        raise ValueError(f"unknown format: {fmt!r}")
    return ledger
