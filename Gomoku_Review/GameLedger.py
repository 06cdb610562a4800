"""Replayable move record over a Board: undo/redo/jump, win tracking, serialization."""

from typing import NamedTuple, Optional

from Gomoku_Review.Board import BLACK, EMPTY, WHITE, Board, Point, Row, opposite
from Gomoku_Review.codec.binary import DecodeError
from Gomoku_Review.codec.formats import CANONICAL_FORMAT, Format, decode, encode


class Move(NamedTuple):
    pos: Point
    stone: int


class Win(NamedTuple):
    """First win witnessed: the move count at which it appeared, and its row."""

    index: int
    row: Row


class GameLedger:
    """All moves ever entered plus a cursor splitting them into past and future.

    The board always holds exactly the replay of the past moves. Undo, redo and
    jump only move the cursor and apply or retract cells; ``place`` is the only
    way to add moves and it drops the future first.
    """

    def __init__(self):
        self.board = Board()
        self.moves = []
        self.index = 0
        self.win: Optional[Win] = None

    def __eq__(self, other):
        if not isinstance(other, GameLedger):
            return NotImplemented
        return self.moves == other.moves and self.index == other.index

    def __repr__(self):
        return f"GameLedger(index={self.index}, total={len(self.moves)})"

    # Queries

    def total_moves(self) -> int:
        return len(self.moves)

    def move_index(self) -> int:
        return self.index

    def past_moves(self):
        return tuple(self.moves[: self.index])

    def future_moves(self):
        return tuple(self.moves[self.index :])

    def stone_at(self, p: Point) -> int:
        return self.board.occupancy(p)

    def first_visible_win(self) -> Optional[Win]:
        """The cached win, if the move that produced it is still in the past."""
        if self.win is not None and self.win.index <= self.index:
            return self.win
        return None

    def infer_turn(self) -> int:
        if self.index == 0:
            return BLACK
        return opposite(self.moves[self.index - 1].stone)

    # Commands

    def place(self, p: Point, stone: int) -> bool:
        """Play stone at p, discarding any undone moves. False if p is occupied."""
        if stone not in (BLACK, WHITE):
            raise ValueError("stone must be BLACK (1) or WHITE (2)")
        p = Point(*p)
        if self.board.occupancy(p) != EMPTY:
            return False
        self.board.place(p, stone)

        del self.moves[self.index :]
        self.moves.append(Move(p, stone))
        self.index += 1

        # A win found earlier on this path stays valid; only rescan when it is stale.
        if self.win is None or self.win.index >= self.index:
            row = self.board.find_winning_row(p)
            self.win = Win(self.index, row) if row is not None else None
        return True

    def undo(self) -> bool:
        if self.index == 0:
            return False
        self.index -= 1
        self.board.clear(self.moves[self.index].pos)
        return True

    def redo(self) -> bool:
        if self.index >= len(self.moves):
            return False
        nxt = self.moves[self.index]
        self.board.place(nxt.pos, nxt.stone)
        self.index += 1
        return True

    def jump(self, target: int) -> bool:
        """Undo or redo until the cursor reaches target; cost is the distance travelled."""
        if target < 0 or target > len(self.moves):
            raise IndexError(f"move index {target} out of range 0..{len(self.moves)}")
        if target == self.index:
            return False
        if target < self.index:
            for i in range(self.index, target, -1):
                self.board.clear(self.moves[i - 1].pos)
        else:
            for i in range(self.index, target):
                self.board.place(self.moves[i].pos, self.moves[i].stone)
        self.index = target
        return True

    # Serialization

    def serialize(self, fmt: Format = CANONICAL_FORMAT) -> bytes:
        """Encode the past moves only."""
        return encode(self.past_moves(), fmt)

    @classmethod
    def deserialize(cls, data, fmt: Format = CANONICAL_FORMAT) -> Optional["GameLedger"]:
        """Rebuild a ledger from bytes, or None if the stream is not a valid game."""
        try:
            return decode(data, fmt, cls)
        except DecodeError:
            return None
