"""Board state container and five-in-a-row line scanning."""

from enum import Enum
from typing import NamedTuple, Optional, Tuple

BOARD_SIZE = 15

# Cell values; Black always opens the game.
EMPTY = 0
BLACK = 1
WHITE = 2


def opposite(stone):
    """Return the other player's stone; EMPTY stays EMPTY."""
    if stone == EMPTY:
        return stone
    return stone ^ 3


def stone_name(stone):
    return {BLACK: "Black", WHITE: "White"}.get(stone, "Empty")


class OutOfBoard(ValueError):
    """Raised when a point outside the grid is accessed."""


class Point(NamedTuple):
    x: int
    y: int

    def adjacent(self, axis: "Axis", forward: bool) -> "Point":
        dx, dy = axis.value
        if forward:
            return Point(self.x + dx, self.y + dy)
        return Point(self.x - dx, self.y - dy)


class Axis(Enum):
    # Declaration order is the scan order used for win detection.
    VERTICAL = (0, 1)
    ASCENDING = (1, -1)
    HORIZONTAL = (1, 0)
    DESCENDING = (1, 1)


class Row(NamedTuple):
    """Inclusive endpoints of a contiguous same-stone line."""

    start: Point
    end: Point

    def length(self):
        return max(abs(self.end.x - self.start.x), abs(self.end.y - self.start.y)) + 1

    def points(self):
        dx = (self.end.x > self.start.x) - (self.end.x < self.start.x)
        dy = (self.end.y > self.start.y) - (self.end.y < self.start.y)
        return [Point(self.start.x + dx * i, self.start.y + dy * i) for i in range(self.length())]


class Board:
    def __init__(self, size=BOARD_SIZE):
        # Store cells row-major as EMPTY / BLACK / WHITE
        self.size = size
        self.cells = [[EMPTY] * size for _ in range(size)]

    def in_bounds(self, x, y):
        return 0 <= x < self.size and 0 <= y < self.size

    def contains(self, p: Point) -> bool:
        return self.in_bounds(p.x, p.y)

    def occupancy(self, p: Point) -> int:
        if not self.contains(p):
            raise OutOfBoard(f"point {tuple(p)} out of board")
        return self.cells[p.y][p.x]

    def place(self, p: Point, stone: int):
        """Set a cell; occupancy is the caller's concern."""
        if not self.contains(p):
            raise OutOfBoard(f"point {tuple(p)} out of board")
        self.cells[p.y][p.x] = stone

    def clear(self, p: Point):
        self.place(p, EMPTY)

    def scan_line(self, p: Point, axis: Axis) -> Tuple[int, Row]:
        """Return the length and endpoints of the same-stone run through p along axis."""
        stone = self.occupancy(p)
        length = 1

        start = p
        nxt = start.adjacent(axis, False)
        while self.contains(nxt) and self.cells[nxt.y][nxt.x] == stone:
            length += 1
            start = nxt
            nxt = start.adjacent(axis, False)

        end = p
        nxt = end.adjacent(axis, True)
        while self.contains(nxt) and self.cells[nxt.y][nxt.x] == stone:
            length += 1
            end = nxt
            nxt = end.adjacent(axis, True)

        return length, Row(start, end)

    def find_winning_row(self, p: Point) -> Optional[Row]:
        """First row of 5+ through p, checking axes in declaration order."""
        if self.occupancy(p) == EMPTY:
            return None
        for axis in Axis:
            length, row = self.scan_line(p, axis)
            if length >= 5:
                return row
        return None
