"""Gomoku_Review package exports."""

from .Board import BLACK, BOARD_SIZE, EMPTY, WHITE, Axis, Board, OutOfBoard, Point, Row, opposite
from .GameLedger import GameLedger, Move, Win
from .ReviewSession import ReviewSession

# Subpackages for wire formats and helpers
from . import codec, utils

__all__ = [
    "Axis",
    "BLACK",
    "BOARD_SIZE",
    "Board",
    "EMPTY",
    "GameLedger",
    "Move",
    "OutOfBoard",
    "Point",
    "ReviewSession",
    "Row",
    "WHITE",
    "Win",
    "codec",
    "opposite",
    "utils",
]
