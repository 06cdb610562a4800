"""GameLedger history: placement, undo/redo/jump, branching, and win visibility."""

import pytest

from Gomoku_Review.Board import BLACK, EMPTY, WHITE, OutOfBoard, Point, Row
from Gomoku_Review.GameLedger import GameLedger, Move
from Gomoku_Review.codec import Format


def play(ledger, moves):
    for x, y, stone in moves:
        assert ledger.place(Point(x, y), stone)
    return ledger


def board_matches_past(ledger):
    expected = {m.pos: m.stone for m in ledger.past_moves()}
    for y in range(ledger.board.size):
        for x in range(ledger.board.size):
            if ledger.stone_at(Point(x, y)) != expected.get(Point(x, y), EMPTY):
                return False
    return True


def test_new_ledger_is_empty():
    g = GameLedger()
    assert g.move_index() == 0
    assert g.total_moves() == 0
    assert g.past_moves() == ()
    assert g.first_visible_win() is None
    assert g.infer_turn() == BLACK


def test_place_appends_and_infers_turn():
    g = play(GameLedger(), [(7, 7, BLACK), (7, 8, WHITE)])
    assert g.move_index() == 2
    assert g.past_moves() == (Move(Point(7, 7), BLACK), Move(Point(7, 8), WHITE))
    assert g.infer_turn() == BLACK
    assert g.stone_at(Point(7, 8)) == WHITE


def test_infer_turn_follows_last_past_move():
    g = play(GameLedger(), [(0, 0, WHITE), (1, 1, WHITE)])
    assert g.infer_turn() == BLACK
    g.undo()
    g.undo()
    assert g.infer_turn() == BLACK


def test_place_on_occupied_cell_changes_nothing():
    g = play(GameLedger(), [(7, 7, BLACK), (8, 8, WHITE)])
    g.undo()
    before = (list(g.moves), g.move_index())
    assert g.place(Point(7, 7), WHITE) is False
    assert (list(g.moves), g.move_index()) == before
    assert g.stone_at(Point(7, 7)) == BLACK
    assert g.total_moves() == 2


def test_place_out_of_board_raises_without_mutation():
    g = play(GameLedger(), [(1, 1, BLACK), (2, 2, WHITE)])
    g.undo()
    with pytest.raises(OutOfBoard):
        g.place(Point(15, 3), BLACK)
    assert g.total_moves() == 2
    assert g.move_index() == 1


def test_undo_redo_at_ends_are_noops():
    g = GameLedger()
    assert g.undo() is False
    assert g.redo() is False
    play(g, [(3, 3, BLACK)])
    assert g.redo() is False
    assert g.undo() is True
    assert g.stone_at(Point(3, 3)) == EMPTY
    assert g.undo() is False
    assert g.redo() is True
    assert g.stone_at(Point(3, 3)) == BLACK


def test_jump_moves_cursor_both_ways():
    g = play(GameLedger(), [(i, 0, BLACK if i % 2 == 0 else WHITE) for i in range(6)])
    assert g.jump(2) is True
    assert g.move_index() == 2
    assert board_matches_past(g)
    assert g.future_moves() == tuple(g.moves[2:])
    assert g.jump(2) is False
    assert g.jump(6) is True
    assert board_matches_past(g)
    assert g.jump(0) is True
    assert board_matches_past(g)
    assert g.total_moves() == 6


def test_jump_out_of_range_raises_without_mutation():
    g = play(GameLedger(), [(0, 0, BLACK), (1, 0, WHITE)])
    g.jump(1)
    with pytest.raises(IndexError):
        g.jump(3)
    assert g.move_index() == 1
    assert board_matches_past(g)


def test_branching_discards_future_moves():
    g = play(GameLedger(), [(0, 0, BLACK), (1, 0, WHITE), (2, 0, BLACK), (3, 0, WHITE), (4, 0, BLACK)])
    g.jump(2)
    assert g.place(Point(9, 9), BLACK)
    assert g.total_moves() == 3
    assert [m.pos for m in g.moves] == [Point(0, 0), Point(1, 0), Point(9, 9)]
    assert g.redo() is False
    assert board_matches_past(g)


def test_win_appears_exactly_on_fifth_stone():
    g = play(GameLedger(), [(7, 7, BLACK), (7, 8, WHITE), (8, 7, BLACK), (8, 8, WHITE), (6, 7, BLACK)])
    assert g.board.find_winning_row(Point(6, 7)) is None
    assert g.first_visible_win() is None
    play(g, [(6, 8, WHITE), (5, 7, BLACK), (0, 0, WHITE)])
    assert g.first_visible_win() is None
    play(g, [(9, 7, BLACK)])
    win = g.first_visible_win()
    assert win is not None
    assert win.index == 9
    assert win.row == Row(Point(5, 7), Point(9, 7))


def test_win_visibility_follows_cursor_without_rescan(monkeypatch):
    g = play(GameLedger(), [(x, 0, BLACK) for x in range(5)])
    assert g.first_visible_win().index == 5

    def fail(*_):
        raise AssertionError("win should not be rescanned")

    monkeypatch.setattr(g.board, "find_winning_row", fail)
    g.undo()
    assert g.first_visible_win() is None
    g.jump(0)
    assert g.first_visible_win() is None
    g.jump(5)
    assert g.first_visible_win().index == 5
    g.jump(4)
    g.redo()
    assert g.first_visible_win().index == 5


def test_earlier_win_is_kept_after_later_moves():
    g = play(GameLedger(), [(x, 0, BLACK) for x in range(5)])
    play(g, [(0, 5, WHITE), (14, 14, BLACK)])
    win = g.first_visible_win()
    assert win.index == 5
    assert win.row == Row(Point(0, 0), Point(4, 0))


def test_branch_before_win_recomputes_it():
    g = play(GameLedger(), [(x, 0, BLACK) for x in range(5)])
    g.jump(4)
    assert g.place(Point(4, 1), BLACK)
    assert g.first_visible_win() is None
    assert g.win is None
    assert g.place(Point(4, 0), BLACK)
    assert g.first_visible_win().index == 6


def test_ledgers_compare_by_moves_and_cursor():
    a = play(GameLedger(), [(1, 1, BLACK), (2, 2, WHITE)])
    b = play(GameLedger(), [(1, 1, BLACK), (2, 2, WHITE)])
    assert a == b
    b.undo()
    assert a != b


@pytest.mark.parametrize("stone", [EMPTY, 3, -1])
def test_place_rejects_non_player_stone_without_mutation(stone):
    g = play(GameLedger(), [(1, 1, BLACK), (2, 2, WHITE)])
    g.undo()
    before = (list(g.moves), g.move_index(), g.win)
    with pytest.raises(ValueError):
        g.place(Point(3, 3), stone)
    assert (list(g.moves), g.move_index(), g.win) == before
    assert g.stone_at(Point(3, 3)) == EMPTY
    assert g.total_moves() == 2
    assert GameLedger.deserialize(g.serialize(Format.COORDINATE), Format.COORDINATE).past_moves() == g.past_moves()
