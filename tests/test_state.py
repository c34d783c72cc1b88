import pytest

from crowny.core import (
    OFF_BOARD,
    PASS_MOVE,
    Board,
    Cell,
    CheckerMove,
    DiceState,
    EmptyCellError,
    InternalInconsistencyError,
    NoSuchDieError,
    OutOfRangeError,
    Piece,
    PieceKind,
    Side,
)
from crowny.core.state import cell_index


def test_dice_roll_and_mark_used() -> None:
    dice = DiceState()
    dice.roll(2, 5)

    dice.mark_used(5)

    assert dice.values == [2, 11]
    assert dice.value(1) == 5
    assert dice.is_used(1)
    assert not dice.is_used(0)
    assert dice.unused_values() == [2]
    assert dice.faces() == (2, 5)


def test_dice_double_marks_one_die_at_a_time() -> None:
    dice = DiceState([4, 4])
    dice.mark_used(4)
    assert dice.values == [10, 4]
    dice.mark_used(4)
    assert dice.values == [10, 10]
    dice.unmark(4)
    assert dice.values == [4, 10]
    dice.unmark_all()
    assert dice.values == [4, 4]
    assert dice.is_double


def test_dice_errors() -> None:
    dice = DiceState([1, 2])
    with pytest.raises(InternalInconsistencyError):
        dice.roll(3, 4)
    with pytest.raises(NoSuchDieError):
        dice.mark_used(6)
    with pytest.raises(NoSuchDieError):
        dice.mark_used(0)
    with pytest.raises(NoSuchDieError):
        dice.unmark(1)
    with pytest.raises(OutOfRangeError):
        dice.value(2)
    with pytest.raises(OutOfRangeError):
        DiceState().roll(0, 7)
    with pytest.raises(InternalInconsistencyError):
        DiceState([13, 1]).value(0)


def test_board_stack_order_and_counts() -> None:
    board = Board()
    cell = Cell(5, 5)
    blue = Piece(PieceKind.PAWN, Side.BLUE)
    red = Piece(PieceKind.KING, Side.RED)
    board.push(cell, blue)
    board.push(cell, red)

    assert board.top(cell) == red
    assert board.pieces_at(cell) == (blue, red)
    assert board.opposing_count(cell, Side.RED) == 1
    assert list(board.controlled_cells(Side.RED)) == [cell]
    assert list(board.controlled_cells(Side.BLUE)) == []
    assert list(board.occupied_cells(Side.BLUE)) == [cell]
    assert board.count_on_board(Side.BLUE) == 1


def test_board_copy_is_independent() -> None:
    board = Board()
    board.push(Cell(0, 0), Piece(PieceKind.PAWN, Side.RED))
    clone = board.copy()
    clone.pop_top(Cell(0, 0))
    clone.retire(Side.RED, Piece(PieceKind.PAWN, Side.RED))

    assert board.top(Cell(0, 0)) is not None
    assert board.score(Side.RED) == 0
    assert clone.score(Side.RED) == 1


def test_board_errors() -> None:
    board = Board()
    with pytest.raises(EmptyCellError):
        board.pop_top(Cell(3, 3))
    with pytest.raises(EmptyCellError):
        board.unretire(Side.BLUE)
    with pytest.raises(OutOfRangeError):
        cell_index(Cell(-1, 4))
    with pytest.raises(OutOfRangeError):
        board.top(OFF_BOARD)


def test_move_flags() -> None:
    assert PASS_MOVE.is_pass
    assert not PASS_MOVE.is_bear_off
    assert CheckerMove(Cell(1, 9), OFF_BOARD).is_bear_off
    assert not CheckerMove(Cell(1, 9), Cell(0, 9)).is_bear_off


def test_piece_symbols() -> None:
    assert Piece(PieceKind.KING, Side.RED).symbol == "K"
    assert Piece(PieceKind.ARCHER, Side.BLUE).symbol == "a"
    assert Side.RED.opponent == Side.BLUE
