import pytest

from crowny.core import (
    NUM_DISTINCT_ACTIONS,
    OFF_BOARD,
    PASS_MOVE,
    Cell,
    CheckerMove,
    OutOfRangeError,
    decode_action,
    encode_moves,
)
from crowny.core.encoding import cell_to_digit, digit_to_cell


def test_action_space_size() -> None:
    assert NUM_DISTINCT_ACTIONS == 122 ** 4


def test_cell_digits() -> None:
    assert cell_to_digit(Cell(0, 0)) == 0
    assert cell_to_digit(Cell(10, 10)) == 120
    assert cell_to_digit(OFF_BOARD) == 121
    assert digit_to_cell(110) == Cell(10, 0)
    assert digit_to_cell(121) == OFF_BOARD
    with pytest.raises(OutOfRangeError):
        cell_to_digit(Cell(-1, 0))
    with pytest.raises(OutOfRangeError):
        digit_to_cell(122)


def test_first_move_fills_low_digits() -> None:
    first = CheckerMove(Cell(10, 0), Cell(9, 0))
    second = CheckerMove(Cell(9, 0), Cell(8, 0))

    action = encode_moves((first, second))

    assert action == 110 + 99 * 122 + 99 * 122 ** 2 + 88 * 122 ** 3
    assert decode_action(action) == [first, second]


def test_pass_pass_is_largest_action() -> None:
    action = encode_moves((PASS_MOVE, PASS_MOVE))
    assert action == NUM_DISTINCT_ACTIONS - 1
    assert decode_action(action) == [PASS_MOVE, PASS_MOVE]


def test_bear_off_then_pass() -> None:
    bear_off = CheckerMove(Cell(1, 9), OFF_BOARD)
    action = encode_moves((bear_off, PASS_MOVE))
    assert decode_action(action) == [bear_off, PASS_MOVE]


def test_encoding_errors() -> None:
    with pytest.raises(OutOfRangeError):
        encode_moves((PASS_MOVE,))
    with pytest.raises(OutOfRangeError):
        decode_action(-1)
    with pytest.raises(OutOfRangeError):
        decode_action(NUM_DISTINCT_ACTIONS)
