from __future__ import annotations

from typing import List, Sequence

from .errors import OutOfRangeError
from .state import BOARD_SIZE, NUM_CELLS, OFF_BOARD, Cell, CheckerMove

OFF_BOARD_DIGIT = NUM_CELLS
NUM_DIGITS = NUM_CELLS + 1
MOVES_PER_ACTION = 2
NUM_DISTINCT_ACTIONS = NUM_DIGITS ** (2 * MOVES_PER_ACTION)


def cell_to_digit(cell: Cell) -> int:
    if cell == OFF_BOARD:
        return OFF_BOARD_DIGIT
    if not cell.on_board:
        raise OutOfRangeError(f"Off-board cell {cell} must be normalised to {OFF_BOARD}.")
    return cell.row * BOARD_SIZE + cell.col


def digit_to_cell(digit: int) -> Cell:
    if not 0 <= digit < NUM_DIGITS:
        raise OutOfRangeError(f"Cell digit {digit} out of range.")
    if digit == OFF_BOARD_DIGIT:
        return OFF_BOARD
    return Cell(digit // BOARD_SIZE, digit % BOARD_SIZE)


def encode_moves(moves: Sequence[CheckerMove]) -> int:
    """Pack two checker moves, in play order, into one action id.

    The first move supplies the two least significant digits (from, then to),
    the second move the two most significant ones.
    """
    if len(moves) != MOVES_PER_ACTION:
        raise OutOfRangeError(f"Expected {MOVES_PER_ACTION} checker moves, got {len(moves)}.")
    action = 0
    for move in reversed(moves):
        action = action * NUM_DIGITS + cell_to_digit(move.to_cell)
        action = action * NUM_DIGITS + cell_to_digit(move.from_cell)
    if not 0 <= action < NUM_DISTINCT_ACTIONS:
        raise OutOfRangeError(f"Packed action {action} exceeds the action space.")
    return action


def decode_action(action: int) -> List[CheckerMove]:
    if not 0 <= action < NUM_DISTINCT_ACTIONS:
        raise OutOfRangeError(f"Action {action} out of range.")
    moves: List[CheckerMove] = []
    for _ in range(MOVES_PER_ACTION):
        from_digit = action % NUM_DIGITS
        action //= NUM_DIGITS
        to_digit = action % NUM_DIGITS
        action //= NUM_DIGITS
        moves.append(CheckerMove(digit_to_cell(from_digit), digit_to_cell(to_digit)))
    return moves
