"""Human-readable strings for cells, actions and positions.

Cells use chess-like coordinates: columns ``a``-``k`` from left to right and
ranks ``1``-``11`` from the bottom row up, so Red's home corner is ``a1`` and
Blue's is ``k11``.
"""

from __future__ import annotations

from typing import List

from .encoding import decode_action
from .rules import CHANCE_OUTCOME_VALUES, NUM_NON_DOUBLE_OUTCOMES, is_capture
from .state import (
    BOARD_SIZE,
    CHANCE_PLAYER_ID,
    OFF_BOARD,
    TERMINAL_PLAYER_ID,
    Cell,
    CheckerMove,
    Side,
)

PLAYER_SYMBOLS = {
    int(Side.RED): "x",
    int(Side.BLUE): "o",
    CHANCE_PLAYER_ID: "*",
    TERMINAL_PLAYER_ID: "T",
}


def cell_to_string(cell: Cell) -> str:
    if cell == OFF_BOARD:
        return "off"
    return f"{chr(ord('a') + cell.col)}{BOARD_SIZE - cell.row}"


def move_to_string(move: CheckerMove, hit: bool = False) -> str:
    return f"{cell_to_string(move.from_cell)}/{cell_to_string(move.to_cell)}{'*' if hit else ''}"


def player_to_string(player: int) -> str:
    return PLAYER_SYMBOLS[player]


def _roll_to_string(outcome: int) -> str:
    first, second = CHANCE_OUTCOME_VALUES[outcome]
    return f"{first}{second}"


def action_to_string(state, player: int, action: int) -> str:
    """Describe ``action`` as taken by ``player`` from ``state``.

    Hits are marked with ``*`` against the position before the action.
    """
    if player == CHANCE_PLAYER_ID:
        if state.turns >= 0:
            return f"chance outcome {action} (roll: {_roll_to_string(action)})"
        starter = "x starts" if action < NUM_NON_DOUBLE_OUTCOMES else "o starts"
        return f"chance outcome {action} {starter}, (roll: {_roll_to_string(action % NUM_NON_DOUBLE_OUTCOMES)})"

    side = Side(player)
    moves = [move for move in decode_action(action) if not move.is_pass]
    if not moves:
        return "Pass"
    parts = [move_to_string(move, is_capture(state.board, side, move)) for move in moves]
    return " ".join(parts)


def state_to_string(state) -> str:
    """ASCII board showing the top piece of each cell.

    Upper-case letters are Red, lower-case Blue; ``P``/``A``/``K`` stand for
    Pawn, Archer and King.
    """
    lines: List[str] = []
    for row in range(BOARD_SIZE):
        symbols = []
        for col in range(BOARD_SIZE):
            top = state.board.top(Cell(row, col))
            symbols.append(top.symbol if top is not None else ".")
        lines.append(f"{BOARD_SIZE - row:>2} {''.join(symbols)}")
    lines.append("   " + "".join(chr(ord("a") + col) for col in range(BOARD_SIZE)))

    dice = "".join(
        f"{state.dice.value(i)}u" if state.dice.is_used(i) else str(state.dice.value(i))
        for i in range(len(state.dice))
    )
    lines.append(f"Turn: {player_to_string(state.current_player())}")
    lines.append(f"Dice: {dice}")
    lines.append(f"Scores, X: {state.score(Side.RED)}, O: {state.score(Side.BLUE)}")
    return "\n".join(lines) + "\n"
