from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterator, List, Sequence, Set, Tuple

from .encoding import encode_moves
from .errors import EmptyCellError, InternalInconsistencyError, NoSuchDieError
from .state import (
    BOARD_SIZE,
    OFF_BOARD,
    PASS_MOVE,
    Board,
    Cell,
    CheckerMove,
    DiceState,
    Piece,
    PieceKind,
    Side,
)

NUM_CHECKERS_PER_PLAYER = 15
NUM_NON_DOUBLE_OUTCOMES = 15
NUM_CHANCE_OUTCOMES = 21
NUM_OPENING_OUTCOMES = 2 * NUM_NON_DOUBLE_OUTCOMES
GOAL_ZONE_SIZE = 3
MAX_SEQUENCE_LENGTH = 2

CHANCE_OUTCOME_VALUES: Tuple[Tuple[int, int], ...] = (
    (1, 2), (1, 3), (1, 4), (1, 5), (1, 6), (2, 3), (2, 4),
    (2, 5), (2, 6), (3, 4), (3, 5), (3, 6), (4, 5), (4, 6),
    (5, 6), (1, 1), (2, 2), (3, 3), (4, 4), (5, 5), (6, 6),
)

CHANCE_OUTCOMES: Tuple[Tuple[int, float], ...] = tuple(
    (outcome, 1.0 / 18 if outcome < NUM_NON_DOUBLE_OUTCOMES else 1.0 / 36)
    for outcome in range(NUM_CHANCE_OUTCOMES)
)

OPENING_OUTCOMES: Tuple[Tuple[int, float], ...] = tuple(
    (outcome, 1.0 / NUM_OPENING_OUTCOMES) for outcome in range(NUM_OPENING_OUTCOMES)
)

HOME_CORNERS: Dict[Side, Cell] = {
    Side.RED: Cell(BOARD_SIZE - 1, 0),
    Side.BLUE: Cell(0, BOARD_SIZE - 1),
}

# Unit steps away from the home corner, towards the opponent's corner.
FORWARD_DIRECTIONS: Dict[Side, Tuple[Tuple[int, int], ...]] = {
    Side.RED: ((-1, 0), (0, 1), (-1, 1)),
    Side.BLUE: ((1, 0), (0, -1), (1, -1)),
}

MoveSequence = Tuple[CheckerMove, ...]


def initial_board() -> Board:
    """Each side gets ten Pawns on the corner triangle, four Archers on the
    2x2 block at the corner and the King on the corner itself."""
    board = Board()
    for side in Side:
        corner = HOME_CORNERS[side]
        dr, dc = FORWARD_DIRECTIONS[side][2]
        for i in range(4):
            for j in range(4 - i):
                board.push(Cell(corner.row + dr * i, corner.col + dc * j), Piece(PieceKind.PAWN, side))
        for i in range(2):
            for j in range(2):
                board.push(Cell(corner.row + dr * i, corner.col + dc * j), Piece(PieceKind.ARCHER, side))
        board.push(corner, Piece(PieceKind.KING, side))
    return board


def in_goal_zone(side: Side, cell: Cell) -> bool:
    goal = HOME_CORNERS[side.opponent]
    return abs(cell.row - goal.row) < GOAL_ZONE_SIZE and abs(cell.col - goal.col) < GOAL_ZONE_SIZE


def all_in_goal_zone(board: Board, side: Side) -> bool:
    """Whether every free piece of ``side`` is home.

    Pieces pinned under an opponent are ignored: only the cells ``side``
    controls are checked.
    """
    return all(in_goal_zone(side, cell) for cell in board.controlled_cells(side))


def exit_distance(side: Side, cell: Cell) -> int:
    """Fewest forward steps that take a piece on ``cell`` off the board."""
    if side == Side.RED:
        return min(cell.row + 1, BOARD_SIZE - cell.col)
    return min(BOARD_SIZE - cell.row, cell.col + 1)


def move_distance(move: CheckerMove) -> int:
    return max(
        abs(move.to_cell.row - move.from_cell.row),
        abs(move.to_cell.col - move.from_cell.col),
    )


def playable_dice(side: Side, move: CheckerMove, faces: Sequence[int]) -> Set[int]:
    if move.is_pass:
        return set()
    if move.is_bear_off:
        needed = exit_distance(side, move.from_cell)
        return {face for face in faces if face >= needed}
    distance = move_distance(move)
    return {distance} if distance in faces else set()


def die_for_move(side: Side, move: CheckerMove, dice: DiceState) -> int:
    """The die ``move`` consumes: its length, or for a bear-off the smallest
    unused die that reaches the edge."""
    candidates = playable_dice(side, move, dice.unused_values())
    if not candidates:
        raise NoSuchDieError(f"No unused die can play {move} with dice {dice.values}.")
    return min(candidates)


def is_capture(board: Board, side: Side, move: CheckerMove) -> bool:
    if move.is_pass or move.is_bear_off:
        return False
    return board.opposing_count(move.to_cell, side) == 1


def legal_checker_moves(board: Board, dice: DiceState, side: Side) -> Set[CheckerMove]:
    moves: Set[CheckerMove] = set()
    faces = set(dice.unused_values())
    if not faces:
        return moves
    bear_off_allowed = all_in_goal_zone(board, side)
    for cell in board.controlled_cells(side):
        for pips in faces:
            for dr, dc in FORWARD_DIRECTIONS[side]:
                target = cell.step(dr, dc, pips)
                if not target.on_board:
                    if bear_off_allowed:
                        moves.add(CheckerMove(cell, OFF_BOARD))
                elif board.opposing_count(target, side) <= 1:
                    moves.add(CheckerMove(cell, target))
    return moves


def apply_checker_move(board: Board, dice: DiceState, side: Side, move: CheckerMove) -> int:
    """Move the top piece of ``move.from_cell`` and mark its die used.

    Returns the die value consumed (0 for a pass), which
    :func:`undo_checker_move` needs to restore the dice exactly.
    """
    if move.is_pass:
        return 0
    piece = board.top(move.from_cell)
    if piece is None:
        raise EmptyCellError(f"No piece to move at {move.from_cell}.")
    if piece.side != side:
        raise InternalInconsistencyError(f"Top piece at {move.from_cell} does not belong to {side.name}.")
    die = die_for_move(side, move, dice)
    dice.mark_used(die)
    board.pop_top(move.from_cell)
    if move.is_bear_off:
        board.retire(side, piece)
    else:
        board.push(move.to_cell, piece)
    return die


def undo_checker_move(board: Board, dice: DiceState, side: Side, move: CheckerMove, die: int) -> None:
    if move.is_pass:
        return
    if move.is_bear_off:
        piece = board.unretire(side)
    else:
        piece = board.pop_top(move.to_cell)
    if piece.side != side:
        raise InternalInconsistencyError(f"Undo of {move} found a {piece.side.name} piece.")
    board.push(move.from_cell, piece)
    dice.unmark(die)


@contextmanager
def applied_move(board: Board, dice: DiceState, side: Side, move: CheckerMove) -> Iterator[int]:
    die = apply_checker_move(board, dice, side, move)
    try:
        yield die
    finally:
        undo_checker_move(board, dice, side, move, die)


def enumerate_move_sequences(
    board: Board,
    dice: DiceState,
    side: Side,
    max_length: int = MAX_SEQUENCE_LENGTH,
) -> Tuple[int, Set[MoveSequence]]:
    """Collect every maximal sequence of single moves, up to ``max_length``.

    The board and dice are mutated during the search and are back to their
    original contents when this returns, whether or not it raises.
    """
    sequences: Set[MoveSequence] = set()
    longest = _extend_sequences(board, dice, side, (), sequences, max_length)
    return longest, sequences


def _extend_sequences(
    board: Board,
    dice: DiceState,
    side: Side,
    prefix: MoveSequence,
    sequences: Set[MoveSequence],
    max_length: int,
) -> int:
    if len(prefix) == max_length:
        sequences.add(prefix)
        return len(prefix)

    candidates = legal_checker_moves(board, dice, side)
    if not candidates:
        sequences.add(prefix)
        return len(prefix)

    longest = 0
    for move in sorted(candidates):
        with applied_move(board, dice, side, move):
            longest = max(longest, _extend_sequences(board, dice, side, prefix + (move,), sequences, max_length))
    return longest


def _touched_cells(move: CheckerMove) -> Set[Cell]:
    return {cell for cell in (move.from_cell, move.to_cell) if cell != OFF_BOARD}


def _collapse_transpositions(pairs: Set[MoveSequence]) -> Set[MoveSequence]:
    # (a, b) and (b, a) over disjoint cells end in the same position.
    kept = set(pairs)
    for first, second in pairs:
        if first == second or _touched_cells(first) & _touched_cells(second):
            continue
        forward, backward = (first, second), (second, first)
        if forward in kept and backward in kept:
            kept.discard(max(forward, backward, key=encode_moves))
    return kept


def legal_move_sequences(board: Board, dice: DiceState, side: Side) -> List[Tuple[CheckerMove, CheckerMove]]:
    """Apply the dice-usage rule and return padded two-move sequences.

    Both dice must be played when possible; otherwise only single moves that
    can be played with the largest playable die survive, and a side with no
    move at all gets the pass-pass sequence.
    """
    faces = dice.unused_values()
    longest, sequences = enumerate_move_sequences(board, dice, side)

    if longest == 0:
        return [(PASS_MOVE, PASS_MOVE)]

    if longest == 1:
        singles = [seq[0] for seq in sequences if len(seq) == 1]
        best_die = max(max(playable_dice(side, move, faces)) for move in singles)
        return [(move, PASS_MOVE) for move in sorted(set(singles)) if best_die in playable_dice(side, move, faces)]

    pairs = {seq for seq in sequences if len(seq) == 2}
    return sorted(_collapse_transpositions(pairs), key=encode_moves)


def legal_move_actions(board: Board, dice: DiceState, side: Side) -> List[int]:
    return sorted(encode_moves(seq) for seq in legal_move_sequences(board, dice, side))
