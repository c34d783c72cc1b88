from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Tuple

from .errors import (
    EmptyCellError,
    InternalInconsistencyError,
    NoSuchDieError,
    OutOfRangeError,
)

BOARD_SIZE = 11
NUM_CELLS = BOARD_SIZE * BOARD_SIZE
NUM_DICE_FACES = 6
USED_DIE_OFFSET = 6

CHANCE_PLAYER_ID = -1
TERMINAL_PLAYER_ID = -4


class Side(IntEnum):
    RED = 0
    BLUE = 1

    @property
    def opponent(self) -> "Side":
        return Side(1 - int(self))

    @property
    def symbol(self) -> str:
        return "x" if self == Side.RED else "o"


class PieceKind(Enum):
    PAWN = "pawn"
    ARCHER = "archer"
    KING = "king"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    side: Side

    @property
    def symbol(self) -> str:
        letter = self.kind.value[0]
        return letter.upper() if self.side == Side.RED else letter


@dataclass(frozen=True, order=True)
class Cell:
    row: int
    col: int

    @property
    def on_board(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    def step(self, dr: int, dc: int, distance: int) -> "Cell":
        return Cell(self.row + dr * distance, self.col + dc * distance)


# Every destination outside the grid collapses onto this sentinel.
OFF_BOARD = Cell(BOARD_SIZE, 0)


@dataclass(frozen=True, order=True)
class CheckerMove:
    from_cell: Cell
    to_cell: Cell

    @property
    def is_pass(self) -> bool:
        return self.from_cell == OFF_BOARD and self.to_cell == OFF_BOARD

    @property
    def is_bear_off(self) -> bool:
        return self.to_cell == OFF_BOARD and self.from_cell != OFF_BOARD


PASS_MOVE = CheckerMove(OFF_BOARD, OFF_BOARD)


def cell_index(cell: Cell) -> int:
    if not cell.on_board:
        raise OutOfRangeError(f"Cell {cell} is not on the board.")
    return cell.row * BOARD_SIZE + cell.col


def all_cells() -> Iterator[Cell]:
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield Cell(row, col)


@dataclass
class Board:
    """Piece stacks for the 121 cells plus the pieces each side has borne off.

    The last element of a stack is its top: the piece that moves next and the
    one that decides who controls the cell.
    """

    cells: List[List[Piece]] = field(default_factory=lambda: [[] for _ in range(NUM_CELLS)])
    borne_off: Tuple[List[Piece], List[Piece]] = field(default_factory=lambda: ([], []))

    def copy(self) -> "Board":
        return Board(
            cells=[list(stack) for stack in self.cells],
            borne_off=(list(self.borne_off[0]), list(self.borne_off[1])),
        )

    def pieces_at(self, cell: Cell) -> Tuple[Piece, ...]:
        return tuple(self.cells[cell_index(cell)])

    def top(self, cell: Cell) -> Optional[Piece]:
        stack = self.cells[cell_index(cell)]
        return stack[-1] if stack else None

    def push(self, cell: Cell, piece: Piece) -> None:
        self.cells[cell_index(cell)].append(piece)

    def pop_top(self, cell: Cell) -> Piece:
        stack = self.cells[cell_index(cell)]
        if not stack:
            raise EmptyCellError(f"Cannot pop from empty cell {cell}.")
        return stack.pop()

    def retire(self, side: Side, piece: Piece) -> None:
        self.borne_off[int(side)].append(piece)

    def unretire(self, side: Side) -> Piece:
        retired = self.borne_off[int(side)]
        if not retired:
            raise EmptyCellError(f"{side.name} has no borne-off piece to restore.")
        return retired.pop()

    def score(self, side: Side) -> int:
        return len(self.borne_off[int(side)])

    def count_on_board(self, side: Side) -> int:
        return sum(1 for stack in self.cells for piece in stack if piece.side == side)

    def opposing_count(self, cell: Cell, side: Side) -> int:
        return sum(1 for piece in self.cells[cell_index(cell)] if piece.side != side)

    def controlled_cells(self, side: Side) -> Iterator[Cell]:
        """Cells whose top piece belongs to ``side``, in row-major order."""
        for index, stack in enumerate(self.cells):
            if stack and stack[-1].side == side:
                yield Cell(index // BOARD_SIZE, index % BOARD_SIZE)

    def occupied_cells(self, side: Side) -> Iterator[Cell]:
        for index, stack in enumerate(self.cells):
            if any(piece.side == side for piece in stack):
                yield Cell(index // BOARD_SIZE, index % BOARD_SIZE)


@dataclass
class DiceState:
    """Zero or two dice. A used die keeps its face, shifted up by six."""

    values: List[int] = field(default_factory=list)

    def copy(self) -> "DiceState":
        return DiceState(list(self.values))

    def __len__(self) -> int:
        return len(self.values)

    @property
    def is_empty(self) -> bool:
        return not self.values

    def roll(self, first: int, second: int) -> None:
        if self.values:
            raise InternalInconsistencyError("Dice rolled while previous dice are still on the table.")
        for face in (first, second):
            if not 1 <= face <= NUM_DICE_FACES:
                raise OutOfRangeError(f"Die face {face} out of range.")
        self.values = [first, second]

    def clear(self) -> None:
        self.values = []

    def value(self, index: int) -> int:
        if not 0 <= index < len(self.values):
            raise OutOfRangeError(f"Die index {index} out of range.")
        raw = self.values[index]
        if 1 <= raw <= NUM_DICE_FACES:
            return raw
        if USED_DIE_OFFSET < raw <= NUM_DICE_FACES + USED_DIE_OFFSET:
            return raw - USED_DIE_OFFSET
        raise InternalInconsistencyError(f"Bad die value: {raw}")

    def is_used(self, index: int) -> bool:
        self.value(index)
        return self.values[index] > NUM_DICE_FACES

    def faces(self) -> Tuple[int, ...]:
        return tuple(self.value(i) for i in range(len(self.values)))

    def unused_values(self) -> List[int]:
        return [raw for raw in self.values if 1 <= raw <= NUM_DICE_FACES]

    @property
    def is_double(self) -> bool:
        return len(self.values) == 2 and self.value(0) == self.value(1)

    def mark_used(self, value: int) -> None:
        if not 1 <= value <= NUM_DICE_FACES:
            raise NoSuchDieError(f"Die face {value} out of range.")
        for i, raw in enumerate(self.values):
            if raw == value:
                self.values[i] = raw + USED_DIE_OFFSET
                return
        raise NoSuchDieError(f"No unused die showing {value} in {self.values}.")

    def unmark(self, value: int) -> None:
        for i, raw in enumerate(self.values):
            if raw == value + USED_DIE_OFFSET:
                self.values[i] = value
                return
        raise NoSuchDieError(f"No used die showing {value} in {self.values}.")

    def unmark_all(self) -> None:
        self.values = [self.value(i) for i in range(len(self.values))]


@dataclass
class TurnState:
    cur_player: int = CHANCE_PLAYER_ID
    prev_player: int = CHANCE_PLAYER_ID
    turns: int = -1
    side_turns: List[int] = field(default_factory=lambda: [0, 0])
    double_turn: bool = False

    def copy(self) -> "TurnState":
        return TurnState(
            cur_player=self.cur_player,
            prev_player=self.prev_player,
            turns=self.turns,
            side_turns=list(self.side_turns),
            double_turn=self.double_turn,
        )
