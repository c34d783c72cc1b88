from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import torch

from crowny.core import (
    BOARD_SIZE,
    NUM_CELLS,
    NUM_CHECKERS_PER_PLAYER,
    CrownyState,
    OutOfRangeError,
    PieceKind,
    Side,
)

CELL_FEATURES = 4  # exactly 1, exactly 2, exactly 3, count beyond 3
STATE_ENCODING_SIZE = CELL_FEATURES * NUM_CELLS * 2 + 2 * 2 + 2
BOARD_CHANNELS = 8  # counts per (side, kind) + top-owner per side
AUX_VECTOR_SIZE = 8  # scores (2) + to-move (2) + dice faces (2) + used flags (2)

KIND_ORDER = (PieceKind.PAWN, PieceKind.ARCHER, PieceKind.KING)


def observation_tensor_shape() -> Tuple[int]:
    return (STATE_ENCODING_SIZE,)


def _perspective(state: CrownyState, player: Optional[int]) -> Tuple[Side, Side]:
    if player is None:
        current = state.current_player()
        player = current if current in (Side.RED, Side.BLUE) else Side.RED
    if player not in (Side.RED, Side.BLUE):
        raise OutOfRangeError(f"Observation requested for player {player}.")
    me = Side(player)
    return me, me.opponent


def observation_tensor(state: CrownyState, player: Optional[int] = None) -> np.ndarray:
    """Flat encoding seen from ``player``.

    Per cell and per side (``player`` first) four values: one-hot for one,
    two or three pieces and the overflow beyond three. Then score and
    to-move flag for each side, then the two raw dice entries (used dice
    keep their +6 offset, absent dice are 0).
    """
    me, other = _perspective(state, player)
    values = np.zeros((STATE_ENCODING_SIZE,), dtype=np.float32)
    offset = 0
    for side in (me, other):
        for index, stack in enumerate(state.board.cells):
            count = sum(1 for piece in stack if piece.side == side)
            base = offset + index * CELL_FEATURES
            if 1 <= count <= 3:
                values[base + count - 1] = 1.0
            elif count > 3:
                values[base + 3] = float(count - 3)
        offset += NUM_CELLS * CELL_FEATURES

    current = state.current_player()
    for side in (me, other):
        values[offset] = float(state.score(side))
        values[offset + 1] = 1.0 if current == side else 0.0
        offset += 2

    for i, raw in enumerate(state.dice.values[:2]):
        values[offset + i] = float(raw)
    return values


def build_board_tensor(state: CrownyState, player: Optional[int] = None) -> np.ndarray:
    """Return board tensor with shape (8, 11, 11) channel-first."""
    me, _ = _perspective(state, player)
    tensor = np.zeros((BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE), dtype=np.float32)
    for index, stack in enumerate(state.board.cells):
        if not stack:
            continue
        row, col = divmod(index, BOARD_SIZE)
        for piece in stack:
            side_offset = 0 if piece.side == me else len(KIND_ORDER)
            tensor[side_offset + KIND_ORDER.index(piece.kind), row, col] += 1.0
        owner_channel = 6 if stack[-1].side == me else 7
        tensor[owner_channel, row, col] = 1.0
    return tensor


def build_aux_vector(state: CrownyState, player: Optional[int] = None) -> np.ndarray:
    me, other = _perspective(state, player)
    aux = np.zeros((AUX_VECTOR_SIZE,), dtype=np.float32)
    aux[0] = state.score(me) / NUM_CHECKERS_PER_PLAYER
    aux[1] = state.score(other) / NUM_CHECKERS_PER_PLAYER
    current = state.current_player()
    aux[2] = 1.0 if current == me else 0.0
    aux[3] = 1.0 if current == other else 0.0
    for i in range(len(state.dice)):
        aux[4 + i] = state.die(i) / 6.0
        aux[6 + i] = 1.0 if state.dice.is_used(i) else 0.0
    return aux


def state_to_numpy(state: CrownyState, player: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    return build_board_tensor(state, player), build_aux_vector(state, player)


def state_to_torch(
    state: CrownyState,
    player: Optional[int] = None,
    *,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.float32,
) -> Tuple[torch.Tensor, torch.Tensor]:
    board_np, aux_np = state_to_numpy(state, player)
    board = torch.from_numpy(board_np).to(device=device, dtype=dtype)
    aux = torch.from_numpy(aux_np).to(device=device, dtype=dtype)
    return board, aux
