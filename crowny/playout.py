"""Uniformly random playouts, for smoke runs and property checks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from crowny.core import CrownyGame, CrownyState

logger = logging.getLogger(__name__)


@dataclass
class PlayoutResult:
    moves: int
    returns: List[float]
    terminal: bool
    scores: Tuple[int, int]
    history: List[Tuple[int, int]] = field(default_factory=list)


def random_playout(
    game: CrownyGame,
    rng: Optional[np.random.Generator] = None,
    max_moves: Optional[int] = None,
    *,
    state: Optional[CrownyState] = None,
) -> PlayoutResult:
    """Play chance and move nodes at random until the game ends.

    ``max_moves`` bounds the number of player decisions (chance nodes are not
    counted) and defaults to the game's length limit. The state is mutated in
    place when one is passed in.
    """
    rng = rng or np.random.default_rng()
    state = state if state is not None else game.new_initial_state()
    limit = game.max_game_length() if max_moves is None else max_moves
    history: List[Tuple[int, int]] = []
    moves = 0

    while not state.is_terminal() and moves < limit:
        player = state.current_player()
        if state.is_chance_node():
            outcomes = state.chance_outcomes()
            probs = np.array([p for _, p in outcomes], dtype=np.float64)
            action = outcomes[int(rng.choice(len(outcomes), p=probs / probs.sum()))][0]
        else:
            legal = state.legal_actions()
            action = legal[int(rng.integers(len(legal)))]
            moves += 1
        state.apply_action(action, check_legal=False)
        history.append((player, action))

    logger.debug("Playout stopped after %d moves, scores %s", moves, state.scores)
    return PlayoutResult(
        moves=moves,
        returns=state.returns(),
        terminal=state.is_terminal(),
        scores=state.scores,
        history=history,
    )
