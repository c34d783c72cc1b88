from __future__ import annotations

from typing import Dict, List, Optional

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from crowny.core import (
    BOARD_SIZE,
    NUM_DISTINCT_ACTIONS,
    CrownyGame,
    CrownyState,
    IllegalActionError,
    OutOfRangeError,
    state_to_string,
)
from crowny.features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    build_aux_vector,
    build_board_tensor,
)


class CrownyEnv(gym.Env):
    """Single-agent view of a Crowny game: the agent plays both sides.

    Dice rolls are sampled from ``self.np_random`` before control returns to
    the agent, so every observation is a decision point (or the end).
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        game: Optional[CrownyGame] = None,
        *,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.game = game or CrownyGame()
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, BOARD_SIZE, BOARD_SIZE)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0.0, high=np.inf, shape=board_shape, dtype=np.float32),
                "aux": spaces.Box(low=0.0, high=1.0, shape=(AUX_VECTOR_SIZE,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(NUM_DISTINCT_ACTIONS)

        self._state: CrownyState = self.game.new_initial_state()
        self._legal: List[int] = []
        self._steps = 0

    @property
    def state(self) -> CrownyState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = self.game.new_initial_state()
        self._steps = 0
        self._resolve_chance()
        return self._build_observation(), self._build_info()

    def step(self, action: int):
        action = int(action)
        if not 0 <= action < NUM_DISTINCT_ACTIONS:
            raise OutOfRangeError(f"Action index {action} out of bounds.")
        if self._state.is_terminal():
            raise IllegalActionError("Episode is over; call reset().")
        if self._enforce_legal and action not in self._legal:
            raise IllegalActionError("Illegal action provided and enforce_legal_actions=True.")

        mover = self._state.current_player()
        self._state.apply_action(action, check_legal=False)
        self._steps += 1
        self._resolve_chance()

        terminated = self._state.winner() is not None
        reward = float(self._state.returns()[mover]) if terminated else 0.0
        truncated = not terminated and (
            self._state.reached_length_limit() or self._steps >= self.game.max_game_length()
        )
        return self._build_observation(), reward, terminated, truncated, self._build_info()

    def legal_actions(self) -> List[int]:
        return list(self._legal)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return state_to_string(self._state)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _resolve_chance(self) -> None:
        while self._state.is_chance_node():
            outcomes = self._state.chance_outcomes()
            probs = np.array([p for _, p in outcomes], dtype=np.float64)
            index = self.np_random.choice(len(outcomes), p=probs / probs.sum())
            self._state.apply_action(outcomes[int(index)][0])
        self._legal = self._state.legal_actions()

    def _build_observation(self) -> Dict[str, np.ndarray]:
        board = build_board_tensor(self._state)
        aux = build_aux_vector(self._state)
        return {"board": board, "aux": aux}

    def _build_info(self) -> Dict[str, object]:
        return {
            "legal_actions": np.asarray(self._legal, dtype=np.int64),
            "current_player": self._state.current_player(),
        }
