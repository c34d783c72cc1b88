"""Crowny rules engine."""

from . import core, env, features
from .config import GameConfig, load_game_config
from .core import CrownyGame, CrownyState
from .env import CrownyEnv
from .features import (
    AUX_VECTOR_SIZE,
    BOARD_CHANNELS,
    STATE_ENCODING_SIZE,
    build_aux_vector,
    build_board_tensor,
    observation_tensor,
    observation_tensor_shape,
    state_to_numpy,
    state_to_torch,
)
from .playout import PlayoutResult, random_playout

__all__ = [
    "core",
    "env",
    "features",
    "GameConfig",
    "load_game_config",
    "CrownyGame",
    "CrownyState",
    "CrownyEnv",
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "STATE_ENCODING_SIZE",
    "build_aux_vector",
    "build_board_tensor",
    "observation_tensor",
    "observation_tensor_shape",
    "state_to_numpy",
    "state_to_torch",
    "PlayoutResult",
    "random_playout",
]
