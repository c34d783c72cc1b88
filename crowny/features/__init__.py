"""Feature extraction helpers for Crowny."""

from .observation import (
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

__all__ = [
    "AUX_VECTOR_SIZE",
    "BOARD_CHANNELS",
    "STATE_ENCODING_SIZE",
    "build_aux_vector",
    "build_board_tensor",
    "observation_tensor",
    "observation_tensor_shape",
    "state_to_numpy",
    "state_to_torch",
]
