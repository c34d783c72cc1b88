"""Core rules engine for Crowny."""

from .errors import (
    CrownyError,
    EmptyCellError,
    IllegalActionError,
    InternalInconsistencyError,
    InvalidConfigurationError,
    NoSuchDieError,
    OutOfRangeError,
)
from .state import (
    BOARD_SIZE,
    CHANCE_PLAYER_ID,
    NUM_CELLS,
    OFF_BOARD,
    PASS_MOVE,
    TERMINAL_PLAYER_ID,
    Board,
    Cell,
    CheckerMove,
    DiceState,
    Piece,
    PieceKind,
    Side,
    TurnState,
)
from .encoding import (
    NUM_DIGITS,
    NUM_DISTINCT_ACTIONS,
    decode_action,
    encode_moves,
)
from .rules import (
    CHANCE_OUTCOME_VALUES,
    HOME_CORNERS,
    NUM_CHECKERS_PER_PLAYER,
    initial_board,
    legal_checker_moves,
    legal_move_actions,
    legal_move_sequences,
)
from .game import (
    MAX_GAME_LENGTH,
    CrownyGame,
    CrownyState,
    ScoringType,
    parse_scoring_type,
)
from .notation import action_to_string, cell_to_string, state_to_string

__all__ = [
    "CrownyError",
    "EmptyCellError",
    "IllegalActionError",
    "InternalInconsistencyError",
    "InvalidConfigurationError",
    "NoSuchDieError",
    "OutOfRangeError",
    "BOARD_SIZE",
    "CHANCE_PLAYER_ID",
    "NUM_CELLS",
    "OFF_BOARD",
    "PASS_MOVE",
    "TERMINAL_PLAYER_ID",
    "Board",
    "Cell",
    "CheckerMove",
    "DiceState",
    "Piece",
    "PieceKind",
    "Side",
    "TurnState",
    "NUM_DIGITS",
    "NUM_DISTINCT_ACTIONS",
    "decode_action",
    "encode_moves",
    "CHANCE_OUTCOME_VALUES",
    "HOME_CORNERS",
    "NUM_CHECKERS_PER_PLAYER",
    "initial_board",
    "legal_checker_moves",
    "legal_move_actions",
    "legal_move_sequences",
    "MAX_GAME_LENGTH",
    "CrownyGame",
    "CrownyState",
    "ScoringType",
    "parse_scoring_type",
    "action_to_string",
    "cell_to_string",
    "state_to_string",
]
