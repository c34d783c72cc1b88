from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence, Tuple

from .encoding import NUM_DISTINCT_ACTIONS, decode_action
from .errors import (
    IllegalActionError,
    InternalInconsistencyError,
    InvalidConfigurationError,
    OutOfRangeError,
)
from .rules import (
    CHANCE_OUTCOMES,
    CHANCE_OUTCOME_VALUES,
    NUM_CHECKERS_PER_PLAYER,
    NUM_NON_DOUBLE_OUTCOMES,
    NUM_OPENING_OUTCOMES,
    OPENING_OUTCOMES,
    apply_checker_move,
    initial_board,
    legal_move_actions,
    undo_checker_move,
)
from .notation import action_to_string, state_to_string
from .state import (
    CHANCE_PLAYER_ID,
    TERMINAL_PLAYER_ID,
    Board,
    DiceState,
    Side,
    TurnState,
)

if TYPE_CHECKING:
    from crowny.config import GameConfig

logger = logging.getLogger(__name__)

NUM_PLAYERS = 2
MAX_GAME_LENGTH = 1000
DEFAULT_SCORING_TYPE = "winloss_scoring"


class ScoringType(Enum):
    WIN_LOSS = "winloss_scoring"
    FULL = "full_scoring"


def parse_scoring_type(value: str) -> ScoringType:
    try:
        return ScoringType(value)
    except ValueError as exc:
        raise InvalidConfigurationError(f"Unrecognized scoring_type parameter: {value}") from exc


@dataclass(frozen=True)
class TurnRecord:
    """Everything :meth:`CrownyState.undo_action` needs to reverse one action."""

    player: int
    action: int
    prev_player: int
    turns: int
    side_turns: Tuple[int, int]
    double_turn: bool
    dice: Tuple[int, ...]
    dice_used: Tuple[int, ...] = ()


class CrownyGame:
    PARAMETERS = ("scoring_type", "max_game_length")

    def __init__(self, params: Optional[Mapping[str, object]] = None) -> None:
        params = dict(params or {})
        unknown = sorted(set(params) - set(self.PARAMETERS))
        if unknown:
            raise InvalidConfigurationError(f"Unknown game parameters: {', '.join(unknown)}")
        self.scoring_type = parse_scoring_type(str(params.get("scoring_type", DEFAULT_SCORING_TYPE)))
        max_game_length = params.get("max_game_length", MAX_GAME_LENGTH)
        if not isinstance(max_game_length, int) or max_game_length <= 0:
            raise InvalidConfigurationError(f"max_game_length must be a positive integer, got {max_game_length!r}")
        self._max_game_length = max_game_length

    @classmethod
    def from_config(cls, config: "GameConfig") -> "CrownyGame":
        """Build a game from a :class:`crowny.config.GameConfig`."""
        return cls({"scoring_type": config.scoring_type, "max_game_length": config.max_game_length})

    def new_initial_state(self) -> "CrownyState":
        return CrownyState(self)

    def num_distinct_actions(self) -> int:
        return NUM_DISTINCT_ACTIONS

    def max_chance_outcomes(self) -> int:
        return NUM_OPENING_OUTCOMES

    def max_game_length(self) -> int:
        return self._max_game_length

    def max_chance_nodes_in_history(self) -> int:
        return self._max_game_length + 1

    def num_players(self) -> int:
        return NUM_PLAYERS

    def num_checkers_per_player(self) -> int:
        return NUM_CHECKERS_PER_PLAYER

    def max_utility(self) -> float:
        return 2.0 if self.scoring_type == ScoringType.FULL else 1.0

    def min_utility(self) -> float:
        return -self.max_utility()

    def utility_sum(self) -> float:
        return 0.0

    def __repr__(self) -> str:
        return f"CrownyGame(scoring_type={self.scoring_type.value!r})"


class CrownyState:
    """A game in progress.

    Chance nodes come first (the opening roll decides the starting side and
    its dice), then move and roll nodes alternate. A double gives the mover a
    second move with the same dice before the next roll.
    """

    def __init__(self, game: CrownyGame) -> None:
        self.game = game
        self.board: Board = initial_board()
        self.dice: DiceState = DiceState()
        self.turn: TurnState = TurnState()
        self.history: List[TurnRecord] = []

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    def current_player(self) -> int:
        return TERMINAL_PLAYER_ID if self.is_terminal() else self.turn.cur_player

    def is_chance_node(self) -> bool:
        return not self.is_terminal() and self.turn.cur_player == CHANCE_PLAYER_ID

    @staticmethod
    def opponent(player: int) -> int:
        if player not in (Side.RED, Side.BLUE):
            raise OutOfRangeError(f"Player {player} has no opponent.")
        return 1 - player

    def score(self, side: int) -> int:
        return self.board.score(self._side(side))

    @property
    def scores(self) -> Tuple[int, int]:
        return self.board.score(Side.RED), self.board.score(Side.BLUE)

    def die(self, index: int) -> int:
        return self.dice.value(index)

    @property
    def double_turn(self) -> bool:
        return self.turn.double_turn

    @property
    def turns(self) -> int:
        return self.turn.turns

    def player_turns(self, side: int) -> int:
        return self.turn.side_turns[self._side(side)]

    @property
    def move_number(self) -> int:
        return len(self.history)

    # ------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------
    def winner(self) -> Optional[Side]:
        target = self.game.num_checkers_per_player()
        return next((side for side in Side if self.board.score(side) == target), None)

    def reached_length_limit(self) -> bool:
        return self.turn.turns >= self.game.max_game_length()

    def is_terminal(self) -> bool:
        """A side has borne off every piece, or the turn limit is reached.

        Hitting the limit ends the game as a draw.
        """
        return self.winner() is not None or self.reached_length_limit()

    def returns(self) -> List[float]:
        winner = self.winner()
        if winner is None:
            return [0.0, 0.0]
        loser = winner.opponent
        magnitude = 1.0
        if self.game.scoring_type == ScoringType.FULL and self.board.score(loser) == 0:
            magnitude = 2.0
        result = [0.0, 0.0]
        result[winner] = magnitude
        result[loser] = -magnitude
        return result

    def chance_outcomes(self) -> List[Tuple[int, float]]:
        if not self.is_chance_node():
            raise IllegalActionError("Chance outcomes requested at a non-chance node.")
        if self.turn.turns == -1:
            return list(OPENING_OUTCOMES)
        return list(CHANCE_OUTCOMES)

    def legal_actions(self) -> List[int]:
        if self.is_terminal():
            return []
        if self.is_chance_node():
            return [outcome for outcome, _ in self.chance_outcomes()]
        return legal_move_actions(self.board, self.dice, Side(self.turn.cur_player))

    def apply_action(self, action: int, *, check_legal: bool = True) -> None:
        """Apply a chance outcome or a move.

        Nothing is mutated when the action is rejected. ``check_legal=False``
        skips the legality test for callers that drew ``action`` from
        :meth:`legal_actions` themselves; range checks still apply.
        """
        if self.is_terminal():
            raise IllegalActionError("Cannot apply an action to a terminal state.")
        if self.is_chance_node():
            bound = NUM_OPENING_OUTCOMES if self.turn.turns == -1 else len(CHANCE_OUTCOMES)
            if not 0 <= action < bound:
                raise OutOfRangeError(f"Chance outcome {action} out of range [0, {bound}).")
            self._apply_chance(action)
            return

        if not 0 <= action < NUM_DISTINCT_ACTIONS:
            raise OutOfRangeError(f"Action {action} out of range.")
        if check_legal and action not in self.legal_actions():
            raise IllegalActionError(f"Action {action} is not legal for player {self.turn.cur_player}.")
        self._apply_move(action)

    def _record(self, player: int, action: int) -> TurnRecord:
        return TurnRecord(
            player=player,
            action=action,
            prev_player=self.turn.prev_player,
            turns=self.turn.turns,
            side_turns=(self.turn.side_turns[0], self.turn.side_turns[1]),
            double_turn=self.turn.double_turn,
            dice=tuple(self.dice.values),
        )

    def _apply_chance(self, outcome: int) -> None:
        record = self._record(CHANCE_PLAYER_ID, outcome)
        if self.turn.turns == -1:
            starter = Side.RED if outcome < NUM_NON_DOUBLE_OUTCOMES else Side.BLUE
            roll = outcome % NUM_NON_DOUBLE_OUTCOMES
            self.dice.roll(*CHANCE_OUTCOME_VALUES[roll])
            self.turn.cur_player = self.turn.prev_player = int(starter)
            self.turn.turns = 0
            logger.debug("Opening roll %s: %s starts with %s", outcome, starter.name, self.dice.values)
        else:
            self.dice.roll(*CHANCE_OUTCOME_VALUES[outcome])
            self.turn.cur_player = self.opponent(self.turn.prev_player)
            logger.debug("Roll %s for %s", self.dice.values, Side(self.turn.cur_player).name)
        self.history.append(record)

    def _apply_move(self, action: int) -> None:
        side = Side(self.turn.cur_player)
        record = self._record(int(side), action)
        moves = decode_action(action)
        dice_used: List[int] = []
        try:
            for move in moves:
                dice_used.append(apply_checker_move(self.board, self.dice, side, move))
        except Exception:
            for move, die in reversed(list(zip(moves, dice_used))):
                undo_checker_move(self.board, self.dice, side, move, die)
            raise
        self.history.append(replace(record, dice_used=tuple(dice_used)))

        if not self.turn.double_turn:
            self.turn.turns += 1
            self.turn.side_turns[side] += 1
        self.turn.prev_player = int(side)

        if self.winner() is not None:
            logger.debug("%s bore off the last piece after %d turns", side.name, self.turn.turns)
        elif self.reached_length_limit():
            logger.debug("Turn limit %d reached, game drawn", self.game.max_game_length())
        if not self.is_terminal() and self.dice.is_double and not self.turn.double_turn:
            self.turn.double_turn = True
            self.dice.unmark_all()
        else:
            self.turn.double_turn = False
            self.dice.clear()
            self.turn.cur_player = CHANCE_PLAYER_ID

    def undo_action(self, player: int, action: int) -> None:
        if not self.history:
            raise IllegalActionError("No action to undo.")
        record = self.history[-1]
        if record.player != player or record.action != action:
            raise IllegalActionError(
                f"Undo of ({player}, {action}) does not match the last action ({record.player}, {record.action})."
            )
        self.history.pop()

        if player != CHANCE_PLAYER_ID:
            side = Side(player)
            moves = decode_action(action)
            dice = DiceState(list(record.dice))
            for die in record.dice_used:
                if die:
                    dice.mark_used(die)
            for move, die in reversed(list(zip(moves, record.dice_used))):
                undo_checker_move(self.board, dice, side, move, die)
            if tuple(dice.values) != record.dice:
                raise InternalInconsistencyError(f"Dice {dice.values} do not match recorded {record.dice}.")

        self.turn.cur_player = record.player
        self.turn.prev_player = record.prev_player
        self.turn.turns = record.turns
        self.turn.side_turns = list(record.side_turns)
        self.turn.double_turn = record.double_turn
        self.dice = DiceState(list(record.dice))
        logger.debug("Undid action %s of player %s", action, player)

    # ------------------------------------------------------------------
    # Copying and test hooks
    # ------------------------------------------------------------------
    def clone(self) -> "CrownyState":
        other = CrownyState.__new__(CrownyState)
        other.game = self.game
        other.board = self.board.copy()
        other.dice = self.dice.copy()
        other.turn = self.turn.copy()
        other.history = list(self.history)
        return other

    def set_state(
        self,
        cur_player: int,
        dice: Sequence[int],
        board: Board,
        *,
        double_turn: bool = False,
        turns: int = 0,
    ) -> None:
        """Overwrite the position. History is cleared, so earlier actions
        cannot be undone afterwards."""
        self.turn = TurnState(
            cur_player=cur_player,
            prev_player=cur_player,
            turns=turns,
            double_turn=double_turn,
        )
        self.dice = DiceState(list(dice))
        self.board = board
        self.history = []

    def action_to_string(self, player: int, action: int) -> str:
        return action_to_string(self, player, action)

    def __str__(self) -> str:
        return state_to_string(self)

    def __repr__(self) -> str:
        return (
            f"CrownyState(current={self.current_player()}, turns={self.turn.turns}, "
            f"dice={self.dice.values}, scores={self.scores})"
        )

    @staticmethod
    def _side(side: int) -> Side:
        if side not in (Side.RED, Side.BLUE):
            raise OutOfRangeError(f"Player {side} out of range.")
        return Side(side)
