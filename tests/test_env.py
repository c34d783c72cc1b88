import numpy as np
import pytest

from crowny import CrownyEnv
from crowny.core import CrownyGame, IllegalActionError, NUM_DISTINCT_ACTIONS, OutOfRangeError


def test_reset_returns_valid_observation() -> None:
    env = CrownyEnv()
    obs, info = env.reset(seed=0)

    assert obs["board"].shape == (8, 11, 11)
    assert obs["aux"].shape == (8,)
    assert info["current_player"] in (0, 1)
    assert info["legal_actions"].dtype == np.int64
    assert len(info["legal_actions"]) > 0
    assert list(info["legal_actions"]) == env.state.legal_actions()


def test_seeded_reset_is_reproducible() -> None:
    first = CrownyEnv()
    second = CrownyEnv()
    _, info_a = first.reset(seed=5)
    _, info_b = second.reset(seed=5)

    assert info_a["current_player"] == info_b["current_player"]
    assert np.array_equal(info_a["legal_actions"], info_b["legal_actions"])


def test_step_advances_to_next_decision() -> None:
    env = CrownyEnv()
    obs, info = env.reset(seed=1)
    mover = info["current_player"]
    action = int(info["legal_actions"][0])

    next_obs, reward, terminated, truncated, next_info = env.step(action)

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert not env.state.is_chance_node()
    assert np.any(next_obs["board"] != obs["board"])
    assert next_info["current_player"] in (0, 1)
    assert env.state.player_turns(mover) == 1


def test_illegal_actions_raise() -> None:
    env = CrownyEnv()
    env.reset(seed=2)

    with pytest.raises(OutOfRangeError):
        env.step(NUM_DISTINCT_ACTIONS)
    with pytest.raises(IllegalActionError):
        env.step(0)


def test_truncates_at_max_game_length() -> None:
    env = CrownyEnv(CrownyGame({"max_game_length": 1}))
    _, info = env.reset(seed=3)

    _, _, terminated, truncated, _ = env.step(int(info["legal_actions"][0]))

    assert not terminated
    assert truncated
    assert env.state.is_terminal()
    assert env.state.winner() is None


def test_render_ansi() -> None:
    env = CrownyEnv(render_mode="ansi")
    env.reset(seed=4)
    text = env.render()

    assert "Dice:" in text
    assert text.splitlines()[0].startswith("11 ")
