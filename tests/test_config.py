import logging

import pytest

from crowny.config import GameConfig, load_game_config, load_optional_config
from crowny.core import InvalidConfigurationError, ScoringType


def test_defaults_build_win_loss_game() -> None:
    game = GameConfig().make_game()
    assert game.scoring_type == ScoringType.WIN_LOSS
    assert game.max_game_length() == 1000


def test_load_game_section(tmp_path) -> None:
    path = tmp_path / "game.yaml"
    path.write_text("games: 3\ngame:\n  scoring_type: full_scoring\n  max_game_length: 200\n")

    config = load_game_config(path)
    game = config.make_game()

    assert config.to_dict() == {"scoring_type": "full_scoring", "max_game_length": 200}
    assert game.max_utility() == 2.0
    assert game.max_game_length() == 200


def test_load_bare_keys(tmp_path) -> None:
    path = tmp_path / "game.yaml"
    path.write_text("scoring_type: winloss_scoring\n")
    assert load_game_config(path) == GameConfig()


def test_invalid_configs(tmp_path) -> None:
    with pytest.raises(InvalidConfigurationError):
        GameConfig(scoring_type="gammon")
    with pytest.raises(InvalidConfigurationError):
        GameConfig(max_game_length=-1)
    with pytest.raises(InvalidConfigurationError):
        GameConfig.from_mapping({"board": 11})
    with pytest.raises(InvalidConfigurationError):
        load_game_config(tmp_path / "missing.yaml")

    listing = tmp_path / "list.yaml"
    listing.write_text("- 1\n- 2\n")
    with pytest.raises(InvalidConfigurationError):
        load_game_config(listing)


def test_missing_optional_config_warns(tmp_path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="crowny.config"):
        data = load_optional_config(tmp_path / "nope.yaml")

    assert data == {}
    assert "not found" in caplog.text


def test_optional_config_reads_existing_file(tmp_path) -> None:
    path = tmp_path / "sim.yaml"
    path.write_text("games: 2\ngame:\n  max_game_length: 30\n")

    data = load_optional_config(path)

    assert data["games"] == 2
    assert GameConfig.from_mapping(data["game"]).max_game_length == 30
