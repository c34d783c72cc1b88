from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

import yaml

from crowny.core import MAX_GAME_LENGTH, CrownyGame, InvalidConfigurationError, parse_scoring_type

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    scoring_type: str = "winloss_scoring"
    max_game_length: int = MAX_GAME_LENGTH

    def __post_init__(self) -> None:
        parse_scoring_type(self.scoring_type)
        if not isinstance(self.max_game_length, int) or self.max_game_length <= 0:
            raise InvalidConfigurationError(
                f"max_game_length must be a positive integer, got {self.max_game_length!r}"
            )

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, object]]) -> "GameConfig":
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigurationError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def make_game(self) -> CrownyGame:
        return CrownyGame.from_config(self)


def load_yaml_config(path: Union[str, Path]) -> Dict[str, object]:
    """Read a YAML mapping, raising :class:`InvalidConfigurationError` on failure."""
    path = Path(path)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise InvalidConfigurationError(f"Cannot read config {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config {path} must hold a mapping.")
    return data


def load_game_config(path: Union[str, Path]) -> GameConfig:
    """Read a YAML file holding a ``game`` section (or the bare keys)."""
    data = load_yaml_config(path)
    if "game" in data:
        return GameConfig.from_mapping(data["game"])
    return GameConfig.from_mapping(data)


def load_optional_config(path: Union[str, Path]) -> Dict[str, object]:
    """Like :func:`load_yaml_config`, but a missing file yields defaults."""
    path = Path(path)
    if not path.exists():
        logger.warning("Config %s not found, using defaults", path)
        return {}
    return load_yaml_config(path)
