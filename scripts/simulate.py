#!/usr/bin/env python3
"""Play random Crowny games and print a JSON summary.

Example:
  python scripts/simulate.py --games 20 --seed 7 --config configs/simulate.yaml
"""

import argparse
import json
import logging

import numpy as np

from crowny.config import GameConfig, load_optional_config
from crowny.playout import random_playout

logger = logging.getLogger("crowny.simulate")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/simulate.yaml")
    parser.add_argument("--games", type=int)
    parser.add_argument("--max-moves", type=int)
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    cfg = load_optional_config(args.config)
    games = args.games if args.games is not None else cfg.get("games", 10)
    max_moves = args.max_moves if args.max_moves is not None else cfg.get("max_moves")
    seed = args.seed if args.seed is not None else cfg.get("seed", 0)

    game = GameConfig.from_mapping(cfg.get("game")).make_game()
    rng = np.random.default_rng(seed)

    wins = [0, 0]
    unfinished = 0
    total_moves = 0
    for index in range(games):
        result = random_playout(game, rng, max_moves)
        total_moves += result.moves
        if result.returns[0] > 0:
            wins[0] += 1
        elif result.returns[1] > 0:
            wins[1] += 1
        else:
            unfinished += 1
        logger.info("game %d: %d moves, scores %s", index, result.moves, result.scores)

    summary = {
        "game": repr(game),
        "games": games,
        "seed": seed,
        "red_wins": wins[0],
        "blue_wins": wins[1],
        "unfinished": unfinished,
        "mean_moves": total_moves / games if games else 0.0,
    }
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
