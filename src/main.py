"""Headless auto-play session for the match-three engine.

Plays seeded random legal swaps, ticking the engine at a fixed frame rate,
and prints the final board and score.

Run with: ``python src/main.py --seed 7 --moves 20``
"""
from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Any, Dict

from match3.config import EngineConfig
from match3.events.bus import EVENT_SCORE_CHANGED, EVENT_STALEMATE
from match3.game import Match3Game
from match3.systems.board_ops import find_valid_swaps

FRAME_DT = 1 / 60
KIND_GLYPHS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def render_board(game: Match3Game) -> str:
    grid = game.grid
    lines = []
    for row in reversed(range(grid.size)):
        cells = []
        for col in range(grid.size):
            token = grid.get(row, col)
            if token is None:
                cells.append(".")
            elif token.kind < 0:
                cells.append("*")
            else:
                cells.append(KIND_GLYPHS[token.kind % len(KIND_GLYPHS)])
        lines.append(" ".join(cells))
    return "\n".join(lines)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--moves", type=int, default=10)
    parser.add_argument("--config", type=Path, default=None, help="JSON file of engine settings")
    parser.add_argument("--size", type=int, default=None)
    parser.add_argument("--kinds", type=int, default=None)
    parser.add_argument("--special-chance", type=float, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> EngineConfig:
    """Settings file first, then any explicit command-line overrides."""
    settings: Dict[str, Any] = {}
    if args.config is not None:
        with args.config.open("r", encoding="utf-8") as handle:
            settings.update(json.load(handle))
    overrides = {
        "grid_size": args.size,
        "kinds_count": args.kinds,
        "special_chance": args.special_chance,
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})
    return EngineConfig.from_mapping(settings)


def main(argv=None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = load_config(args)
    rng = random.Random(args.seed)
    game = Match3Game(config, rng=random.Random(rng.random()))
    game.event_bus.subscribe(
        EVENT_SCORE_CHANGED,
        lambda sender, **k: print(f"  +{k['delta']} (combo {k['combo']}) -> {k['score']}"),
    )
    game.event_bus.subscribe(EVENT_STALEMATE, lambda sender, **k: print("  stalemate, reshuffling"))

    game.run_until_idle(FRAME_DT)
    for move in range(1, args.moves + 1):
        swaps = find_valid_swaps(game.grid)
        if not swaps:
            break
        src, dst = rng.choice(swaps)
        print(f"move {move}: {src} <-> {dst}")
        game.request_swap(src, dst)
        game.run_until_idle(FRAME_DT)
    print(render_board(game))
    print(f"score: {game.score}")


if __name__ == "__main__":
    main()
