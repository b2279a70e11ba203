import random

from match3.config import EngineConfig
from match3.game import Match3Game
from match3.systems.board_ops import find_valid_swaps
from match3.systems.match import find_matches


def _play(seed, moves=4, **overrides):
    config = EngineConfig(grid_size=6, kinds_count=4, **overrides)
    game = Match3Game(config, rng=random.Random(seed))
    game.run_until_idle()
    for _ in range(moves):
        swaps = find_valid_swaps(game.grid)
        if not swaps:
            break
        game.request_swap(*swaps[0])
        game.run_until_idle()
    snapshot = [
        None if token is None else (token.kind, token.effect)
        for token in (game.grid.get(r, c) for r, c in game.grid.positions())
    ]
    return snapshot, game.score


def test_same_seed_replays_the_same_session():
    assert _play(11) == _play(11)


def test_same_seed_replays_with_special_tokens():
    assert _play(5, special_chance=0.2) == _play(5, special_chance=0.2)


def test_initial_board_has_no_runs():
    for seed in range(5):
        game = Match3Game(EngineConfig(grid_size=8, kinds_count=6), rng=random.Random(seed))
        assert not find_matches(game.grid)
        assert len(game.grid) == 64


def test_idle_board_is_full_and_quiet():
    game = Match3Game(EngineConfig(grid_size=6, kinds_count=4), rng=random.Random(3))
    game.run_until_idle()
    assert not game.grid.empty_cells()
    assert not find_matches(game.grid)
