import random
from typing import Callable

from esper import World
from match3.components.board_state import BoardState
from match3.components.combo_score import ComboScore
from match3.components.grid import Grid
from match3.components.token import Token
from match3.config import EngineConfig
from match3.factories.token_factory import RandomTokenFactory


def create_world(
    config: EngineConfig | None = None,
    *,
    rng: random.Random | None = None,
    token_factory: Callable[[int, int], Token] | None = None,
    populate: bool = True,
) -> World:
    """Build the ECS world with its state and board entities.

    A single ``random.Random`` is shared by the default token factory and the
    grid (wildcard target draws), so one seed replays a whole session.
    """
    config = config or EngineConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)
    if token_factory is None:
        token_factory = RandomTokenFactory(
            config.kinds_count,
            world.random,
            special_chance=config.special_chance,
        )
    setattr(world, "token_factory", token_factory)

    # Global board state resource.
    state_entity = world.create_entity()
    world.add_component(state_entity, BoardState())
    world.add_component(state_entity, ComboScore())

    grid = Grid(config.grid_size, config.kinds_count, rng=world.random)
    world.create_entity(grid)
    if populate:
        grid.populate(token_factory, avoid_matches=config.avoid_initial_matches)
    return world
