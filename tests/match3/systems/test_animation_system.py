import random

import pytest

from match3.components.animation import Animation, AnimationKind
from match3.components.token import Activity
from match3.config import EngineConfig
from match3.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EventBus
from match3.systems.animation import AnimationSystem
from match3.systems.board_ops import get_grid
from match3.ui.visuals import TokenVisual, compute_visuals
from match3.world import create_world


@pytest.fixture
def setup():
    bus = EventBus()
    config = EngineConfig(grid_size=4, kinds_count=3)
    world = create_world(config, rng=random.Random(1))
    return bus, world, AnimationSystem(world, bus, config), config


def test_group_runs_to_completion_and_restores_tokens(setup):
    bus, world, animations, config = setup
    grid = get_grid(world)
    tokens = [grid.get(0, 0), grid.get(0, 1)]
    started = []
    completed = []
    bus.subscribe(EVENT_ANIMATION_START, lambda s, **k: started.append(k))
    bus.subscribe(EVENT_ANIMATION_COMPLETE, lambda s, **k: completed.append(k))

    entity = animations.start(AnimationKind.FALLING, tokens)

    assert started[0]["entity"] == entity
    assert started[0]["positions"] == [(0, 0), (0, 1)]
    assert all(token.activity is Activity.FALLING for token in tokens)
    animations.update(config.fall_duration / 2)
    assert animations.has_active()
    assert completed == []

    animations.update(config.fall_duration)
    assert not animations.has_active()
    assert len(completed) == 1
    assert completed[0]["kind"] is AnimationKind.FALLING
    assert completed[0]["animation"].tokens == tuple(tokens)
    assert all(token.activity is Activity.IDLE for token in tokens)


def test_groups_finish_independently(setup):
    bus, world, animations, config = setup
    grid = get_grid(world)
    completed = []
    bus.subscribe(EVENT_ANIMATION_COMPLETE, lambda s, **k: completed.append(k["kind"]))
    animations.start(AnimationKind.FALLING, [grid.get(1, 0)])
    animations.start(AnimationKind.DISAPPEARING, [grid.get(2, 2)], reason="match")

    animations.update(config.fall_duration + 0.001)
    assert completed == [AnimationKind.FALLING]
    assert [a.kind for _, a in animations.active()] == [AnimationKind.DISAPPEARING]
    animations.update(config.disappear_duration)
    assert completed == [AnimationKind.FALLING, AnimationKind.DISAPPEARING]


def test_progress_is_clamped():
    animation = Animation(kind=AnimationKind.SWAPPING, tokens=(), elapsed=0.5)
    assert animation.progress(0.2) == 1.0
    assert animation.progress(1.0) == pytest.approx(0.5)


def test_visuals_follow_animation_progress(setup):
    bus, world, animations, config = setup
    grid = get_grid(world)
    animations.start(AnimationKind.DISAPPEARING, [grid.get(0, 0)], reason="match")
    animations.start(AnimationKind.FALLING, [grid.get(3, 3)])
    animations.update(config.fall_duration / 2)

    visuals = compute_visuals(world)
    assert visuals[(3, 3)].offset_y == pytest.approx(0.5)
    expected_scale = 1.0 - (config.fall_duration / 2) / config.disappear_duration
    assert visuals[(0, 0)].scale == pytest.approx(expected_scale)
    assert visuals[(1, 1)] == TokenVisual()


def test_applied_swap_starts_from_the_old_cells(setup):
    bus, world, animations, config = setup
    grid = get_grid(world)
    grid.swap((0, 0), (0, 1))
    animations.start(
        AnimationKind.SWAPPING,
        [grid.get(0, 0), grid.get(0, 1)],
        src=(0, 0),
        dst=(0, 1),
        revert=False,
    )
    visuals = compute_visuals(world)
    # Token now in (0, 1) came from (0, 0): drawn one cell to the left.
    assert visuals[(0, 1)].offset_x == pytest.approx(-1.0)
    assert visuals[(0, 0)].offset_x == pytest.approx(1.0)


def test_reverted_swap_peaks_halfway(setup):
    bus, world, animations, config = setup
    grid = get_grid(world)
    animations.start(
        AnimationKind.SWAPPING,
        [grid.get(1, 1), grid.get(2, 1)],
        src=(1, 1),
        dst=(2, 1),
        revert=True,
    )
    animations.update(config.swap_duration / 2)
    visuals = compute_visuals(world)
    assert visuals[(1, 1)].offset_y == pytest.approx(1.0)
    assert visuals[(2, 1)].offset_y == pytest.approx(-1.0)
