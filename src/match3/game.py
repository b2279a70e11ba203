"""Host-facing facade wiring the event bus, world and systems together."""
from __future__ import annotations

import random
from typing import Callable, Tuple

from match3.components.grid import Grid
from match3.components.token import Token
from match3.config import EngineConfig
from match3.events.bus import (
    EVENT_POINTER_CANCEL,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_MOVE,
    EVENT_POINTER_UP,
    EVENT_TICK,
    EventBus,
)
from match3.systems.animation import AnimationSystem
from match3.systems.board_ops import get_board_state, get_combo_score, get_grid
from match3.systems.input import InputSystem
from match3.systems.score_system import ScoreSystem
from match3.systems.sequencer import SequencerSystem
from match3.world import create_world

Position = Tuple[int, int]


class Match3Game:
    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        rng: random.Random | None = None,
        token_factory: Callable[[int, int], Token] | None = None,
        event_bus: EventBus | None = None,
    ):
        self.config = config or EngineConfig()
        self.event_bus = event_bus or EventBus()
        self.world = create_world(
            self.config,
            rng=rng,
            token_factory=token_factory,
        )
        # Board and animation systems
        self.animation_system = AnimationSystem(self.world, self.event_bus, self.config)
        self.sequencer = SequencerSystem(self.world, self.event_bus, self.animation_system)
        self.score_system = ScoreSystem(
            self.world,
            self.event_bus,
            points_per_token=self.config.points_per_token,
        )
        # Input systems
        self.input_system = InputSystem(self.world, self.event_bus, self.config)

    @property
    def grid(self) -> Grid:
        return get_grid(self.world)

    @property
    def score(self) -> int:
        return get_combo_score(self.world).score

    @property
    def combo(self) -> int:
        return get_combo_score(self.world).combo

    @property
    def can_move(self) -> bool:
        return get_board_state(self.world).accepting_input

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def run_until_idle(self, dt: float = 1 / 60, max_ticks: int = 10_000) -> int:
        """Tick until the board accepts input; returns the number of ticks used."""
        for ticks in range(1, max_ticks + 1):
            self.tick(dt)
            if self.can_move:
                return ticks
        raise RuntimeError(f"Board did not settle within {max_ticks} ticks")

    def request_swap(self, src: Position, dst: Position) -> bool:
        return self.sequencer.request_swap(src, dst)

    def resize(self, width: float, height: float, x: float = 0.0, y: float = 0.0) -> None:
        self.input_system.notify_resize(width, height, x, y)

    def pointer_down(self, x: float, y: float) -> None:
        self.event_bus.emit(EVENT_POINTER_DOWN, x=x, y=y)

    def pointer_move(self, x: float, y: float) -> None:
        self.event_bus.emit(EVENT_POINTER_MOVE, x=x, y=y)

    def pointer_up(self, x: float, y: float) -> None:
        self.event_bus.emit(EVENT_POINTER_UP, x=x, y=y)

    def pointer_cancel(self, x: float, y: float) -> None:
        self.event_bus.emit(EVENT_POINTER_CANCEL, x=x, y=y)
