from __future__ import annotations

import random
from typing import Iterable, Sequence

from match3.components.grid import Grid
from match3.components.token import KIND_NONE, Effect, Token
from match3.config import EngineConfig
from match3.events.bus import EVENT_TICK, EventBus
from match3.game import Match3Game

GLYPH_KINDS = {"A": 0, "B": 1, "C": 2, "D": 3, "E": 4, "F": 5}


class ScriptedFactory:
    """Token factory that cycles through a fixed list of kinds and records each call."""

    def __init__(self, kinds: Iterable[int]):
        self.kinds = list(kinds)
        self.calls: list[tuple[int, int]] = []
        self._next = 0

    def __call__(self, row: int, col: int) -> Token:
        self.calls.append((row, col))
        kind = self.kinds[self._next % len(self.kinds)]
        self._next += 1
        return Token(kind=kind)

    def reset(self) -> None:
        self.calls.clear()
        self._next = 0


def load_layout(grid: Grid, rows: Sequence[str]) -> None:
    """Replace the grid contents; ``rows[r]`` describes row r (row 0 is the bottom).

    Letters are kinds, ``.`` leaves the cell empty, ``*`` places a wildcard.
    """
    assert len(rows) == grid.size, "layout must describe every row"
    grid.clear()
    for row, line in enumerate(rows):
        glyphs = line.replace(" ", "")
        assert len(glyphs) == grid.size, f"row {row} has {len(glyphs)} cells"
        for col, glyph in enumerate(glyphs):
            if glyph == ".":
                continue
            if glyph == "*":
                grid.place(row, col, Token(kind=KIND_NONE, effect=Effect.WILDCARD))
            else:
                grid.place(row, col, Token(kind=GLYPH_KINDS[glyph]))


def kinds_of_row(grid: Grid, row: int) -> list[int | None]:
    kinds: list[int | None] = []
    for col in range(grid.size):
        token = grid.get(row, col)
        kinds.append(None if token is None else token.kind)
    return kinds


def make_game(
    size: int = 4,
    kinds: int = 3,
    layout: Sequence[str] | None = None,
    *,
    factory=None,
    seed: int = 0,
    **config_overrides,
) -> Match3Game:
    config = EngineConfig(grid_size=size, kinds_count=kinds, **config_overrides)
    game = Match3Game(config, rng=random.Random(seed), token_factory=factory)
    if layout is not None:
        load_layout(game.grid, layout)
        if isinstance(factory, ScriptedFactory):
            factory.reset()
    return game


def drive(bus: EventBus, ticks: int, dt: float = 0.02) -> None:
    for _ in range(ticks):
        bus.emit(EVENT_TICK, dt=dt)


def stalemate_rows(size: int) -> list[str]:
    """Diagonal three-kind pattern: no single swap can line up three."""
    glyphs = "ABC"
    return ["".join(glyphs[(row + col) % 3] for col in range(size)) for row in range(size)]
