from __future__ import annotations

import logging
import math
from typing import Any, Optional, Tuple

from esper import World

from match3.config import EngineConfig
from match3.events.bus import (
    EVENT_POINTER_CANCEL,
    EVENT_POINTER_DOWN,
    EVENT_POINTER_MOVE,
    EVENT_POINTER_UP,
    EVENT_SWAP_REQUEST,
    EventBus,
)
from match3.systems.board_ops import get_board_state, get_grid
from match3.ui.layout import compute_board_geometry

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class InputSystem:
    """Maps pointer gestures onto swap requests between adjacent cells.

    Screen x grows with columns and screen y grows with rows (row 0 at the
    bottom of the board). A drag must travel a full cell to trigger; a release
    only a quarter cell, so both holds and quick flicks work.
    """
    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig | None = None):
        self.world = world
        self.event_bus = event_bus
        config = config or getattr(world, "config", None) or EngineConfig()
        self.drag_threshold = config.drag_threshold
        self.release_threshold = config.release_threshold
        self.cell_size: float = 1.0
        self.offset_x: float = 0.0
        self.offset_y: float = 0.0
        self._anchor: Optional[Tuple[float, float]] = None
        self.event_bus.subscribe(EVENT_POINTER_DOWN, self.on_pointer_down)
        self.event_bus.subscribe(EVENT_POINTER_MOVE, self.on_pointer_move)
        self.event_bus.subscribe(EVENT_POINTER_UP, self.on_pointer_up)
        self.event_bus.subscribe(EVENT_POINTER_CANCEL, self.on_pointer_cancel)

    @property
    def anchor(self) -> Optional[Tuple[float, float]]:
        return self._anchor

    def resize(self, cell_size: float, offset_x: float, offset_y: float) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size
        self.offset_x = offset_x
        self.offset_y = offset_y

    def notify_resize(self, width: float, height: float, x: float = 0.0, y: float = 0.0) -> None:
        size = get_grid(self.world).size
        cell_size, start_x, start_y = compute_board_geometry(width, height, size, x, y)
        self.resize(cell_size, start_x, start_y)

    def cell_at(self, x: float, y: float) -> Position:
        col = math.floor((x - self.offset_x) / self.cell_size)
        row = math.floor((y - self.offset_y) / self.cell_size)
        return row, col

    # ----------------------------------------------------------------- events
    def on_pointer_down(self, sender: Any, **payload: Any) -> None:
        x, y = payload.get("x"), payload.get("y")
        if x is None or y is None:
            return
        if not get_board_state(self.world).accepting_input:
            return
        if get_grid(self.world).in_bounds(*self.cell_at(x, y)):
            self._anchor = (float(x), float(y))

    def on_pointer_move(self, sender: Any, **payload: Any) -> None:
        x, y = payload.get("x"), payload.get("y")
        if x is None or y is None:
            return
        if self._try_swap(x, y, self.drag_threshold * self.cell_size):
            self._anchor = None

    def on_pointer_up(self, sender: Any, **payload: Any) -> None:
        x, y = payload.get("x"), payload.get("y")
        if x is not None and y is not None:
            self._try_swap(x, y, self.release_threshold * self.cell_size)
        self._anchor = None

    def on_pointer_cancel(self, sender: Any, **payload: Any) -> None:
        self._anchor = None

    def _try_swap(self, x: float, y: float, threshold: float) -> bool:
        """Emit a swap once the gesture passes ``threshold``; True when the gesture is consumed."""
        if self._anchor is None:
            return False
        anchor_x, anchor_y = self._anchor
        dx = x - anchor_x
        dy = y - anchor_y
        if abs(dx) <= threshold and abs(dy) <= threshold:
            return False
        src = self.cell_at(anchor_x, anchor_y)
        row, col = src
        if abs(dx) > abs(dy):
            col += 1 if dx > 0 else -1
        else:
            row += 1 if dy > 0 else -1
        dst = (row, col)
        grid = get_grid(self.world)
        if grid.in_bounds(*src) and grid.in_bounds(*dst):
            logger.debug("gesture mapped to swap %s -> %s", src, dst)
            self.event_bus.emit(EVENT_SWAP_REQUEST, src=src, dst=dst)
        return True
