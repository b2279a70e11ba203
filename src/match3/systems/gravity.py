from __future__ import annotations

from typing import List

from match3.components.grid import Grid, TokenFactory
from match3.components.token import Token


def settle_step(grid: Grid, factory: TokenFactory) -> List[Token]:
    """Move tokens one slot down into empty cells and spawn at the top.

    A single call moves each token above a gap by exactly one cell, so full
    settling takes repeated calls until nothing moves. Returns every moved or
    spawned token, bottom to top within each column.
    """
    falling: List[Token] = []
    top = grid.size - 1
    for col in range(grid.size):
        for row in range(grid.size):
            if grid.get(row, col) is not None:
                continue
            if row == top:
                token = factory(row, col)
            else:
                token = grid.take(row + 1, col)
            if token is not None:
                grid.place(row, col, token)
                falling.append(token)
    return falling
