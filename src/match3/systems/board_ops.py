from __future__ import annotations

from typing import List, Optional, Tuple

from esper import World

from match3.components.board_state import BoardState
from match3.components.combo_score import ComboScore
from match3.components.grid import Grid
from match3.components.token import Effect, Token
from match3.constants import MATCH_LENGTH

Position = Tuple[int, int]


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise RuntimeError("Grid component not found")


def get_board_state(world: World) -> BoardState:
    for _, state in world.get_component(BoardState):
        return state
    raise RuntimeError("BoardState component not found")


def get_combo_score(world: World) -> ComboScore:
    for _, combo in world.get_component(ComboScore):
        return combo
    raise RuntimeError("ComboScore component not found")


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def _kind_after_swap(grid: Grid, pos: Position, src: Position, dst: Position) -> Optional[int]:
    if pos == src:
        pos = dst
    elif pos == dst:
        pos = src
    token = grid.get(*pos)
    if token is None or not token.matchable:
        return None
    return token.kind


def _has_line_match(grid: Grid, pos: Position, src: Position, dst: Position) -> bool:
    """Return True if, with src/dst virtually swapped, a run passes through pos."""
    kind = _kind_after_swap(grid, pos, src, dst)
    if kind is None:
        return False
    row, col = pos
    for d_row, d_col in ((0, 1), (1, 0)):
        run = 1
        for sign in (-1, 1):
            step = 1
            while True:
                neighbour = (row + sign * step * d_row, col + sign * step * d_col)
                if not grid.in_bounds(*neighbour):
                    break
                if _kind_after_swap(grid, neighbour, src, dst) != kind:
                    break
                run += 1
                step += 1
        if run >= MATCH_LENGTH:
            return True
    return False


def creates_match_after_swap(grid: Grid, src: Position, dst: Position) -> bool:
    """Predict whether swapping src/dst would create a run, without touching the grid."""
    if not (grid.in_bounds(*src) and grid.in_bounds(*dst)):
        return False
    return _has_line_match(grid, src, src, dst) or _has_line_match(grid, dst, src, dst)


def _is_wildcard(token: Optional[Token]) -> bool:
    return token is not None and token.effect is Effect.WILDCARD


def is_legal_swap(grid: Grid, src: Position, dst: Position) -> bool:
    """A swap is legal when it makes a run or moves a wildcard."""
    if creates_match_after_swap(grid, src, dst):
        return True
    return _is_wildcard(grid.get(*src)) or _is_wildcard(grid.get(*dst))


def find_valid_swaps(grid: Grid) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps (right and up neighbours) that would produce a match."""
    swaps: List[Tuple[Position, Position]] = []
    for row, col in grid.positions():
        pos = (row, col)
        for neighbour in ((row, col + 1), (row + 1, col)):
            if grid.in_bounds(*neighbour) and creates_match_after_swap(grid, pos, neighbour):
                swaps.append((pos, neighbour))
    return swaps


def is_stalemate(grid: Grid) -> bool:
    """True when no wildcard is on the board and no single adjacent swap makes a run."""
    if any(_is_wildcard(token) for token in grid.tokens()):
        return False
    for row, col in grid.positions():
        for neighbour in ((row, col + 1), (row + 1, col)):
            if grid.in_bounds(*neighbour) and creates_match_after_swap(grid, (row, col), neighbour):
                return False
    return True
