from __future__ import annotations

from typing import Dict, List

from match3.components.grid import Grid
from match3.components.token import Effect, Token
from match3.systems.match import MatchScan


def assign_intersection_effects(grid: Grid, scan: MatchScan) -> None:
    """Turn the token where a row match crosses a column match into an area blast.

    Later pairs overwrite earlier ones; the order is row matches outer,
    column matches inner.
    """
    for row_match in scan.rows:
        row, _ = row_match.origin
        for col_match in scan.columns:
            _, col = col_match.origin
            if row_match.contains((row, col)) and col_match.contains((row, col)):
                token = grid.get(row, col)
                if token is not None:
                    token.effect = Effect.AREA_BLAST


def resolve_effects(grid: Grid, scan: MatchScan) -> List[Token]:
    """Assign intersection effects, then return the matched set (row matches first)."""
    assign_intersection_effects(grid, scan)
    matched: Dict[Token, None] = {}
    for match in [*scan.rows, *scan.columns]:
        for pos in match.cells():
            token = grid.get(*pos)
            if token is not None:
                matched.setdefault(token, None)
    return list(matched)
