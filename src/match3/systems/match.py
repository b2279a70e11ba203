from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from match3.components.grid import Grid
from match3.components.match import Axis, Match, Position
from match3.constants import MATCH_LENGTH


@dataclass(slots=True)
class MatchScan:
    rows: List[Match] = field(default_factory=list)
    columns: List[Match] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.rows or self.columns)

    @property
    def count(self) -> int:
        return len(self.rows) + len(self.columns)


def find_matches(grid: Grid) -> MatchScan:
    """Detect every maximal run of at least ``MATCH_LENGTH`` idle equal-kind tokens."""
    return MatchScan(rows=_scan(grid, Axis.ROW), columns=_scan(grid, Axis.COLUMN))


def _scan(grid: Grid, axis: Axis) -> List[Match]:
    matches: List[Match] = []
    for outer in range(grid.size):
        run_kind: Optional[int] = None
        run_start: Position = (outer, 0)
        run_length = 0
        for inner in range(grid.size):
            pos = (outer, inner) if axis is Axis.ROW else (inner, outer)
            token = grid.get(*pos)
            kind = token.kind if token is not None and token.matchable else None
            if kind is not None and kind == run_kind:
                run_length += 1
                continue
            if run_length >= MATCH_LENGTH:
                matches.append(Match(origin=run_start, axis=axis, length=run_length))
            run_kind = kind
            run_start = pos
            run_length = 1 if kind is not None else 0
        if run_length >= MATCH_LENGTH:
            matches.append(Match(origin=run_start, axis=axis, length=run_length))
    return matches
