from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

Position = Tuple[int, int]


class Axis(Enum):
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True, slots=True)
class Match:
    """A maximal run of equal-kind idle tokens.

    ``origin`` is the run's first cell: the leftmost cell for a row match,
    the bottom cell for a column match.
    """
    origin: Position
    axis: Axis
    length: int

    def cells(self) -> List[Position]:
        row, col = self.origin
        if self.axis is Axis.ROW:
            return [(row, col + offset) for offset in range(self.length)]
        return [(row + offset, col) for offset in range(self.length)]

    def contains(self, pos: Position) -> bool:
        row, col = self.origin
        r, c = pos
        if self.axis is Axis.ROW:
            return r == row and col <= c < col + self.length
        return c == col and row <= r < row + self.length
