from __future__ import annotations

import random
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from match3.components.token import Effect, Token
from match3.constants import AREA_BLAST_RADIUS, MATCH_LENGTH, MAX_SPAWN_ATTEMPTS

Position = Tuple[int, int]
TokenFactory = Callable[[int, int], Token]


class Grid:
    """Square board of cells, each holding at most one token.

    Row 0 is the bottom row; new tokens enter at row ``size - 1``. Reads are
    soft-guarded (out of bounds gives ``None``) because gesture mapping and
    chain expansion probe neighbours freely. Writes are not: a bad coordinate,
    an occupied cell or a token already on the board raises immediately.
    """

    def __init__(self, size: int, kinds_count: int, rng: random.Random | None = None):
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")
        if kinds_count < MATCH_LENGTH:
            raise ValueError(f"kinds_count must be at least {MATCH_LENGTH}, got {kinds_count}")
        self.size = size
        self.kinds_count = kinds_count
        self.random = rng or random.Random()
        self._cells: List[List[Optional[Token]]] = [[None] * size for _ in range(size)]
        self._index: Dict[Token, Position] = {}

    # ------------------------------------------------------------------ reads
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Optional[Token]:
        if not self.in_bounds(row, col):
            return None
        return self._cells[row][col]

    def position_of(self, token: Token) -> Optional[Position]:
        return self._index.get(token)

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield row, col

    def tokens(self) -> List[Token]:
        """All tokens in row-major scan order."""
        return [token for row in self._cells for token in row if token is not None]

    def empty_cells(self) -> List[Position]:
        return [pos for pos in self.positions() if self._cells[pos[0]][pos[1]] is None]

    def __len__(self) -> int:
        return len(self._index)

    # ----------------------------------------------------------------- writes
    def _require_in_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell {(row, col)} is outside a {self.size}x{self.size} grid")

    def place(self, row: int, col: int, token: Token) -> None:
        self._require_in_bounds(row, col)
        if self._cells[row][col] is not None:
            raise ValueError(f"Cell {(row, col)} is already occupied")
        if token in self._index:
            raise ValueError(f"Token is already on the grid at {self._index[token]}")
        if token.kind >= self.kinds_count:
            raise ValueError(f"Token kind {token.kind} is outside a board of {self.kinds_count} kinds")
        self._cells[row][col] = token
        self._index[token] = (row, col)

    def take(self, row: int, col: int) -> Optional[Token]:
        self._require_in_bounds(row, col)
        token = self._cells[row][col]
        if token is not None:
            self._cells[row][col] = None
            del self._index[token]
        return token

    def clear(self) -> None:
        self._cells = [[None] * self.size for _ in range(self.size)]
        self._index.clear()

    def swap(self, a: Position, b: Position) -> None:
        """Exchange two cells unconditionally; legality is the caller's business."""
        self._require_in_bounds(*a)
        self._require_in_bounds(*b)
        (ar, ac), (br, bc) = a, b
        first, second = self._cells[ar][ac], self._cells[br][bc]
        self._cells[ar][ac], self._cells[br][bc] = second, first
        if first is not None:
            self._index[first] = b
        if second is not None:
            self._index[second] = a

    def populate(self, factory: TokenFactory, *, avoid_matches: bool = True) -> List[Token]:
        """Fill every empty cell from ``factory``.

        With ``avoid_matches`` a draw that would complete a run with the two
        cells to its left or the two cells below it is redrawn, up to a fixed
        number of attempts.
        """
        spawned: List[Token] = []
        for row, col in self.positions():
            if self._cells[row][col] is not None:
                continue
            token = factory(row, col)
            if avoid_matches:
                attempts = 1
                while attempts < MAX_SPAWN_ATTEMPTS and self._completes_run(row, col, token):
                    token = factory(row, col)
                    attempts += 1
            self.place(row, col, token)
            spawned.append(token)
        return spawned

    def _completes_run(self, row: int, col: int, token: Token) -> bool:
        if not token.matchable:
            return False
        for d_row, d_col in ((0, -1), (-1, 0)):
            neighbours = [self.get(row + d_row * step, col + d_col * step) for step in (1, 2)]
            if all(n is not None and n.matchable and n.kind == token.kind for n in neighbours):
                return True
        return False

    # ------------------------------------------------------------- detonation
    def remove_and_collect_chain(self, tokens: Iterable[Token]) -> List[Token]:
        """Clear the cells of ``tokens`` and gather the idle tokens their effects reach.

        Returns the deduplicated union of chained tokens in discovery order.
        Tokens removed by this call are never part of the result.
        """
        doomed = set(tokens)
        removed: List[Tuple[Position, Token]] = []
        for pos in list(self.positions()):
            token = self._cells[pos[0]][pos[1]]
            if token is not None and token in doomed:
                self.take(*pos)
                removed.append((pos, token))

        chained: Dict[Token, None] = {}
        for (row, col), token in removed:
            for victim in self._effect_targets(row, col, token.effect):
                chained.setdefault(victim, None)
        return list(chained)

    def _effect_targets(self, row: int, col: int, effect: Effect) -> List[Token]:
        if effect is Effect.ROW_CLEAR:
            cells = [(row, c) for c in range(self.size)]
        elif effect is Effect.COLUMN_CLEAR:
            cells = [(r, col) for r in range(self.size)]
        elif effect is Effect.AREA_BLAST:
            lo_r, hi_r = max(0, row - AREA_BLAST_RADIUS), min(self.size - 1, row + AREA_BLAST_RADIUS)
            lo_c, hi_c = max(0, col - AREA_BLAST_RADIUS), min(self.size - 1, col + AREA_BLAST_RADIUS)
            cells = [(r, c) for r in range(lo_r, hi_r + 1) for c in range(lo_c, hi_c + 1)]
        elif effect is Effect.WILDCARD:
            target_kind = self.random.randrange(self.kinds_count)
            return [
                token for token in self.tokens()
                if token.is_idle and token.kind == target_kind
            ]
        else:
            return []
        targets: List[Token] = []
        for r, c in cells:
            token = self.get(r, c)
            if token is not None and token.is_idle:
                targets.append(token)
        return targets
