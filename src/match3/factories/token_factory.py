from __future__ import annotations

import random

from match3.components.token import KIND_NONE, Effect, Token

SPECIAL_EFFECTS = (Effect.ROW_CLEAR, Effect.COLUMN_CLEAR, Effect.AREA_BLAST, Effect.WILDCARD)


class RandomTokenFactory:
    """Default token source: uniform kind, optional rare special tokens.

    Callable as ``factory(row, col)``. The position is accepted for interface
    parity with custom factories; the default draw ignores it.
    """

    def __init__(self, kinds_count: int, rng: random.Random | None = None, *, special_chance: float = 0.0):
        self.kinds_count = kinds_count
        self.random = rng or random.Random()
        self.special_chance = special_chance

    def __call__(self, row: int, col: int) -> Token:
        # Skip the extra draw entirely when specials are off so seeded streams stay aligned.
        if self.special_chance > 0.0 and self.random.random() < self.special_chance:
            effect = self.random.choice(SPECIAL_EFFECTS)
            if effect is Effect.WILDCARD:
                return Token(kind=KIND_NONE, effect=Effect.WILDCARD)
            return Token(kind=self.random.randrange(self.kinds_count), effect=effect)
        return Token(kind=self.random.randrange(self.kinds_count))
