from dataclasses import dataclass
from enum import Enum, auto

KIND_NONE = -1


class Effect(Enum):
    """Detonation behaviour carried by a token."""
    NONE = auto()
    ROW_CLEAR = auto()
    COLUMN_CLEAR = auto()
    AREA_BLAST = auto()
    WILDCARD = auto()


class Activity(Enum):
    IDLE = auto()
    FALLING = auto()
    DISAPPEARING = auto()
    SWAPPING = auto()


@dataclass(slots=True, eq=False)
class Token:
    """Pure grid-logic record for a single gem.

    Tokens compare by identity: two gems of the same kind are still different
    gems. A token without a kind (``KIND_NONE``) only exists as a wildcard.
    Presentation state lives elsewhere (see ``match3.ui.visuals``).
    """
    kind: int
    effect: Effect = Effect.NONE
    activity: Activity = Activity.IDLE

    def __post_init__(self) -> None:
        if self.kind < KIND_NONE:
            raise ValueError(f"Invalid token kind {self.kind}")
        if self.kind == KIND_NONE and self.effect is not Effect.WILDCARD:
            raise ValueError("A token without a kind must carry the wildcard effect")

    @property
    def is_idle(self) -> bool:
        return self.activity is Activity.IDLE

    @property
    def matchable(self) -> bool:
        return self.activity is Activity.IDLE and self.kind >= 0
