from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from match3.components.token import Activity, Token

Position = Tuple[int, int]


class AnimationKind(Enum):
    FALLING = "falling"
    DISAPPEARING = "disappearing"
    SWAPPING = "swapping"


ACTIVITY_FOR_KIND = {
    AnimationKind.FALLING: Activity.FALLING,
    AnimationKind.DISAPPEARING: Activity.DISAPPEARING,
    AnimationKind.SWAPPING: Activity.SWAPPING,
}


@dataclass(slots=True)
class Animation:
    """One animation group; the kind tag drives completion dispatch.

    ``reason`` is only meaningful for disappearing groups ("match", "chain",
    "reshuffle"). ``src``/``dst``/``revert`` are only set for swaps.
    """
    kind: AnimationKind
    tokens: Tuple[Token, ...]
    elapsed: float = 0.0
    reason: str = ""
    src: Optional[Position] = None
    dst: Optional[Position] = None
    revert: bool = False

    def progress(self, duration: float) -> float:
        if duration <= 0.0:
            return 1.0
        return min(1.0, self.elapsed / duration)
