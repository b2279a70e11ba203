"""Sequencer phase resource describing whether the board accepts input."""
from dataclasses import dataclass
from enum import Enum, auto


class BoardPhase(Enum):
    """SETTLING evaluates the board each tick, ANIMATING waits on an animation group."""
    SETTLING = auto()
    ANIMATING = auto()
    IDLE = auto()


@dataclass(slots=True)
class BoardState:
    """Singleton component storing the sequencer phase."""
    phase: BoardPhase = BoardPhase.SETTLING

    @property
    def accepting_input(self) -> bool:
        return self.phase is BoardPhase.IDLE
