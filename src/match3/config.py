"""Construction-time configuration for the puzzle engine."""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from match3.constants import (
    DISAPPEAR_DURATION,
    DRAG_THRESHOLD,
    FALL_DURATION,
    GRID_SIZE,
    KINDS_COUNT,
    MATCH_LENGTH,
    RELEASE_THRESHOLD,
    SWAP_DURATION,
)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine settings.

    Every value is checked in ``__post_init__`` so a bad configuration fails
    when the engine is built rather than somewhere inside a tick.
    """

    grid_size: int = GRID_SIZE
    kinds_count: int = KINDS_COUNT
    points_per_token: int = 1
    special_chance: float = 0.0
    avoid_initial_matches: bool = True
    swap_duration: float = SWAP_DURATION
    fall_duration: float = FALL_DURATION
    disappear_duration: float = DISAPPEAR_DURATION
    drag_threshold: float = DRAG_THRESHOLD
    release_threshold: float = RELEASE_THRESHOLD

    def __post_init__(self) -> None:
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.kinds_count < MATCH_LENGTH:
            raise ValueError(
                f"kinds_count must be at least {MATCH_LENGTH}, got {self.kinds_count}"
            )
        if self.points_per_token < 0:
            raise ValueError(f"points_per_token must not be negative, got {self.points_per_token}")
        if not 0.0 <= self.special_chance <= 1.0:
            raise ValueError(f"special_chance must be within [0, 1], got {self.special_chance}")
        for name in ("swap_duration", "fall_duration", "disappear_duration",
                     "drag_threshold", "release_threshold"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(data))
