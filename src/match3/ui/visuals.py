"""Renderer-owned presentation state derived from the active animations.

The simulation never reads any of this; a host renderer calls
``compute_visuals`` once per frame and draws each occupied cell with the
returned transform (in cell units).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from esper import World

from match3.components.animation import Animation, AnimationKind
from match3.components.duration import Duration
from match3.systems.board_ops import get_grid

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class TokenVisual:
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0


def compute_visuals(world: World) -> Dict[Position, TokenVisual]:
    grid = get_grid(world)
    visuals: Dict[Position, TokenVisual] = {
        pos: TokenVisual() for pos in grid.positions() if grid.get(*pos) is not None
    }
    for _, (animation, duration) in world.get_components(Animation, Duration):
        progress = animation.progress(duration.value)
        if animation.kind is AnimationKind.SWAPPING:
            _apply_swap(visuals, animation, progress)
            continue
        for token in animation.tokens:
            pos = grid.position_of(token)
            if pos is None:
                continue
            if animation.kind is AnimationKind.FALLING:
                # Tokens already sit in their target cell; draw them sliding in from above.
                visuals[pos] = TokenVisual(offset_y=1.0 - progress)
            else:
                visuals[pos] = TokenVisual(scale=max(0.0, 1.0 - progress))
    return visuals


def _apply_swap(visuals: Dict[Position, TokenVisual], animation: Animation, progress: float) -> None:
    if animation.src is None or animation.dst is None:
        return
    # A reverted swap travels to the partner cell and back within the same duration.
    travel = 1.0 - abs(1.0 - 2.0 * progress) if animation.revert else progress - 1.0
    (sr, sc), (dr, dc) = animation.src, animation.dst
    if animation.revert:
        # Grid untouched: each token starts in its own cell and heads toward the other.
        visuals[animation.src] = TokenVisual(offset_x=(dc - sc) * travel, offset_y=(dr - sr) * travel)
        visuals[animation.dst] = TokenVisual(offset_x=(sc - dc) * travel, offset_y=(sr - dr) * travel)
    else:
        # Grid already swapped: each token is drawn displaced back toward where it came from.
        visuals[animation.src] = TokenVisual(offset_x=(sc - dc) * travel, offset_y=(sr - dr) * travel)
        visuals[animation.dst] = TokenVisual(offset_x=(dc - sc) * travel, offset_y=(dr - sr) * travel)
