from typing import Iterable

from esper import World

from match3.components.animation import ACTIVITY_FOR_KIND, Animation, AnimationKind
from match3.components.duration import Duration
from match3.components.token import Token
from match3.config import EngineConfig


class AnimationFactory:
    def __init__(self, world: World, config: EngineConfig):
        self.world = world
        self.durations = {
            AnimationKind.FALLING: config.fall_duration,
            AnimationKind.DISAPPEARING: config.disappear_duration,
            AnimationKind.SWAPPING: config.swap_duration,
        }

    def create_group(self, kind: AnimationKind, tokens: Iterable[Token], **meta) -> int:
        """Create one animation entity and flag its tokens with the matching activity."""
        members = tuple(tokens)
        activity = ACTIVITY_FOR_KIND[kind]
        for token in members:
            token.activity = activity
        return self.world.create_entity(
            Animation(kind=kind, tokens=members, **meta),
            Duration(self.durations[kind]),
        )
