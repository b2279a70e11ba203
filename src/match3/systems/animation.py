from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from esper import World

from match3.components.animation import Animation, AnimationKind
from match3.components.duration import Duration
from match3.components.token import Activity, Token
from match3.config import EngineConfig
from match3.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EventBus
from match3.factories.animation_factory import AnimationFactory
from match3.systems.board_ops import get_grid

logger = logging.getLogger(__name__)


class AnimationSystem:
    """Drives timing of animation groups; each group is its own entity.

    Groups always run to completion. The sequencer advances them explicitly
    through ``update`` so evaluation never races with completion callbacks.
    """
    def __init__(self, world: World, event_bus: EventBus, config: EngineConfig):
        self.world = world
        self.event_bus = event_bus
        self.factory = AnimationFactory(world, config)

    def start(self, kind: AnimationKind, tokens: Iterable[Token], **meta) -> int:
        entity = self.factory.create_group(kind, tokens, **meta)
        animation = self.world.component_for_entity(entity, Animation)
        grid = get_grid(self.world)
        positions = [grid.position_of(token) for token in animation.tokens]
        logger.debug("animation %s started with %d tokens", kind.value, len(animation.tokens))
        self.event_bus.emit(
            EVENT_ANIMATION_START,
            kind=kind,
            entity=entity,
            positions=[pos for pos in positions if pos is not None],
        )
        return entity

    def has_active(self) -> bool:
        return any(True for _ in self.world.get_component(Animation))

    def active(self) -> List[Tuple[int, Animation]]:
        return list(self.world.get_component(Animation))

    def update(self, dt: float) -> None:
        # Snapshot first: groups started by completion handlers begin next frame.
        for entity, (animation, duration) in list(self.world.get_components(Animation, Duration)):
            animation.elapsed += dt
            if animation.elapsed >= duration.value:
                self._finish(entity, animation)

    def _finish(self, entity: int, animation: Animation) -> None:
        for token in animation.tokens:
            token.activity = Activity.IDLE
        self.world.delete_entity(entity, immediate=True)
        self.event_bus.emit(
            EVENT_ANIMATION_COMPLETE,
            kind=animation.kind,
            entity=entity,
            animation=animation,
        )
