from __future__ import annotations

from typing import Any

from esper import World

from match3.events.bus import (
    EVENT_COMBO_CHANGED,
    EVENT_MATCH_PASS,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from match3.systems.board_ops import get_combo_score


class ScoreSystem:
    """Feeds resolution passes into the combo scorer and reports changes."""

    def __init__(self, world: World, event_bus: EventBus, *, points_per_token: int = 1) -> None:
        self.world = world
        self.event_bus = event_bus
        self.points_per_token = points_per_token
        self.event_bus.subscribe(EVENT_MATCH_PASS, self.on_match_pass)

    def on_match_pass(self, sender: Any, **payload: Any) -> None:
        count = int(payload.get("count", 0))
        combo_score = get_combo_score(self.world)
        previous = combo_score.combo
        combo = combo_score.register_match_pass(count)
        if combo != previous:
            self.event_bus.emit(EVENT_COMBO_CHANGED, combo=combo, previous=previous)
        if count == 0:
            return
        delta = combo_score.award(count * self.points_per_token)
        if delta:
            self.event_bus.emit(
                EVENT_SCORE_CHANGED,
                score=combo_score.score,
                delta=delta,
                combo=combo,
            )
