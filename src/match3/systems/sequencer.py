from __future__ import annotations

import logging
from typing import Any, List, Tuple

from esper import World

from match3.components.animation import Animation, AnimationKind
from match3.components.board_state import BoardPhase
from match3.components.token import Token
from match3.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_BOARD_STABLE,
    EVENT_CHAIN_TRIGGERED,
    EVENT_GRAVITY_APPLIED,
    EVENT_INPUT_STATE_CHANGED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_MATCH_PASS,
    EVENT_STALEMATE,
    EVENT_SWAP_INVALID,
    EVENT_SWAP_REQUEST,
    EVENT_SWAP_VALID,
    EVENT_TICK,
    EVENT_TOKENS_LANDED,
    EventBus,
)
from match3.systems.animation import AnimationSystem
from match3.systems.board_ops import (
    get_board_state,
    get_combo_score,
    get_grid,
    is_adjacent,
    is_legal_swap,
    is_stalemate,
)
from match3.systems.effects import resolve_effects
from match3.systems.gravity import settle_step
from match3.systems.match import find_matches

logger = logging.getLogger(__name__)

Position = Tuple[int, int]

REASON_MATCH = "match"
REASON_CHAIN = "chain"
REASON_RESHUFFLE = "reshuffle"


class SequencerSystem:
    """Orchestrates gravity, match resolution and stalemate handling per tick.

    While any animation group is in flight nothing is evaluated and input is
    refused. Otherwise each tick performs at most one of: a gravity step, a
    match pass, a stalemate clear. When none applies the board is idle and
    accepts the next swap.
    """

    def __init__(self, world: World, event_bus: EventBus, animation_system: AnimationSystem):
        self.world = world
        self.event_bus = event_bus
        self.animations = animation_system
        self.token_factory = getattr(world, "token_factory")
        self._needs_landing = False
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self.on_animation_complete)

    @property
    def phase(self) -> BoardPhase:
        return get_board_state(self.world).phase

    @property
    def can_move(self) -> bool:
        return get_board_state(self.world).accepting_input

    # ------------------------------------------------------------------ ticks
    def on_tick(self, sender: Any, **payload: Any) -> None:
        self.tick(payload.get("dt", 1 / 60))

    def tick(self, dt: float) -> None:
        self.animations.update(dt)
        if self.animations.has_active():
            return
        self._update_field_state()

    def _update_field_state(self) -> None:
        grid = get_grid(self.world)

        falling = settle_step(grid, self.token_factory)
        if falling:
            self._needs_landing = True
            self.event_bus.emit(EVENT_GRAVITY_APPLIED, count=len(falling))
            self._start(AnimationKind.FALLING, falling)
            return

        if self._needs_landing:
            self._needs_landing = False
            self.event_bus.emit(EVENT_TOKENS_LANDED)

        scan = find_matches(grid)
        matched = resolve_effects(grid, scan)
        if matched:
            positions = self._positions(matched)
            logger.debug("match pass: %d runs, %d tokens", scan.count, len(matched))
            self.event_bus.emit(
                EVENT_MATCH_FOUND,
                rows=list(scan.rows),
                columns=list(scan.columns),
                positions=positions,
                count=len(matched),
                combo=get_combo_score(self.world).combo,
            )
            self._start(AnimationKind.DISAPPEARING, matched, reason=REASON_MATCH)
            return
        self.event_bus.emit(EVENT_MATCH_PASS, count=0)

        if is_stalemate(grid):
            everything = grid.tokens()
            logger.info("stalemate detected, clearing %d tokens", len(everything))
            self.event_bus.emit(EVENT_STALEMATE, positions=self._positions(everything))
            self._start(AnimationKind.DISAPPEARING, everything, reason=REASON_RESHUFFLE)
            return

        self._set_phase(BoardPhase.IDLE)

    # ------------------------------------------------------------------ swaps
    def on_swap_request(self, sender: Any, **payload: Any) -> None:
        src = payload.get("src")
        dst = payload.get("dst")
        if not src or not dst:
            return
        self.request_swap(tuple(src), tuple(dst))

    def request_swap(self, src: Position, dst: Position) -> bool:
        """Start a swap animation; returns True when the swap was legal and applied."""
        if not self.can_move:
            logger.debug("swap %s -> %s ignored, board busy", src, dst)
            return False
        grid = get_grid(self.world)
        if not (grid.in_bounds(*src) and grid.in_bounds(*dst)):
            raise ValueError(f"Swap {src} -> {dst} leaves the grid")
        if not is_adjacent(src, dst):
            raise ValueError(f"Swap {src} -> {dst} is not between adjacent cells")

        legal = is_legal_swap(grid, src, dst)
        if legal:
            grid.swap(src, dst)
        tokens = [token for token in (grid.get(*src), grid.get(*dst)) if token is not None]
        logger.debug("swap %s -> %s %s", src, dst, "accepted" if legal else "rejected")
        self.event_bus.emit(EVENT_SWAP_VALID if legal else EVENT_SWAP_INVALID, src=src, dst=dst)
        self._start(AnimationKind.SWAPPING, tokens, src=src, dst=dst, revert=not legal)
        return legal

    # ------------------------------------------------------------- completion
    def on_animation_complete(self, sender: Any, **payload: Any) -> None:
        kind = payload.get("kind")
        animation: Animation | None = payload.get("animation")
        if animation is None:
            return
        if kind is AnimationKind.DISAPPEARING:
            self._after_disappear(animation)
        elif kind in (AnimationKind.FALLING, AnimationKind.SWAPPING):
            # Nothing to apply: the grid already moved; next evaluation runs on a free tick.
            self._set_phase(BoardPhase.SETTLING)

    def _after_disappear(self, animation: Animation) -> None:
        grid = get_grid(self.world)
        positions = self._positions(animation.tokens)
        chained = grid.remove_and_collect_chain(animation.tokens)
        self._set_phase(BoardPhase.SETTLING)
        if animation.reason != REASON_RESHUFFLE:
            count = len(animation.tokens)
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                positions=positions,
                count=count,
                reason=animation.reason,
            )
            self.event_bus.emit(EVENT_MATCH_PASS, count=count)
        if chained:
            chain_positions = self._positions(chained)
            logger.debug("chain detonation caught %d tokens", len(chained))
            self.event_bus.emit(EVENT_CHAIN_TRIGGERED, positions=chain_positions, count=len(chained))
            self._start(AnimationKind.DISAPPEARING, chained, reason=REASON_CHAIN)

    # ---------------------------------------------------------------- helpers
    def _start(self, kind: AnimationKind, tokens: List[Token] | Tuple[Token, ...], **meta: Any) -> int:
        self._set_phase(BoardPhase.ANIMATING)
        return self.animations.start(kind, tokens, **meta)

    def _set_phase(self, phase: BoardPhase) -> None:
        state = get_board_state(self.world)
        previous = state.phase
        if previous is phase:
            return
        state.phase = phase
        logger.debug("board phase %s -> %s", previous.name, phase.name)
        if phase is BoardPhase.IDLE:
            self.event_bus.emit(EVENT_INPUT_STATE_CHANGED, accepting=True)
            self.event_bus.emit(EVENT_BOARD_STABLE)
        elif previous is BoardPhase.IDLE:
            self.event_bus.emit(EVENT_INPUT_STATE_CHANGED, accepting=False)

    def _positions(self, tokens) -> List[Position]:
        grid = get_grid(self.world)
        found = (grid.position_of(token) for token in tokens)
        return sorted(pos for pos in found if pos is not None)
