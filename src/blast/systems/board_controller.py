import logging
from typing import Callable, Dict, List, Optional, Tuple

from esper import World

from blast.components.board import Board
from blast.components.board_phase import BoardPhase, BoardPhaseState
from blast.config import BoardConfig
from blast.errors import BoardInvariantError
from blast.events.bus import (
    EventBus,
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_DEADLOCKED,
    EVENT_BOARD_SETTLED,
    EVENT_MATCH_CLEARED,
    EVENT_PHASE_CHANGED,
    EVENT_TICK,
    EVENT_TIER_CHANGED,
    EVENT_TILE_CLICK,
    EVENT_TILE_CREATED,
    EVENT_TILE_MOVED,
    EVENT_TILE_REMOVED,
)
from blast.systems.board_ops import (
    clear_board,
    color_of,
    create_full_board,
    destroy_tile,
    get_board_entity,
    get_tile_at,
    position_of,
)
from blast.systems.compaction import compact, refill
from blast.systems.connectivity import component_positions, flood_fill
from blast.systems.match_classifier import BoardEvaluation, evaluate_board
from blast.world import world_random

logger = logging.getLogger(__name__)

# Warn about unlucky boards every this many consecutive recreations.
RECREATE_WARN_INTERVAL = 10


class BoardController:
    """Owns the board and drives it through its phases.

    Work for a phase runs when the phase is entered; the controller then waits
    the phase's settle delay before moving on. Time only passes through
    ``advance`` (or ``tick`` events), so the presentation layer decides how
    fast the board settles. Input is accepted only in ``AWAIT_INPUT``.
    """

    def __init__(self, world: World, event_bus: EventBus, config: Optional[BoardConfig] = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config or BoardConfig()
        self.rng = world_random(world)
        if get_board_entity(world) is not None:
            raise BoardInvariantError("World already holds a board")
        self.board_entity = self.world.create_entity(
            Board(rows=self.config.rows, cols=self.config.cols),
            BoardPhaseState(),
        )
        self.last_evaluation: Optional[BoardEvaluation] = None
        self._after_evaluate = BoardPhase.SETTLE
        self._entry_handlers: Dict[BoardPhase, Callable[[], None]] = {
            BoardPhase.EVALUATE: self._on_enter_evaluate,
            BoardPhase.COMPACT: self._on_enter_compact,
            BoardPhase.REFILL: self._on_enter_refill,
            BoardPhase.RECREATE: self._on_enter_recreate,
        }
        self._advancing = False
        self._create_board(animated=False)
        self._enter(BoardPhase.EVALUATE)
        self.advance(0.0)
        # Listeners may emit tick synchronously; only hear them once the board is settled.
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    @property
    def state(self) -> BoardPhaseState:
        return self.world.component_for_entity(self.board_entity, BoardPhaseState)

    @property
    def phase(self) -> BoardPhase:
        return self.state.phase

    @property
    def input_allowed(self) -> bool:
        return self.state.input_allowed

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_tick(self, sender, **kwargs):
        self.advance(kwargs.get('dt', 1 / 60))

    def on_tile_click(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None:
            return
        self.select_tile(x, y)

    def on_board_changed(self, sender, **kwargs):
        self.request_evaluation()

    # ------------------------------------------------------------------
    # Public entry points
    # ------------------------------------------------------------------
    def select_tile(self, x: int, y: int) -> bool:
        """Try to blast the group at ``(x, y)``. Returns False when ignored."""
        state = self.state
        if not state.input_allowed or state.phase is not BoardPhase.AWAIT_INPUT:
            logger.debug("Selection at (%s, %s) dropped during %s", x, y, state.phase)
            return False
        if get_tile_at(self.world, x, y) is None:
            return False
        component = flood_fill(self.world, x, y)
        if len(component) < self.config.min_run:
            logger.debug("Selection at (%s, %s) too small (%d)", x, y, len(component))
            return False
        state.input_allowed = False
        state.elapsed = 0.0
        self._remove_component(component)
        self._enter(BoardPhase.REMOVE)
        self.advance(0.0)
        return True

    def request_evaluation(self) -> bool:
        """Re-run evaluation (and deadlock handling) on an idle board.

        Meant for tools that edit tile colors in place. Ignored while a cycle
        is running.
        """
        state = self.state
        if state.phase is not BoardPhase.AWAIT_INPUT:
            return False
        state.input_allowed = False
        state.elapsed = 0.0
        self._enter(BoardPhase.EVALUATE)
        self.advance(0.0)
        return True

    def advance(self, dt: float) -> None:
        """Let ``dt`` seconds pass and run every phase transition they cover."""
        state = self.state
        if state.phase is None or state.phase is BoardPhase.AWAIT_INPUT:
            return
        state.elapsed += max(0.0, float(dt))
        if self._advancing:
            # Re-entered from a listener; the outer loop picks up the time.
            return
        self._advancing = True
        try:
            while state.phase is not BoardPhase.AWAIT_INPUT:
                delay = self._phase_delay(state.phase)
                if state.elapsed < delay:
                    break
                state.elapsed -= delay
                self._enter(self._leave(state.phase))
        finally:
            self._advancing = False

    # ------------------------------------------------------------------
    # Phase machine
    # ------------------------------------------------------------------
    def _phase_delay(self, phase: BoardPhase) -> float:
        timings = self.config.timings
        if phase is BoardPhase.REMOVE:
            return timings.remove_duration
        if phase is BoardPhase.COMPACT:
            return timings.drop_wait_duration
        if phase is BoardPhase.REFILL:
            return timings.refill_wait_duration
        if phase is BoardPhase.RECREATE:
            return timings.recreate_wait_duration
        if phase is BoardPhase.SETTLE:
            return timings.evaluate_settle_duration
        return 0.0

    def _leave(self, phase: BoardPhase) -> BoardPhase:
        if phase is BoardPhase.REMOVE:
            return BoardPhase.COMPACT
        if phase is BoardPhase.COMPACT:
            return BoardPhase.REFILL
        if phase is BoardPhase.REFILL:
            return BoardPhase.EVALUATE
        if phase is BoardPhase.EVALUATE:
            return self._after_evaluate
        if phase is BoardPhase.RECREATE:
            self._create_board(animated=True)
            return BoardPhase.EVALUATE
        if phase is BoardPhase.SETTLE:
            return BoardPhase.AWAIT_INPUT
        raise BoardInvariantError(f"No transition out of {phase}")

    def _enter(self, phase: BoardPhase) -> None:
        state = self.state
        previous = state.phase
        state.phase = phase
        if phase is BoardPhase.AWAIT_INPUT:
            # Listeners of the notification below may select right away.
            state.elapsed = 0.0
            state.input_allowed = True
        logger.debug("Board phase %s -> %s", previous, phase)
        self.event_bus.emit(EVENT_PHASE_CHANGED, previous=previous, phase=phase)
        handler = self._entry_handlers.get(phase)
        if handler is not None:
            handler()

    def _on_enter_evaluate(self) -> None:
        state = self.state
        evaluation = evaluate_board(self.world, self.config.min_run, self.config.thresholds)
        self.last_evaluation = evaluation
        for entity, tier in evaluation.tier_changes:
            self.event_bus.emit(
                EVENT_TIER_CHANGED,
                tile=entity,
                tier=tier,
                position=position_of(self.world, entity),
            )
        if evaluation.playable:
            state.recreate_attempts = 0
            self._after_evaluate = BoardPhase.SETTLE
            self.event_bus.emit(
                EVENT_BOARD_SETTLED,
                horizontal=evaluation.horizontal_match,
                vertical=evaluation.vertical_match,
            )
            return
        state.recreate_attempts += 1
        logger.info("No moves left; recreating board (attempt %d)", state.recreate_attempts)
        if state.recreate_attempts % RECREATE_WARN_INTERVAL == 0:
            logger.warning(
                "Board deadlocked %d times in a row (%dx%d, %d colors)",
                state.recreate_attempts,
                self.config.rows,
                self.config.cols,
                self.config.color_count,
            )
        self._after_evaluate = BoardPhase.RECREATE
        self.event_bus.emit(EVENT_BOARD_DEADLOCKED, attempt=state.recreate_attempts)

    def _on_enter_compact(self) -> None:
        speed = self.config.timings.drop_speed
        for move in compact(self.world):
            self.event_bus.emit(
                EVENT_TILE_MOVED,
                tile=move.tile,
                src=move.source,
                dst=move.target,
                duration=move.distance / speed,
            )

    def _on_enter_refill(self) -> None:
        speed = self.config.timings.drop_speed
        for spawned in refill(self.world, self.config.color_count, self.rng):
            self.event_bus.emit(
                EVENT_TILE_CREATED,
                tile=spawned.tile,
                color=spawned.color,
                position=spawned.position,
                animated=True,
                source="refill",
                spawn_offset=spawned.spawn_offset,
                duration=spawned.spawn_offset / speed,
            )

    def _on_enter_recreate(self) -> None:
        for entity, position in clear_board(self.world):
            self.event_bus.emit(
                EVENT_TILE_REMOVED,
                tile=entity,
                position=position,
                animated=True,
                reason="recreate",
            )

    # ------------------------------------------------------------------
    # Board mutation helpers
    # ------------------------------------------------------------------
    def _create_board(self, animated: bool) -> None:
        duration = self.config.timings.creation_duration if animated else 0.0
        for entity in create_full_board(self.world, self.config.color_count, self.rng):
            self.event_bus.emit(
                EVENT_TILE_CREATED,
                tile=entity,
                color=color_of(self.world, entity),
                position=position_of(self.world, entity),
                animated=animated,
                source="board",
                spawn_offset=0,
                duration=duration,
            )

    def _remove_component(self, component: set[int]) -> None:
        positions: List[Tuple[int, int]] = component_positions(self.world, component)
        color = color_of(self.world, next(iter(component)))
        for x, y in positions:
            entity = destroy_tile(self.world, x, y)
            self.event_bus.emit(
                EVENT_TILE_REMOVED,
                tile=entity,
                position=(x, y),
                animated=True,
                reason="selection",
            )
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, size=len(positions), color=color)
