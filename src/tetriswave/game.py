"""Simulation core: gravity, lock delay, scoring and end-of-run detection.

:class:`GameCore` owns a :class:`~tetriswave.game_state.GameState` and is the
only thing that mutates it.  The host drives it in two ways:

* once per display frame with :meth:`GameCore.tick`, passing the elapsed time
  in milliseconds, and
* synchronously from its input layer through the mutators (``move_left``,
  ``rotate_cw``, ``hard_drop`` ...) or :meth:`GameCore.apply` with an
  :class:`Intent`.

Collaborators never see the state object itself.  They read a
:class:`Snapshot` and subscribe to :class:`~tetriswave.events.GameEvent`
notifications.

Lock delay works as a small state machine.  A piece that cannot fall any
further becomes *grounded*; while grounded, gravity stops and a lock timer
runs instead.  Moving or rotating a grounded piece resets the timer, but only
``max_lock_resets`` times per piece.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
import random
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import DEFAULT_CONFIG, GameConfig
from .events import EventKind, GameEvent, Listener
from .game_state import GameState
from .tetromino import Piece, rotate_clockwise
from .utils import drop_interval_ms, ghost_row, line_clear_points, wave_for_lines


LOGGER = logging.getLogger(__name__)


class Intent(Enum):
    """Discrete player inputs, each mapped to exactly one core mutator."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE_CW = "rotate_cw"
    HOLD = "hold"


@dataclass(frozen=True)
class PieceView:
    """Immutable copy of a piece for renderers."""

    shape: Tuple[Tuple[int, ...], ...]
    color_id: int
    x: int
    y: int

    @classmethod
    def of(cls, piece: Optional[Piece]) -> Optional["PieceView"]:
        if piece is None:
            return None
        return cls(tuple(tuple(row) for row in piece.shape), piece.color_id, piece.x, piece.y)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the simulation after a frame or an input."""

    board: NDArray[np.uint8]
    current: Optional[PieceView]
    next: Optional[PieceView]
    hold: Optional[PieceView]
    score: int
    lines: int
    wave: int
    drop_interval_ms: float
    combo: int
    running: bool
    game_over: bool
    reached_target: bool
    ghost_y: Optional[int]


class GameCore:
    """Falling-block simulation driven by an external frame clock."""

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.config = config
        if rng is None:
            rng = random.Random(seed)
        self._state = GameState(config=config, rng=rng)
        self._listeners: List[Listener] = []
        self._handlers: Dict[Intent, Callable[[], bool]] = {
            Intent.MOVE_LEFT: self.move_left,
            Intent.MOVE_RIGHT: self.move_right,
            Intent.SOFT_DROP: self.soft_drop,
            Intent.HARD_DROP: self.hard_drop,
            Intent.ROTATE_CW: self.rotate_cw,
            Intent.HOLD: self.hold,
        }

    # ------------------------------------------------------------------
    # Read side

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def score(self) -> int:
        return self._state.score

    def snapshot(self) -> Snapshot:
        state = self._state
        board = state.board.grid.copy()
        board.setflags(write=False)
        ghost = ghost_row(state.board, state.current) if state.current else None
        return Snapshot(
            board=board,
            current=PieceView.of(state.current),
            next=PieceView.of(state.upcoming),
            hold=PieceView.of(state.held),
            score=state.score,
            lines=state.lines,
            wave=state.wave,
            drop_interval_ms=state.drop_interval_ms,
            combo=state.combo,
            running=state.running,
            game_over=state.game_over,
            reached_target=state.reached_target,
            ghost_y=ghost,
        )

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, kind: EventKind, **data: object) -> None:
        event = GameEvent(kind, data)
        for listener in list(self._listeners):
            listener(event)

    # ------------------------------------------------------------------
    # Run control

    def start(self) -> None:
        """Begin a fresh run, discarding any previous board and score."""

        self._state.reset_game()
        self._state.running = True
        LOGGER.info("Game started")
        self._check_spawn()

    def resume(self) -> bool:
        """Keep playing after a win.  Ignored after a game over."""

        state = self._state
        if state.running or state.game_over or not state.reached_target:
            return False
        state.running = True
        LOGGER.info("Resumed after reaching %d points", state.score)
        return True

    def apply(self, intent: Intent) -> bool:
        return self._handlers[intent]()

    def tick(self, elapsed_ms: float) -> None:
        """Advance timers by ``elapsed_ms`` of real time.

        Raises:
            ValueError: If ``elapsed_ms`` is negative.
        """

        if elapsed_ms < 0:
            raise ValueError(f"elapsed time must not be negative, got {elapsed_ms}")
        state = self._state
        if not state.running or state.current is None:
            return
        state.clock_ms += elapsed_ms

        if state.grounded:
            if state.board.collides(state.current, 0, 1):
                state.lock_ms += elapsed_ms
                if (
                    state.lock_ms >= self.config.lock_delay_ms
                    or state.lock_resets >= self.config.max_lock_resets
                ):
                    self._lock()
                return
            # A move or rotation slid the piece over a gap.
            state.reset_piece_timers()

        state.gravity_ms += elapsed_ms
        if state.gravity_ms > state.drop_interval_ms:
            state.gravity_ms = 0.0
            self._step_down()

    # ------------------------------------------------------------------
    # Input mutators

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def soft_drop(self) -> bool:
        """Move one row down; a blocked drop grounds the piece instead of locking."""

        if not self._active():
            return False
        self._state.gravity_ms = 0.0
        return self._step_down()

    def hard_drop(self) -> bool:
        """Drop the piece to its landing row and lock it at once."""

        if not self._active():
            return False
        state = self._state
        state.current.y += state.board.landing_offset(state.current)
        state.gravity_ms = 0.0
        self._lock()
        return True

    def rotate_cw(self) -> bool:
        """Rotate clockwise, kicking sideways if the rotated shape collides.

        Offsets ``0, -1, +1, -2, +2 ...`` are tried up to the rotated width.
        When none fits the piece is left exactly as it was.
        """

        if not self._active():
            return False
        state = self._state
        piece = state.current
        original_shape, original_x = piece.shape, piece.x
        piece.shape = rotate_clockwise(original_shape)

        for offset in self._kick_offsets(piece.width):
            if not state.board.collides(piece, offset, 0):
                piece.x = original_x + offset
                self._count_grounded_move()
                return True

        piece.shape = original_shape
        return False

    def hold(self) -> bool:
        """Put the current piece on hold; at most once per piece."""

        if not self._active():
            return False
        if not self._state.swap_hold():
            return False
        LOGGER.debug("Held piece %s", self._state.held.piece_type.name)
        self._check_spawn()
        return True

    # ------------------------------------------------------------------
    # Internals

    def _active(self) -> bool:
        return self._state.running and self._state.current is not None

    @staticmethod
    def _kick_offsets(width: int) -> List[int]:
        offsets = [0]
        for magnitude in range(1, width + 1):
            offsets.extend((-magnitude, magnitude))
        return offsets

    def _shift(self, dx: int) -> bool:
        if not self._active():
            return False
        state = self._state
        if state.board.collides(state.current, dx, 0):
            return False
        state.current.x += dx
        self._count_grounded_move()
        return True

    def _count_grounded_move(self) -> None:
        state = self._state
        if not state.grounded:
            return
        state.lock_resets += 1
        if state.lock_resets < self.config.max_lock_resets:
            state.lock_ms = 0.0

    def _step_down(self) -> bool:
        state = self._state
        if state.board.collides(state.current, 0, 1):
            if not state.grounded:
                state.grounded = True
                state.lock_ms = 0.0
            return False
        state.current.y += 1
        if state.grounded:
            state.grounded = False
            state.lock_ms = 0.0
            state.lock_resets = 0
        return True

    def _lock(self) -> None:
        state = self._state
        piece = state.current
        state.board.merge(piece)
        LOGGER.debug("Locked %s at x=%d y=%d", piece.piece_type.name, piece.x, piece.y)
        self._emit(EventKind.PIECE_LOCKED, color_id=piece.color_id)
        self._score_rows(state.board.clear_completed_rows())
        state.spawn_next()
        self._check_spawn()

    def _score_rows(self, cleared: int) -> None:
        state = self._state
        config = self.config
        now = state.clock_ms
        since_clear = None if state.last_clear_ms is None else now - state.last_clear_ms

        if cleared == 0:
            if since_clear is not None and since_clear > config.combo_window_ms:
                state.combo = 0
            return

        state.lines += cleared
        if since_clear is not None and since_clear < config.combo_window_ms and state.combo > 0:
            state.combo += 1
        else:
            state.combo = 1
        state.last_clear_ms = now

        points = line_clear_points(cleared, state.combo, config)
        state.score += points
        self._emit(EventKind.LINES_CLEARED, count=cleared, combo=state.combo, points=points)

        wave = wave_for_lines(state.lines, config)
        if wave > state.wave:
            state.wave = wave
            state.drop_interval_ms = drop_interval_ms(wave, config)
            LOGGER.info("Wave %d, drop interval %.0fms", wave, state.drop_interval_ms)
            self._emit(EventKind.WAVE_INCREASED, wave=wave, drop_interval_ms=state.drop_interval_ms)

        for threshold in config.milestones:
            if state.score >= threshold and threshold not in state.milestones_hit:
                state.milestones_hit.add(threshold)
                self._emit(EventKind.MILESTONE, threshold=threshold)

        if state.score >= config.target_score and not state.reached_target:
            state.reached_target = True
            state.running = False
            LOGGER.info("Target reached with %d points", state.score)
            self._emit(EventKind.WIN, score=state.score)

    def _check_spawn(self) -> None:
        state = self._state
        if not state.board.collides(state.current, 0, 0):
            return
        state.running = False
        state.game_over = True
        LOGGER.info("Game over with %d points", state.score)
        self._emit(EventKind.GAME_OVER, score=state.score, reached_target=state.reached_target)
