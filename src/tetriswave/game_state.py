"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
import random
from typing import Optional, Set

from .board import Board
from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece, new_piece, spawn_column, spawn_piece


@dataclass
class GameState:
    """Mutable state for one run of the game.

    The piece slots, timers and counters all live here so a restart is a
    single :meth:`reset_game` call.  Only :class:`~tetriswave.game.GameCore`
    mutates it; collaborators get snapshots.
    """

    config: GameConfig = DEFAULT_CONFIG
    rng: random.Random = field(default_factory=random.Random)
    board: Board = field(init=False)
    current: Optional[Piece] = None
    upcoming: Optional[Piece] = None
    held: Optional[Piece] = None
    hold_allowed: bool = True
    score: int = 0
    lines: int = 0
    wave: int = 1
    drop_interval_ms: float = field(init=False)
    gravity_ms: float = 0.0
    lock_ms: float = 0.0
    grounded: bool = False
    lock_resets: int = 0
    combo: int = 0
    last_clear_ms: Optional[float] = None
    clock_ms: float = 0.0
    reached_target: bool = False
    milestones_hit: Set[int] = field(default_factory=set)
    running: bool = False
    game_over: bool = False

    def __post_init__(self) -> None:
        self.board = Board(self.config.rows, self.config.cols)
        self.drop_interval_ms = self.config.initial_drop_interval_ms

    def random_piece(self) -> Piece:
        return spawn_piece(self.rng, self.config.cols)

    def reset_piece_timers(self) -> None:
        """Forget lock-delay and gravity progress of the previous piece."""

        self.gravity_ms = 0.0
        self.lock_ms = 0.0
        self.grounded = False
        self.lock_resets = 0

    def spawn_next(self) -> Piece:
        """Promote ``upcoming`` to the active slot and queue a new piece.

        The hold flag is re-armed so the player may hold the new piece.
        """

        self.current = self.upcoming or self.random_piece()
        self.upcoming = self.random_piece()
        self.hold_allowed = True
        self.reset_piece_timers()
        return self.current

    def swap_hold(self) -> bool:
        """Swap the active piece with the held one.

        The swap may only happen once per spawned piece; further calls return
        ``False`` and leave the state untouched until the next spawn.  The piece
        put on hold goes back to its spawn orientation.
        """

        if self.current is None or not self.hold_allowed:
            return False

        outgoing = new_piece(self.current.color_id, self.config.cols)
        if self.held is None:
            self.current = self.upcoming or self.random_piece()
            self.upcoming = self.random_piece()
        else:
            incoming = self.held.copy()
            incoming.x = spawn_column(incoming.shape, self.config.cols)
            incoming.y = 0
            self.current = incoming
        self.held = outgoing

        self.hold_allowed = False
        self.reset_piece_timers()
        return True

    def reset_game(self) -> None:
        """Reset the entire game state for a new run."""

        self.board = Board(self.config.rows, self.config.cols)
        self.score = 0
        self.lines = 0
        self.wave = 1
        self.drop_interval_ms = self.config.initial_drop_interval_ms
        self.combo = 0
        self.last_clear_ms = None
        self.clock_ms = 0.0
        self.reached_target = False
        self.milestones_hit = set()
        self.game_over = False
        self.current = None
        self.upcoming = None
        self.held = None
        self.spawn_next()
