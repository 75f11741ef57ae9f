"""Falling-block puzzle simulation core."""

from .board import Board
from .config import GameConfig
from .events import EventKind, GameEvent
from .game import GameCore, Intent, PieceView, Snapshot
from .game_state import GameState
from .leaderboard import InMemoryLeaderboard, Leaderboard, LeaderboardEntry, Submission
from .runner import Runner
from .tetromino import Piece, TetrominoType, rotate_clockwise, spawn_piece
from .utils import drop_interval_ms, ghost_row, render_grid

__all__ = [
    "Board",
    "GameConfig",
    "EventKind",
    "GameEvent",
    "GameCore",
    "Intent",
    "PieceView",
    "Snapshot",
    "GameState",
    "InMemoryLeaderboard",
    "Leaderboard",
    "LeaderboardEntry",
    "Submission",
    "Runner",
    "Piece",
    "TetrominoType",
    "rotate_clockwise",
    "spawn_piece",
    "drop_interval_ms",
    "ghost_row",
    "render_grid",
]
