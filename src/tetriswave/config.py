"""Tuning constants for the simulation core.

Every rule number used by the engine lives here.  :class:`GameConfig` bundles
them so a host (or a test) can run the core with different rules without
touching module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


# Dimensions of the playfield.
COLS = 10
ROWS = 20

# Grace period once a piece touches down, and how many moves may reset it.
LOCK_DELAY_MS = 2000.0
MAX_LOCK_RESETS = 15

# Consecutive clears within this window build a combo.
COMBO_WINDOW_MS = 3000.0
COMBO_BONUS = 50

# Gravity speeds up once per wave.
LINES_PER_WAVE = 15
INITIAL_DROP_INTERVAL_MS = 1000.0
SPEED_INCREASE_PER_WAVE_MS = 50.0
MIN_DROP_INTERVAL_MS = 100.0

# Points awarded for clearing this many rows with a single lock.
LINE_POINTS: Dict[int, int] = {1: 5, 2: 15, 3: 30, 4: 50}

TARGET_SCORE = 5000
MILESTONES: Tuple[int, ...] = (3000, 4000, 5000)

# Leaderboard collaborator limits.
MAX_LEADERBOARD_ENTRIES = 10
MAX_NAME_LENGTH = 20
DEFAULT_PLAYER_NAME = "Anonymous"


@dataclass(frozen=True)
class GameConfig:
    """Rules the :class:`~tetriswave.game.GameCore` plays by."""

    cols: int = COLS
    rows: int = ROWS
    lock_delay_ms: float = LOCK_DELAY_MS
    max_lock_resets: int = MAX_LOCK_RESETS
    combo_window_ms: float = COMBO_WINDOW_MS
    combo_bonus: int = COMBO_BONUS
    lines_per_wave: int = LINES_PER_WAVE
    initial_drop_interval_ms: float = INITIAL_DROP_INTERVAL_MS
    speed_increase_per_wave_ms: float = SPEED_INCREASE_PER_WAVE_MS
    min_drop_interval_ms: float = MIN_DROP_INTERVAL_MS
    line_points: Dict[int, int] = field(default_factory=lambda: dict(LINE_POINTS))
    target_score: int = TARGET_SCORE
    milestones: Tuple[int, ...] = MILESTONES

    def __post_init__(self) -> None:
        assert self.cols > 0 and self.rows > 0, "board must have positive size"
        assert self.lines_per_wave > 0, "lines_per_wave must be positive"
        assert self.max_lock_resets > 0, "max_lock_resets must be positive"


DEFAULT_CONFIG = GameConfig()
