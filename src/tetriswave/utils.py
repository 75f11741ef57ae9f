"""Rule helpers shared by the core and its renderers."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence, Union

from .board import Board, Grid
from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece


class PieceLike(Protocol):
    shape: Sequence[Sequence[int]]
    color_id: int
    x: int
    y: int


def wave_for_lines(lines: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Return the wave reached after clearing ``lines`` rows in total."""

    return lines // config.lines_per_wave + 1


def drop_interval_ms(wave: int, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Return the gravity interval in milliseconds for ``wave``.

    Each wave after the first shaves a fixed amount off the interval, never
    going below ``config.min_drop_interval_ms``.
    """

    interval = config.initial_drop_interval_ms - (wave - 1) * config.speed_increase_per_wave_ms
    return max(config.min_drop_interval_ms, interval)


def line_clear_points(cleared: int, combo: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    """Points for clearing ``cleared`` rows at combo count ``combo``."""

    if cleared <= 0:
        return 0
    assert cleared in config.line_points, f"no score defined for {cleared} rows"
    points = config.line_points[cleared]
    if combo > 1:
        points += config.combo_bonus
    return points


def ghost_row(board: Board, piece: Piece) -> int:
    """Return the lowest ``y`` the piece can reach at its current column."""

    return piece.y + board.landing_offset(piece)


def render_grid(board: Union[Board, Grid], active: Optional[PieceLike] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state.  ``board`` may be a
    :class:`Board` or a snapshot's grid, ``active`` a :class:`Piece` or a
    snapshot's piece view.  Cells of the active piece above the board are
    skipped.
    """

    cells = board.grid if isinstance(board, Board) else board
    grid = [[int(cell) for cell in row] for row in cells]
    if active is not None:
        for dr, row in enumerate(active.shape):
            for dc, value in enumerate(row):
                r, c = active.y + dr, active.x + dc
                if value and 0 <= r < len(grid) and 0 <= c < len(grid[0]):
                    grid[r][c] = active.color_id
    return grid
