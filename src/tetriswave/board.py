"""Board representation for the playfield."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .config import COLS, ROWS
from .tetromino import Piece


Grid = NDArray[np.uint8]


def create_empty_grid(rows: int = ROWS, cols: int = COLS) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((rows, cols), dtype=np.uint8)


class Board:
    """Grid of locked cells; ``0`` is empty, ``1``-``7`` a piece type id."""

    def __init__(self, rows: int = ROWS, cols: int = COLS) -> None:
        self.grid: Grid = create_empty_grid(rows, cols)

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == 0)
        return False

    def collides(self, piece: Piece, offset_x: int = 0, offset_y: int = 0) -> bool:
        """Return ``True`` if ``piece`` shifted by the offsets would collide.

        A cell collides when it leaves the side walls, reaches past the floor,
        or lands on a locked cell.  Cells above the board (negative rows) only
        have their column checked, so a piece may spawn partly out of view.
        """

        for row, col in piece.cells(offset_x, offset_y):
            if col < 0 or col >= self.width or row >= self.height:
                return True
            if row >= 0 and not self.is_empty(row, col):
                return True
        return False

    def merge(self, piece: Piece) -> None:
        """Write the piece's type id into the board.

        Cells still above the top row are dropped.
        """

        for row, col in piece.cells():
            if row >= 0:
                self.grid[row, col] = np.uint8(piece.color_id)

    def clear_completed_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Surviving rows keep their order and sink to the bottom; the same number
        of empty rows is stacked on top.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def landing_offset(self, piece: Piece) -> int:
        """How many rows ``piece`` can fall before it would collide."""

        distance = 0
        while not self.collides(piece, 0, distance + 1):
            distance += 1
        return distance
