"""Tetromino catalog and the falling piece.

Shapes are stored as small matrices whose filled cells carry the piece's type
id, so merging a piece into the board is a plain copy of non-zero values.
Rotation works on the matrix directly: a clockwise turn is a transpose
followed by reversing each row.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import random
from typing import Dict, List, Optional, Sequence, Tuple

from .config import COLS

Shape = List[List[int]]
FrozenShape = Tuple[Tuple[int, ...], ...]


class TetrominoType(IntEnum):
    """The seven tetrominoes, valued by the id they leave on the board."""

    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


# Spawn orientation of each piece.  Zero marks an empty cell inside the shape.
PIECE_SHAPES: Dict[TetrominoType, FrozenShape] = {
    TetrominoType.I: ((1, 1, 1, 1),),
    TetrominoType.J: ((2, 0, 0), (2, 2, 2)),
    TetrominoType.L: ((0, 0, 3), (3, 3, 3)),
    TetrominoType.O: ((4, 4), (4, 4)),
    TetrominoType.S: ((0, 5, 5), (5, 5, 0)),
    TetrominoType.T: ((0, 6, 0), (6, 6, 6)),
    TetrominoType.Z: ((7, 7, 0), (0, 7, 7)),
}


def _validate_catalog() -> None:
    assert len(PIECE_SHAPES) == len(TetrominoType)
    for piece_type, shape in PIECE_SHAPES.items():
        width = len(shape[0])
        assert all(len(row) == width for row in shape), f"{piece_type.name} is ragged"
        filled = [cell for row in shape for cell in row if cell]
        assert len(filled) == 4, f"{piece_type.name} must have four cells"
        assert all(cell == piece_type for cell in filled), f"{piece_type.name} has foreign ids"


_validate_catalog()


def catalog_shape(color_id: int) -> Shape:
    """Return a fresh, mutable copy of the catalog shape for ``color_id``."""

    assert 1 <= color_id <= len(TetrominoType), f"invalid piece type id {color_id}"
    return [list(row) for row in PIECE_SHAPES[TetrominoType(color_id)]]


def rotate_clockwise(shape: Sequence[Sequence[int]]) -> Shape:
    """Return ``shape`` turned 90 degrees clockwise.

    ``new[r][c] == old[rows - 1 - c][r]``; the input is left untouched.
    """

    return [list(column) for column in zip(*reversed(shape))]


def spawn_column(shape: Sequence[Sequence[int]], cols: int = COLS) -> int:
    """Column at which ``shape`` sits horizontally centred on the board."""

    return cols // 2 - len(shape[0]) // 2


@dataclass
class Piece:
    """A tetromino placed on the grid.

    ``x``/``y`` locate the top-left corner of ``shape`` on the board.  ``y``
    may be negative while the piece is still partly above the playfield.
    """

    shape: Shape
    color_id: int
    x: int = 0
    y: int = 0

    def __post_init__(self) -> None:
        assert 1 <= self.color_id <= len(TetrominoType), f"invalid piece type id {self.color_id}"
        assert self.shape and self.shape[0], "empty shape"
        width = len(self.shape[0])
        assert all(len(row) == width for row in self.shape), "ragged shape"

    @property
    def piece_type(self) -> TetrominoType:
        return TetrominoType(self.color_id)

    @property
    def width(self) -> int:
        return len(self.shape[0])

    @property
    def height(self) -> int:
        return len(self.shape)

    def cells(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        """Return ``(row, col)`` of every filled cell, shifted by ``dx``/``dy``."""

        return [
            (self.y + r + dy, self.x + c + dx)
            for r, row in enumerate(self.shape)
            for c, value in enumerate(row)
            if value
        ]

    def copy(self) -> "Piece":
        """Deep copy; the shape matrix is never shared between pieces."""

        return Piece([row[:] for row in self.shape], self.color_id, self.x, self.y)


def new_piece(color_id: int, cols: int = COLS) -> Piece:
    """Build a piece of type ``color_id`` at its spawn position."""

    shape = catalog_shape(color_id)
    return Piece(shape, color_id, x=spawn_column(shape, cols), y=0)


def spawn_piece(rng: Optional[random.Random] = None, cols: int = COLS) -> Piece:
    """Return a uniformly random piece at the spawn position."""

    rng = rng or random
    return new_piece(rng.randint(1, len(TetrominoType)), cols)
