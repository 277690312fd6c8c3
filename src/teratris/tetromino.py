"""Tetromino definitions and basic behaviour.

Each piece kind has a fixed square matrix whose non-zero cells carry the
kind's own value, so the arena grid can be mapped straight to colours without
a lookup of which piece placed a cell.  Rotation never mutates a matrix in
place; it always produces a new array of the same dimensions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np
from numpy.typing import NDArray

Matrix = NDArray[np.uint8]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0`` is
# always an empty cell.
PIECE_VALUES: Dict[TetrominoType, int] = {
    TetrominoType.T: 1,
    TetrominoType.O: 2,
    TetrominoType.L: 3,
    TetrominoType.J: 4,
    TetrominoType.I: 5,
    TetrominoType.S: 6,
    TetrominoType.Z: 7,
}

# Spawn orientation of each piece, as occupancy masks.  The fill value is
# applied by ``create_piece``.
_BASE_SHAPES: Dict[TetrominoType, List[List[int]]] = {
    TetrominoType.T: [
        [0, 0, 0],
        [1, 1, 1],
        [0, 1, 0],
    ],
    TetrominoType.O: [
        [1, 1],
        [1, 1],
    ],
    TetrominoType.L: [
        [0, 1, 0],
        [0, 1, 0],
        [0, 1, 1],
    ],
    TetrominoType.J: [
        [0, 1, 0],
        [0, 1, 0],
        [1, 1, 0],
    ],
    TetrominoType.I: [
        [0, 1, 0, 0],
        [0, 1, 0, 0],
        [0, 1, 0, 0],
        [0, 1, 0, 0],
    ],
    TetrominoType.S: [
        [0, 1, 1],
        [1, 1, 0],
        [0, 0, 0],
    ],
    TetrominoType.Z: [
        [1, 1, 0],
        [0, 1, 1],
        [0, 0, 0],
    ],
}


def create_piece(kind: TetrominoType) -> Matrix:
    """Return a fresh matrix for ``kind`` filled with its piece value."""

    mask = np.array(_BASE_SHAPES[kind], dtype=np.uint8)
    return mask * np.uint8(PIECE_VALUES[kind])


def rotate_matrix(matrix: Matrix, direction: int = 1) -> Matrix:
    """Return ``matrix`` rotated a quarter turn.

    The matrix is transposed, then each row is reversed for a clockwise turn
    (``direction > 0``) or the row order is reversed for a counter-clockwise
    turn.
    """

    transposed = matrix.T
    if direction > 0:
        rotated = transposed[:, ::-1]
    else:
        rotated = transposed[::-1, :]
    return np.ascontiguousarray(rotated)


@dataclass(eq=False)
class Tetromino:
    """Active falling piece in the game."""

    shape: TetrominoType
    position: Tuple[int, int] = (0, 0)  # (row, col) of the top-left cell
    matrix: Matrix = field(default=None, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.matrix is None:
            self.matrix = create_piece(self.shape)

    @property
    def value(self) -> int:
        return PIECE_VALUES[self.shape]

    @property
    def size(self) -> int:
        """Number of columns in the piece matrix."""

        return int(self.matrix.shape[1])

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece.

        Parameters
        ----------
        direction:
            Positive values rotate clockwise whilst negative values rotate
            counter-clockwise.  Only the sign of ``direction`` matters.
        """

        self.matrix = rotate_matrix(self.matrix, direction)

    def move(self, dx: int, dy: int) -> None:
        """Move the piece by the given offsets.

        ``dx`` moves horizontally (columns) and ``dy`` moves vertically
        (rows).  The piece's position is stored as ``(row, col)``.
        """

        row, col = self.position
        self.position = (row + dy, col + dx)

    def cells(self) -> List[Tuple[int, int]]:
        """Return the occupied ``(row, col)`` offsets within the matrix."""

        rows, cols = np.nonzero(self.matrix)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in self.cells()]
