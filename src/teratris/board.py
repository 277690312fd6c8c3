"""Board representation for the playfield (the arena)."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, WIDTH
from .tetromino import Tetromino


Grid = NDArray[np.uint8]


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Arena holding the cells of every locked piece."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid: Grid = create_empty_grid(width, height)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Return the cell value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates lie outside the arena.
        """
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.height}x{self.width} arena")
        return int(self.grid[row, col])

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Write ``value`` at ``(row, col)``.

        Raises:
            IndexError: If the coordinates lie outside the arena.
        """
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.height}x{self.width} arena")
        self.grid[row, col] = np.uint8(value)

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def collides(
        self, tetromino: Tetromino, position: Optional[Tuple[int, int]] = None
    ) -> bool:
        """Return ``True`` if ``tetromino`` overlaps walls, floor or locked cells.

        ``position`` overrides the piece's own ``(row, col)`` so callers can
        probe a candidate spot without moving the piece.  Cells in rows above
        the top edge never collide, which lets a piece spawn partially above
        the visible arena; their columns are still checked against the walls.
        """

        row, col = tetromino.position if position is None else position
        for dr, dc in tetromino.cells():
            r = row + dr
            c = col + dc
            if c < 0 or c >= self.width or r >= self.height:
                return True
            if r >= 0 and self.get_cell(r, c) != 0:
                return True
        return False

    def merge(self, tetromino: Tetromino) -> None:
        """Write the tetromino's cells into the board grid.

        Existing values are overwritten.  Cells above the top edge have no
        board cell to land in and are dropped.
        """

        for r, c in tetromino.blocks():
            if r >= 0:
                self.set_cell(r, c, tetromino.value)

    def sweep(self) -> int:
        """Clear completed rows and return how many were removed.

        Full rows are dropped and the same number of empty rows is stacked on
        top, so every row above a cleared one shifts down.  The grid keeps its
        dimensions.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared
