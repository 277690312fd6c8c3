"""Utility helpers for the game engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .config import GameConfig
from .tetromino import Tetromino


def drop_interval_ms(level: int, config: Optional[GameConfig] = None) -> float:
    """Return the automatic drop interval in milliseconds for ``level``.

    Each level above the first shortens the interval by a fixed step until it
    reaches the configured floor (120 ms by default, hit at level 14).
    """

    config = config or GameConfig()
    return max(config.min_drop_ms, config.base_drop_ms - (level - 1) * config.drop_step_ms)


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``.

    It is intended for use within the game loop to validate movement before
    it is applied.
    """

    row, col = tetromino.position
    return not board.collides(tetromino, (row + dy, col + dx))


def resolve_rotation(board: Board, tetromino: Tetromino, direction: int = 1) -> bool:
    """Rotate ``tetromino`` in place, nudging it sideways if it overlaps.

    After the turn the piece is tried at column offsets ``+1``, ``-1``, ``+2``,
    ``-2``... from where it started (each step applies ``+1, -2, +3, -4...``
    to the column).  Once the next step would be wider than the piece itself,
    the original matrix and position are restored.

    Returns ``True`` if the rotation was kept.
    """

    origin = tetromino.position
    original = tetromino.matrix
    tetromino.rotate(direction)
    offset = 1
    while board.collides(tetromino):
        tetromino.move(offset, 0)
        offset = -(offset + (1 if offset > 0 else -1))
        if abs(offset) > tetromino.size:
            tetromino.matrix = original
            tetromino.position = origin
            return False
    return True


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state.  Cells occupied by the active
    piece receive the piece's value; cells above the top edge are skipped.
    """

    grid = board.grid.copy()
    if active is not None:
        for r, c in active.blocks():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r, c] = active.value
    return grid.tolist()


def format_elapsed(ms: float) -> str:
    """Format a play time in milliseconds as ``mm:ss``."""

    seconds = int(ms // 1000)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"
