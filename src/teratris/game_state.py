"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import random

from .board import Board
from .config import GameConfig
from .scoring import level_for_lines, line_clear_points
from .tetromino import Tetromino, TetrominoType


@dataclass
class GameState:
    """Mutable state for one game: arena, pieces and player statistics."""

    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    board: Board = field(init=False)
    active: Optional[Tetromino] = None
    upcoming: Optional[TetrominoType] = None
    score: int = 0
    lines: int = 0
    level: int = 1

    def __post_init__(self) -> None:
        self.board = Board(self.config.width, self.config.height)

    def _random_type(self) -> TetrominoType:
        """Return a uniformly random tetromino type."""

        return self.rng.choice(list(TetrominoType))

    def spawn_tetromino(self) -> Tetromino:
        """Spawn and return a new active tetromino.

        The piece in ``upcoming`` becomes active and a new upcoming piece is
        randomly selected.  The new piece spawns on the top row, horizontally
        centred.
        """

        shape = self.upcoming or self._random_type()
        self.active = Tetromino(shape)
        self.active.position = (0, (self.board.width - self.active.size) // 2)
        self.upcoming = self._random_type()
        return self.active

    def apply_line_clear(self, rows: int) -> bool:
        """Credit ``rows`` cleared rows to the score, line count and level.

        Returns ``True`` when the level went up.  The level never drops.
        """

        if rows <= 0:
            return False
        self.score += line_clear_points(rows, self.level, self.config.line_points)
        self.lines += rows
        new_level = level_for_lines(self.lines, self.config.lines_per_level)
        if new_level > self.level:
            self.level = new_level
            return True
        return False

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.lines = 0
        self.level = 1
        self.active = None
        self.upcoming = None
        self.spawn_tetromino()
