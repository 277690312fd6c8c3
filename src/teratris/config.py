"""Tunable game parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Dimensions of the standard playfield.
WIDTH = 10
HEIGHT = 20

# Points awarded for clearing 0..4 rows at once, multiplied by the level.
LINE_POINTS: Tuple[int, ...] = (0, 40, 100, 300, 1200)


@dataclass(frozen=True)
class GameConfig:
    """Parameters shared by the engine and the front-ends.

    The defaults reproduce the classic browser game: a 10x20 arena, one level
    per ten cleared lines and a drop interval that shortens by 70 ms per level
    down to a floor of 120 ms.
    """

    width: int = WIDTH
    height: int = HEIGHT
    line_points: Tuple[int, ...] = LINE_POINTS
    lines_per_level: int = 10
    base_drop_ms: float = 1000.0
    drop_step_ms: float = 70.0
    min_drop_ms: float = 120.0
    high_score_limit: int = 10

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Arena must be at least 1x1, got {self.width}x{self.height}")
        if len(self.line_points) != 5:
            raise ValueError("line_points needs one entry for each of 0..4 cleared rows")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")
        if self.base_drop_ms <= 0 or self.min_drop_ms <= 0 or self.drop_step_ms < 0:
            raise ValueError("Drop timings must be positive")
        if self.high_score_limit <= 0:
            raise ValueError("high_score_limit must be positive")
        # Accept lists from callers but keep the frozen instance hashable.
        object.__setattr__(self, "line_points", tuple(self.line_points))
