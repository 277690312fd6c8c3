"""Line-clear scoring and level progression."""

from __future__ import annotations

from typing import Sequence

from .config import LINE_POINTS


def line_clear_points(rows: int, level: int, table: Sequence[int] = LINE_POINTS) -> int:
    """Return the score for clearing ``rows`` rows at ``level``.

    Counts beyond the table use its last entry.
    """

    if rows <= 0:
        return 0
    return table[min(rows, len(table) - 1)] * level


def level_for_lines(lines: int, lines_per_level: int = 10) -> int:
    """Return the level reached after ``lines`` cumulative cleared lines."""

    return lines // lines_per_level + 1
