"""Support heuristic for the arena and a simple topple simulation.

A cell counts as supported when it sits on the bottom row or directly on top
of another occupied cell.  This is a heuristic, not physics: horizontal
neighbours give no support, and a topple pass only drops the cells that were
unsupported before the pass started.
"""

from __future__ import annotations

from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray


def _supported_mask(grid: NDArray[np.uint8]) -> NDArray[np.bool_]:
    occupied = grid != 0
    below = np.ones_like(occupied)
    below[:-1] = occupied[1:]
    return occupied & below


def compute_stability(grid: NDArray[np.uint8]) -> int:
    """Return the percentage of occupied cells that are supported.

    An empty grid is fully stable (``100``).
    """

    occupied = int(np.count_nonzero(grid))
    if occupied == 0:
        return 100
    supported = int(np.count_nonzero(_supported_mask(grid)))
    return int(round(100 * supported / occupied))


def unstable_cells(grid: NDArray[np.uint8]) -> List[Tuple[int, int]]:
    """Return ``(row, col)`` of every occupied cell with nothing beneath it."""

    unsupported = (grid != 0) & ~_supported_mask(grid)
    rows, cols = np.nonzero(unsupported)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def simulate_fall(grid: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Return a copy of ``grid`` with its unsupported cells dropped.

    All unsupported cells are lifted out first, then each one, top row first,
    falls straight down its own column until it lands on an occupied cell or
    the floor.  A single pass can leave new overhangs behind; call again until
    :func:`unstable_cells` is empty to settle the arena completely.
    """

    result = grid.copy()
    falling = [(r, c, result[r, c]) for r, c in unstable_cells(grid)]
    for r, c, _ in falling:
        result[r, c] = 0

    height = result.shape[0]
    for r, c, value in falling:
        row = r
        while row + 1 < height and result[row + 1, c] == 0:
            row += 1
        result[row, c] = value
    return result
