"""Simple ASCII demo for the game engine.

Run with: `python -m teratris`

This module plays a short game by hard dropping every piece where it spawns
and prints the final frame, useful as a minimal smoke test of the engine
without any window or browser.
"""

from __future__ import annotations

import argparse
import logging
import random

from . import Session, format_elapsed


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join(str(cell) if cell else "." for cell in row))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play a demo game in the terminal")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--drops", type=int, default=30)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    session = Session(rng=random.Random(args.seed))
    session.start()
    for _ in range(args.drops):
        if not session.running:
            break
        session.tick(250)
        session.hard_drop()

    snap = session.snapshot()
    _print_grid(snap.grid)
    print(
        f"score={snap.score} lines={snap.lines} level={snap.level} "
        f"time={format_elapsed(snap.elapsed_ms)} status={snap.status.value}"
    )


if __name__ == "__main__":
    main()
