"""Simple pygame front-end for the game engine.

This module provides a minimal playable desktop version using the engine in
the surrounding modules.  It only translates pygame events into session
commands and draws session snapshots; all game rules live in
:mod:`teratris.session`.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

import pygame

from .config import GameConfig
from .controls import Command, dispatch
from .scores import HighScoreTable, JsonFileStorage
from .session import Session, SessionEvent, SessionStatus
from .utils import format_elapsed


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel holding the preview and stats
PANEL_WIDTH = 160
# Frames per second to run the game loop at
FPS = 60

# Colours indexed by cell value
CELL_COLORS = [
    (6, 23, 38),
    (255, 13, 114),
    (13, 194, 255),
    (13, 255, 114),
    (245, 56, 255),
    (255, 142, 13),
    (255, 225, 56),
    (56, 119, 255),
]

KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.PAUSE_TOGGLE,
}


def handle_key(event: pygame.event.Event, session: Session) -> None:
    """Process keyboard events.

    ``Enter`` starts a new game from the idle or game-over screen and ``s``
    runs the stability check; every other bound key becomes a command.
    """

    if event.key == pygame.K_RETURN and session.status in (
        SessionStatus.IDLE,
        SessionStatus.GAME_OVER,
    ):
        session.reset()
        session.start()
    elif event.key == pygame.K_s:
        session.simulate_stability()
    elif event.key in KEY_COMMANDS:
        dispatch(session, KEY_COMMANDS[event.key])


def draw_grid(screen: pygame.Surface, grid, origin=(0, 0), size: int = CELL_SIZE) -> None:
    ox, oy = origin
    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            rect = pygame.Rect(ox + c * size, oy + r * size, size, size)
            pygame.draw.rect(screen, CELL_COLORS[value], rect)
            pygame.draw.rect(screen, (50, 50, 50), rect, 1)


class GameRunner:
    """Own the pygame window and drive a session from the pygame clock."""

    def __init__(
        self, config: Optional[GameConfig] = None, scores_path: Optional[Path] = None
    ) -> None:
        self.config = config or GameConfig()
        self.session = Session(self.config)
        path = scores_path or Path.home() / ".teratris" / "highscores.json"
        self.scores = HighScoreTable(JsonFileStorage(path), self.config.high_score_limit)
        self.player_name = "Player"
        self.session.subscribe(self._on_event)
        self._font: Optional[pygame.font.Font] = None

    def _on_event(self, event: SessionEvent, payload) -> None:
        if event is SessionEvent.GAME_OVER:
            self.scores.submit_score(self.player_name, payload)

    def _draw(self, screen: pygame.Surface) -> None:
        snap = self.session.snapshot()
        screen.fill((0, 0, 0))
        draw_grid(screen, snap.grid)
        panel_x = self.config.width * CELL_SIZE + 10
        if snap.next_piece:
            draw_grid(screen, snap.next_piece, (panel_x, 10), CELL_SIZE // 2)
        best = self.scores.best()
        lines = [
            f"Score: {snap.score}",
            f"Lines: {snap.lines}",
            f"Level: {snap.level}",
            f"Time: {format_elapsed(snap.elapsed_ms)}",
            f"Best: {best.score if best else '-'}",
        ]
        if snap.status is SessionStatus.PAUSED:
            lines.append("Paused")
        elif snap.status is SessionStatus.GAME_OVER:
            lines.append("Game over - Enter")
        elif snap.status is SessionStatus.IDLE:
            lines.append("Enter to start")
        if self._font is not None:
            for i, text in enumerate(lines):
                label = self._font.render(text, True, (230, 230, 235))
                screen.blit(label, (panel_x, 100 + i * 24))
        pygame.display.flip()

    def run(self) -> None:
        pygame.init()
        width = self.config.width * CELL_SIZE + PANEL_WIDTH
        height = self.config.height * CELL_SIZE
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Teratris")
        self._font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()

        running = True
        while running:
            dt = clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    handle_key(event, self.session)
            self.session.tick(dt)
            self._draw(screen)

        pygame.quit()
        LOGGER.info("Window closed")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play teratris in a pygame window")
    parser.add_argument("--name", default="Player", help="name stored with high scores")
    parser.add_argument("--scores", type=Path, default=None, help="high score file")
    parser.add_argument("--width", type=int, default=GameConfig.width)
    parser.add_argument("--height", type=int, default=GameConfig.height)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    runner = GameRunner(GameConfig(width=args.width, height=args.height), args.scores)
    runner.player_name = args.name
    runner.run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
