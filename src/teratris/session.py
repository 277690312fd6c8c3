"""Session controller: lifecycle, player commands and drop timing.

A :class:`Session` is a pure state machine.  Hosts feed it elapsed time via
:meth:`Session.tick` and forward player input through the command methods;
renderers read :meth:`Session.snapshot`.  Nothing here touches a display, an
event loop or storage.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from .config import GameConfig
from .game_state import GameState
from .stability import compute_stability, simulate_fall
from .tetromino import create_piece
from .utils import can_move, drop_interval_ms, render_grid, resolve_rotation


LOGGER = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class SessionEvent(str, Enum):
    """Advisory notifications emitted to listeners."""

    STARTED = "started"
    PAUSED = "paused"
    RESUMED = "resumed"
    LINES_CLEARED = "lines_cleared"
    LEVELED_UP = "leveled_up"
    GAME_OVER = "game_over"
    STABILITY_COMPUTED = "stability_computed"


Listener = Callable[[SessionEvent, Any], None]


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for renderers."""

    grid: List[List[int]]
    board: List[List[int]]
    next_piece: Optional[List[List[int]]]
    score: int
    lines: int
    level: int
    status: SessionStatus
    elapsed_ms: float


@dataclass
class Session:
    """Owns one game and drives it through its lifecycle."""

    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    status: SessionStatus = SessionStatus.IDLE
    elapsed_ms: float = 0.0
    drop_accum: float = 0.0
    state: GameState = field(init=False)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.state = GameState(self.config, self.rng)

    # ----------------------- Observation -----------------------
    def subscribe(self, listener: Listener) -> None:
        """Register ``listener(event, payload)`` for lifecycle events."""

        self._listeners.append(listener)

    def _emit(self, event: SessionEvent, payload: Any = None) -> None:
        for listener in list(self._listeners):
            listener(event, payload)

    @property
    def running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    @property
    def paused(self) -> bool:
        return self.status is SessionStatus.PAUSED

    @property
    def game_over(self) -> bool:
        return self.status is SessionStatus.GAME_OVER

    @property
    def drop_interval(self) -> float:
        return drop_interval_ms(self.state.level, self.config)

    def snapshot(self) -> Snapshot:
        upcoming = self.state.upcoming
        return Snapshot(
            grid=render_grid(self.state.board, self.state.active),
            board=self.state.board.grid.tolist(),
            next_piece=create_piece(upcoming).tolist() if upcoming else None,
            score=self.state.score,
            lines=self.state.lines,
            level=self.state.level,
            status=self.status,
            elapsed_ms=self.elapsed_ms,
        )

    # ----------------------- Lifecycle -----------------------
    def start(self) -> bool:
        """Begin a new game from the idle state."""

        if self.status is not SessionStatus.IDLE:
            LOGGER.debug("Start ignored: session is %s", self.status.value)
            return False
        self.state.reset_game()
        self.status = SessionStatus.RUNNING
        self.elapsed_ms = 0.0
        self.drop_accum = 0.0
        LOGGER.info("Game started")
        self._emit(SessionEvent.STARTED)
        if self.state.board.collides(self.state.active):
            self._game_over()
        return True

    def reset(self) -> None:
        """Discard the current game and return to idle."""

        self.state = GameState(self.config, self.rng)
        self.status = SessionStatus.IDLE
        self.elapsed_ms = 0.0
        self.drop_accum = 0.0

    def pause(self) -> None:
        if self.status is not SessionStatus.RUNNING:
            LOGGER.debug("Pause ignored: session is %s", self.status.value)
            return
        self.status = SessionStatus.PAUSED
        LOGGER.info("Paused")
        self._emit(SessionEvent.PAUSED)

    def resume(self) -> None:
        if self.status is not SessionStatus.PAUSED:
            LOGGER.debug("Resume ignored: session is %s", self.status.value)
            return
        self.status = SessionStatus.RUNNING
        LOGGER.info("Resumed")
        self._emit(SessionEvent.RESUMED)

    def pause_toggle(self) -> None:
        if self.paused:
            self.resume()
        else:
            self.pause()

    def _game_over(self) -> None:
        self.status = SessionStatus.GAME_OVER
        LOGGER.info("Game over. Score: %d", self.state.score)
        self._emit(SessionEvent.GAME_OVER, self.state.score)

    # ----------------------- Commands -----------------------
    def _move(self, dx: int) -> bool:
        if not self.running or self.state.active is None:
            return False
        if not can_move(self.state.board, self.state.active, dx, 0):
            return False
        self.state.active.move(dx, 0)
        return True

    def move_left(self) -> bool:
        return self._move(-1)

    def move_right(self) -> bool:
        return self._move(1)

    def rotate(self, direction: int = 1) -> bool:
        """Rotate the active piece, wall kicking if needed."""

        if not self.running or self.state.active is None:
            return False
        return resolve_rotation(self.state.board, self.state.active, direction)

    def soft_drop(self) -> None:
        """Move the active piece one row down, locking it if it cannot."""

        if not self.running or self.state.active is None:
            return
        if can_move(self.state.board, self.state.active, 0, 1):
            self.state.active.move(0, 1)
        else:
            self._lock_and_spawn()
        self.drop_accum = 0.0

    def hard_drop(self) -> None:
        """Drop the active piece as far as it goes and lock it."""

        if not self.running or self.state.active is None:
            return
        while can_move(self.state.board, self.state.active, 0, 1):
            self.state.active.move(0, 1)
        self._lock_and_spawn()
        self.drop_accum = 0.0

    def _lock_and_spawn(self) -> None:
        """Merge the active piece, sweep, score and bring in the next piece."""

        state = self.state
        state.board.merge(state.active)
        cleared = state.board.sweep()
        if cleared:
            leveled_up = state.apply_line_clear(cleared)
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, state.score)
            self._emit(SessionEvent.LINES_CLEARED, cleared)
            if leveled_up:
                LOGGER.info("Leveled up to %d", state.level)
                self._emit(SessionEvent.LEVELED_UP, state.level)
        state.spawn_tetromino()
        if state.board.collides(state.active):
            self._game_over()

    def tick(self, delta_ms: float) -> None:
        """Advance the game clock by ``delta_ms`` milliseconds.

        Only a running session accumulates time.  Once the accumulated time
        reaches the drop interval for the current level, the active piece is
        soft dropped and the accumulator restarts.
        """

        if not self.running:
            return
        self.elapsed_ms += delta_ms
        self.drop_accum += delta_ms
        if self.drop_accum >= self.drop_interval:
            self.soft_drop()

    # ----------------------- Stability -----------------------
    def simulate_stability(self) -> Optional[int]:
        """Measure arena stability and topple unsupported cells if any.

        Returns the stability percentage measured before the topple, or
        ``None`` when there is no game in progress.
        """

        if self.status not in (SessionStatus.RUNNING, SessionStatus.PAUSED):
            LOGGER.debug("Stability ignored: session is %s", self.status.value)
            return None
        board = self.state.board
        percent = compute_stability(board.grid)
        LOGGER.info("Stability: %d%%", percent)
        self._emit(SessionEvent.STABILITY_COMPUTED, percent)
        if percent < 100:
            board.grid = simulate_fall(board.grid)
            LOGGER.info("Simulated falling of unstable cells")
        return percent
