"""Falling-block puzzle engine with pluggable front-ends."""

from .board import Board
from .config import GameConfig
from .tetromino import PIECE_VALUES, Tetromino, TetrominoType, create_piece, rotate_matrix
from .game_state import GameState
from .scoring import level_for_lines, line_clear_points
from .stability import compute_stability, simulate_fall, unstable_cells
from .utils import can_move, drop_interval_ms, format_elapsed, render_grid, resolve_rotation
from .session import Session, SessionEvent, SessionStatus, Snapshot
from .scores import HighScoreRecord, HighScoreTable, JsonFileStorage, MemoryStorage
from .controls import Command, command_for_key, dispatch

__all__ = [
    "Board",
    "GameConfig",
    "PIECE_VALUES",
    "Tetromino",
    "TetrominoType",
    "create_piece",
    "rotate_matrix",
    "GameState",
    "level_for_lines",
    "line_clear_points",
    "compute_stability",
    "simulate_fall",
    "unstable_cells",
    "can_move",
    "drop_interval_ms",
    "format_elapsed",
    "render_grid",
    "resolve_rotation",
    "Session",
    "SessionEvent",
    "SessionStatus",
    "Snapshot",
    "HighScoreRecord",
    "HighScoreTable",
    "JsonFileStorage",
    "MemoryStorage",
    "Command",
    "command_for_key",
    "dispatch",
]
