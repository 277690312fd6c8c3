import numpy as np
import pytest

from teratris.board import Board
from teratris.tetromino import Tetromino, TetrominoType


def test_sweep_keeps_dimensions():
    board = Board()
    board.grid[19] = 1
    board.grid[17] = 2
    board.grid[5, :4] = 3
    board.sweep()
    assert board.grid.shape == (board.height, board.width)
    assert all(len(row) == board.width for row in board.grid)


def test_single_full_row_shifts_rows_above_down():
    board = Board()
    board.grid[19] = 1
    board.set_cell(18, 0, 3)
    board.set_cell(10, 5, 6)

    cleared = board.sweep()

    assert cleared == 1
    assert not board.grid[0].any()
    assert board.get_cell(19, 0) == 3
    assert board.get_cell(11, 5) == 6
    assert board.occupied_count() == 2


def test_sweep_clears_adjacent_and_separated_rows():
    board = Board()
    board.grid[19] = 1
    board.grid[18] = 2
    board.grid[17, :9] = 4  # one gap, survives
    board.grid[16] = 5
    board.set_cell(15, 2, 7)

    cleared = board.sweep()

    assert cleared == 3
    assert board.grid[19].tolist() == [4] * 9 + [0]
    assert board.get_cell(18, 2) == 7
    assert board.occupied_count() == 10


def test_sweep_without_full_rows_is_noop():
    board = Board()
    board.grid[19, 1:] = 1
    before = board.grid.copy()
    assert board.sweep() == 0
    assert np.array_equal(board.grid, before)


def test_merge_writes_piece_value():
    board = Board()
    piece = Tetromino(TetrominoType.O, position=(18, 0))
    board.merge(piece)
    assert board.grid[18:, :2].tolist() == [[2, 2], [2, 2]]
    assert board.occupied_count() == 4


def test_merge_skips_cells_above_top():
    board = Board()
    piece = Tetromino(TetrominoType.I, position=(-2, 0))
    board.merge(piece)
    assert board.grid[:2, 1].tolist() == [5, 5]
    assert board.occupied_count() == 2


def test_collides_with_walls_floor_and_cells():
    board = Board()
    piece = Tetromino(TetrominoType.O, position=(18, 0))
    assert not board.collides(piece)
    assert board.collides(piece, (19, 0))
    assert board.collides(piece, (0, -1))
    assert board.collides(piece, (0, board.width - 1))

    board.set_cell(10, 4, 1)
    assert board.collides(piece, (9, 3))
    assert not board.collides(piece, (7, 3))


def test_rows_above_top_do_not_collide():
    board = Board()
    board.grid[0] = 1
    piece = Tetromino(TetrominoType.I, position=(-4, 3))
    assert not board.collides(piece)
    # the column bounds still apply above the top
    assert board.collides(piece, (-4, board.width - 1))


def test_collides_is_pure():
    board = Board()
    board.set_cell(5, 5, 1)
    piece = Tetromino(TetrominoType.T, position=(3, 4))
    grid_before = board.grid.copy()
    results = {board.collides(piece) for _ in range(5)}
    assert len(results) == 1
    assert piece.position == (3, 4)
    assert np.array_equal(board.grid, grid_before)


def test_cell_access_out_of_bounds_raises():
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell(board.height, 0)
    with pytest.raises(IndexError):
        board.set_cell(0, -1, 1)
    assert board.in_bounds(0, 0)
    assert not board.in_bounds(-1, 0)
    assert not board.in_bounds(0, board.width)


def test_merge_outside_walls_raises():
    board = Board()
    piece = Tetromino(TetrominoType.O, position=(5, board.width - 1))
    with pytest.raises(IndexError):
        board.merge(piece)


def test_custom_dimensions():
    board = Board(width=6, height=8)
    assert board.grid.shape == (8, 6)
    board.grid[7] = 1
    assert board.sweep() == 1
    assert board.grid.shape == (8, 6)
