import numpy as np
import pytest

from teratris.board import Board
from teratris.tetromino import (
    PIECE_VALUES,
    Tetromino,
    TetrominoType,
    create_piece,
    rotate_matrix,
)
from teratris.utils import resolve_rotation


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_piece_is_square_and_filled_with_its_value(kind):
    matrix = create_piece(kind)
    assert matrix.shape[0] == matrix.shape[1]
    assert set(np.unique(matrix)) <= {0, PIECE_VALUES[kind]}
    assert PIECE_VALUES[kind] in matrix
    assert np.count_nonzero(matrix) == 4


def test_piece_values_are_distinct():
    assert sorted(PIECE_VALUES.values()) == list(range(1, 8))


def test_create_piece_returns_fresh_matrix():
    first = create_piece(TetrominoType.T)
    first[0, 0] = 9
    assert create_piece(TetrominoType.T)[0, 0] == 0


def test_clockwise_rotation_of_t():
    rotated = rotate_matrix(create_piece(TetrominoType.T), 1)
    assert rotated.tolist() == [
        [0, 1, 0],
        [1, 1, 0],
        [0, 1, 0],
    ]


@pytest.mark.parametrize("kind", list(TetrominoType))
@pytest.mark.parametrize("direction", [1, -1])
def test_four_rotations_return_to_start(kind, direction):
    original = create_piece(kind)
    matrix = original
    for _ in range(4):
        matrix = rotate_matrix(matrix, direction)
        assert matrix.shape == original.shape
    assert np.array_equal(matrix, original)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_counter_clockwise_undoes_clockwise(kind):
    original = create_piece(kind)
    assert np.array_equal(rotate_matrix(rotate_matrix(original, 1), -1), original)


def test_rotate_does_not_touch_input():
    original = create_piece(TetrominoType.S)
    copy = original.copy()
    rotate_matrix(original, 1)
    assert np.array_equal(original, copy)


def test_blocks_follow_position():
    piece = Tetromino(TetrominoType.O, position=(3, 4))
    assert sorted(piece.blocks()) == [(3, 4), (3, 5), (4, 4), (4, 5)]
    piece.move(-1, 2)
    assert piece.position == (5, 3)


def test_unobstructed_rotation_keeps_position():
    board = Board()
    piece = Tetromino(TetrominoType.T, position=(5, 4))
    assert resolve_rotation(board, piece, 1)
    assert piece.position == (5, 4)
    assert np.array_equal(piece.matrix, rotate_matrix(create_piece(TetrominoType.T), 1))


def test_rotation_kicks_off_left_wall():
    board = Board()
    # vertical I hugging the left wall, its cells sit in column 0
    piece = Tetromino(TetrominoType.I, position=(5, -1))
    assert not board.collides(piece)

    assert resolve_rotation(board, piece, 1)

    assert piece.position == (5, 0)
    assert sorted(piece.blocks()) == [(6, 0), (6, 1), (6, 2), (6, 3)]


def test_rotation_rejected_when_no_kick_fits():
    board = Board()
    # vertical I hugging the right wall: every kick tried is out of bounds
    piece = Tetromino(TetrominoType.I, position=(5, board.width - 2))
    before = piece.matrix.copy()

    assert not resolve_rotation(board, piece, 1)

    assert piece.position == (5, board.width - 2)
    assert np.array_equal(piece.matrix, before)


def test_rotation_rejected_in_narrow_shaft():
    board = Board()
    board.grid[:, :4] = 1
    board.grid[:, 5:] = 1
    piece = Tetromino(TetrominoType.I, position=(10, 3))
    assert not board.collides(piece)

    assert not resolve_rotation(board, piece, -1)
    assert piece.position == (10, 3)
    assert sorted(piece.blocks()) == [(10, 4), (11, 4), (12, 4), (13, 4)]


@pytest.mark.parametrize("direction", [0, 1, -1, 2, -3])
def test_rejected_rotation_restores_matrix_for_any_direction(direction):
    board = Board()
    piece = Tetromino(TetrominoType.I, position=(5, board.width - 2))
    before = piece.matrix.copy()

    assert not resolve_rotation(board, piece, direction)

    assert np.array_equal(piece.matrix, before)
    assert piece.position == (5, board.width - 2)
