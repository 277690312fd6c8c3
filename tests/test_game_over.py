import numpy as np

from teratris.session import Session, SessionEvent, SessionStatus
from teratris.tetromino import TetrominoType


class FakeRng:
    """Always picks the same tetromino."""

    def __init__(self, kind: TetrominoType = TetrominoType.I) -> None:
        self.kind = kind

    def choice(self, _options):
        return self.kind


def _started_session() -> Session:
    session = Session(rng=FakeRng())
    session.start()
    return session


def test_stacked_column_ends_game_without_clearing_lines():
    session = _started_session()
    for _ in range(20):
        session.hard_drop()

    board = session.state.board
    assert board.occupied_count() == 20
    assert board.grid[:, 4].tolist() == [5] * 20
    assert session.state.lines == 0
    assert session.status is SessionStatus.GAME_OVER


def test_spawn_collision_triggers_game_over():
    session = _started_session()
    events = []
    session.subscribe(lambda event, payload: events.append((event, payload)))
    session.state.board.set_cell(5, 4, 1)

    session.hard_drop()

    assert session.game_over
    assert events[-1] == (SessionEvent.GAME_OVER, 0)


def test_commands_do_not_mutate_after_game_over():
    session = _started_session()
    session.state.board.set_cell(5, 4, 1)
    session.hard_drop()
    assert session.game_over

    grid_before = session.state.board.grid.copy()
    position_before = session.state.active.position
    assert session.move_left() is False
    assert session.move_right() is False
    assert session.rotate() is False
    session.soft_drop()
    session.hard_drop()
    session.tick(10_000)
    assert session.simulate_stability() is None

    assert np.array_equal(session.state.board.grid, grid_before)
    assert session.state.active.position == position_before
    assert session.elapsed_ms == 0


def test_game_over_is_terminal_until_reset():
    session = _started_session()
    session.state.board.set_cell(5, 4, 1)
    session.hard_drop()

    assert session.start() is False
    session.pause_toggle()
    assert session.status is SessionStatus.GAME_OVER

    session.reset()
    assert session.status is SessionStatus.IDLE
    assert session.state.board.occupied_count() == 0
    assert session.start() is True
    assert session.running
