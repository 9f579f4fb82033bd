import logging

import pytest

from blockfall.board import HEIGHT, WIDTH
from blockfall.engine import GameEngine, GameOverEvent, GameStatus
from blockfall.shapes import PIECE_VALUES, PieceKind


class FixedChoice:
    """Stand-in RNG that always picks the template of ``kind``."""

    def __init__(self, kind: PieceKind) -> None:
        self.kind = kind

    def choice(self, templates):
        return next(t for t in templates if t.kind == self.kind)


def _engine(kind: PieceKind = PieceKind.I, **kwargs) -> GameEngine:
    engine = GameEngine(rng=FixedChoice(kind), **kwargs)
    engine.start()
    return engine


def test_new_engine_waits_in_menu():
    engine = GameEngine(seed=1)
    assert engine.status is GameStatus.MENU
    assert engine.active is None
    assert engine.move_left() is False
    assert engine.tick(5000) is False


def test_start_spawns_piece_and_fills_next_slot():
    engine = _engine(PieceKind.I)
    assert engine.status is GameStatus.PLAYING
    assert (engine.active.x, engine.active.y) == (3, 0)
    assert engine.next_piece is not None
    assert engine.next_piece.kind is PieceKind.I
    assert engine.score == 0 and engine.level == 1 and engine.lines == 0
    assert engine.drop_interval_ms == 1000
    assert engine.start() is False


def test_hard_drop_locks_on_bottom_row_and_scores_distance():
    engine = _engine(PieceKind.I)
    assert engine.hard_drop()
    assert engine.board.to_list()[HEIGHT - 1] == [0, 0, 0] + [PIECE_VALUES[PieceKind.I]] * 4 + [0, 0, 0]
    assert engine.score == 2 * (HEIGHT - 1)
    assert engine.last_lock.lines_cleared == 0
    # A fresh piece is waiting at the spawn position.
    assert (engine.active.x, engine.active.y) == (3, 0)


def test_locking_the_last_gap_clears_a_row():
    engine = _engine(PieceKind.I)
    for col in list(range(0, 3)) + list(range(7, WIDTH)):
        engine.board.set_cell(HEIGHT - 1, col, 5)
    engine.hard_drop()
    assert engine.last_lock.lines_cleared == 1
    assert engine.last_lock.score_delta == 40
    assert engine.lines == 1
    assert engine.score == 2 * (HEIGHT - 1) + 40
    assert not any(engine.board.to_list()[HEIGHT - 1])


def test_tetris_scores_with_current_level():
    engine = _engine(PieceKind.I)
    engine.level = 3
    engine.rotate()
    piece = engine.active
    for row in range(HEIGHT - 4, HEIGHT):
        for col in range(WIDTH):
            if col != piece.x:
                engine.board.set_cell(row, col, 5)
    engine.hard_drop()
    assert engine.last_lock.lines_cleared == 4
    assert engine.last_lock.score_delta == 1200 * 3


def test_level_and_interval_follow_cleared_lines():
    engine = _engine(PieceKind.I)
    engine.lines = 9
    for col in list(range(0, 3)) + list(range(7, WIDTH)):
        engine.board.set_cell(HEIGHT - 1, col, 5)
    engine.hard_drop()
    assert engine.lines == 10
    assert engine.level == 2
    assert engine.drop_interval_ms == 950
    # Points were awarded at the level in force before the clear.
    assert engine.last_lock.score_delta == 40


def test_gravity_tick_moves_piece_after_interval():
    engine = _engine(PieceKind.O)
    assert engine.tick(400) is False
    assert engine.active.y == 0
    assert engine.tick(600) is True
    assert engine.active.y == 1
    # Accumulator restarts from zero after a step.
    assert engine.tick(999) is False
    assert engine.active.y == 1


def test_gravity_locks_piece_when_blocked():
    engine = _engine(PieceKind.O)
    engine.active.y = HEIGHT - 2
    first = engine.active
    assert engine.tick(1000) is True
    assert engine.active is not first
    assert engine.board.get_cell(HEIGHT - 1, 4) == PIECE_VALUES[PieceKind.O]


def test_soft_drop_moves_or_locks_without_points():
    engine = _engine(PieceKind.O)
    assert engine.soft_drop() is True
    assert engine.active.y == 1
    engine.active.y = HEIGHT - 2
    assert engine.soft_drop() is False
    assert engine.score == 0
    assert engine.last_lock is not None


def test_spawn_collision_ends_game_without_touching_board():
    events = []
    engine = _engine(PieceKind.O, on_game_over=events.append)
    engine.board.set_cell(2, 4, 6)
    engine.board.set_cell(2, 5, 6)
    engine.soft_drop()

    assert engine.status is GameStatus.GAME_OVER
    expected = [[0] * WIDTH for _ in range(HEIGHT)]
    expected[0][4] = expected[0][5] = expected[1][4] = expected[1][5] = PIECE_VALUES[PieceKind.O]
    expected[2][4] = expected[2][5] = 6
    assert engine.board.to_list() == expected
    assert events == [GameOverEvent(final_score=0, final_lines=0)]
    assert engine.last_lock.game_over is True


def test_commands_are_ignored_after_game_over_until_restart():
    engine = _engine(PieceKind.O)
    engine.board.set_cell(2, 4, 6)
    engine.soft_drop()
    board = engine.board.to_list()
    for command in (engine.move_left, engine.rotate, engine.soft_drop, engine.hard_drop, engine.pause):
        assert command() is False
    assert engine.tick(10_000) is False
    assert engine.board.to_list() == board

    assert engine.start() is True
    assert engine.status is GameStatus.PLAYING
    assert not any(any(row) for row in engine.board.to_list())


def test_pause_suspends_gravity_and_input():
    engine = _engine(PieceKind.T)
    assert engine.pause() is True
    assert engine.status is GameStatus.PAUSED
    assert engine.tick(5000) is False
    assert engine.rotate() is False
    assert engine.move_right() is False
    assert engine.active.y == 0
    assert engine.resume() is True
    assert engine.resume() is False
    assert engine.toggle_pause() is True
    assert engine.status is GameStatus.PAUSED
    assert engine.toggle_pause() is True
    assert engine.status is GameStatus.PLAYING


def test_reset_returns_to_menu_and_clears_session():
    engine = _engine(PieceKind.I)
    engine.hard_drop()
    engine.reset()
    assert engine.status is GameStatus.MENU
    assert engine.active is None and engine.next_piece is None
    assert engine.score == 0 and engine.lines == 0 and engine.level == 1
    assert not any(any(row) for row in engine.board.to_list())


def test_snapshot_is_detached_copy():
    engine = _engine(PieceKind.I)
    snap = engine.snapshot()
    assert snap.status is GameStatus.PLAYING
    assert snap.active.blocks() == [(0, 3), (0, 4), (0, 5), (0, 6)]
    assert snap.ghost_row == HEIGHT - 1
    assert snap.next_piece.kind is PieceKind.I
    engine.move_left()
    assert snap.active.x == 3
    assert engine.snapshot().active.x == 2


def test_engines_are_independent():
    first = _engine(PieceKind.I)
    second = _engine(PieceKind.O)
    first.hard_drop()
    assert second.score == 0
    assert not any(any(row) for row in second.board.to_list())


def test_failing_listener_is_logged_not_raised(caplog):
    def boom(_event):
        raise RuntimeError("boom")

    engine = _engine(PieceKind.O, on_game_over=boom)
    engine.board.set_cell(2, 4, 6)
    with caplog.at_level(logging.ERROR, logger="blockfall.engine"):
        engine.soft_drop()
    assert engine.status is GameStatus.GAME_OVER
    assert "listener failed" in caplog.text


@pytest.mark.parametrize("score, celebrate", [(100, False), (101, True)])
def test_game_over_event_celebration_threshold(score, celebrate):
    assert GameOverEvent(final_score=score, final_lines=0).celebrate is celebrate
