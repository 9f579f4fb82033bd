"""Game state machine driving a single play session.

:class:`GameEngine` owns the board, the active piece, the next-piece slot and
the session counters.  Front-ends interact with it exclusively through the
command methods (``start``, ``move_left``, ``tick`` ...) and read it back via
:meth:`GameEngine.snapshot`.  Commands issued in a state where they do not
apply are ignored and return ``False``; reaching the top of the board is a
regular transition to :attr:`GameStatus.GAME_OVER`, reported to listeners
through :class:`GameOverEvent`.

The engine contains no scheduling: an external driver calls
:meth:`GameEngine.tick` with the elapsed time and the engine turns that into
gravity steps.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple
import logging
import random

from .board import Board
from .piece import ActivePiece, PieceController, spawn
from .rules import (
    CELEBRATION_SCORE,
    HARD_DROP_POINTS,
    drop_interval_ms,
    level_for_lines,
    score_for_lines,
)
from .shapes import PieceKind, random_template
from .timing import GravityClock


LOGGER = logging.getLogger(__name__)


class GameStatus(str, Enum):
    """Lifecycle states of a session."""

    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameOverEvent:
    """Final figures reported when a session ends."""

    final_score: int
    final_lines: int

    @property
    def celebrate(self) -> bool:
        return self.final_score > CELEBRATION_SCORE


@dataclass(frozen=True)
class LockResult:
    """Outcome of locking a piece into the board."""

    lines_cleared: int
    score_delta: int
    level: int
    game_over: bool


@dataclass(frozen=True)
class PieceView:
    """Read-only copy of a piece for renderers."""

    kind: PieceKind
    shape: Tuple[Tuple[int, ...], ...]
    color: str
    x: int
    y: int

    @classmethod
    def from_piece(cls, piece: ActivePiece) -> "PieceView":
        return cls(
            kind=piece.kind,
            shape=tuple(tuple(int(v) for v in row) for row in piece.shape),
            color=piece.color,
            x=piece.x,
            y=piece.y,
        )

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global ``(row, col)`` coordinates of the filled cells."""

        return [
            (self.y + r, self.x + c)
            for r, row in enumerate(self.shape)
            for c, value in enumerate(row)
            if value
        ]


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of the session handed to collaborators."""

    status: GameStatus
    board: Tuple[Tuple[int, ...], ...]
    active: Optional[PieceView]
    next_piece: Optional[PieceView]
    ghost_row: Optional[int]
    score: int
    level: int
    lines: int
    drop_interval_ms: int


GameOverListener = Callable[[GameOverEvent], None]


class GameEngine:
    """Falling-block session: spawn, fall, lock, clear, respawn.

    Parameters
    ----------
    rng:
        Source of randomness used to pick templates.  Any object with a
        ``choice`` method works, which lets tests force a piece sequence.
    seed:
        Seed for a private :class:`random.Random` when ``rng`` is omitted.
    on_game_over:
        Optional listener called with a :class:`GameOverEvent`.
    """

    def __init__(
        self,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        on_game_over: Optional[GameOverListener] = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self.board = Board()
        self._controller = PieceController(self.board)
        self._clock = GravityClock()
        self._listeners: List[GameOverListener] = []
        if on_game_over is not None:
            self._listeners.append(on_game_over)
        self.status = GameStatus.MENU
        self.next_piece: Optional[ActivePiece] = None
        self.last_lock: Optional[LockResult] = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_interval_ms = drop_interval_ms(1)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def active(self) -> Optional[ActivePiece]:
        return self._controller.active

    def ghost_row(self) -> Optional[int]:
        return self._controller.ghost_row()

    def snapshot(self) -> GameSnapshot:
        """Return an immutable copy of everything a renderer needs."""

        active = self._controller.active
        return GameSnapshot(
            status=self.status,
            board=tuple(tuple(row) for row in self.board.to_list()),
            active=PieceView.from_piece(active) if active is not None else None,
            next_piece=(
                PieceView.from_piece(self.next_piece) if self.next_piece is not None else None
            ),
            ghost_row=self._controller.ghost_row(),
            score=self.score,
            level=self.level,
            lines=self.lines,
            drop_interval_ms=self.drop_interval_ms,
        )

    def add_game_over_listener(self, listener: GameOverListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Session commands
    # ------------------------------------------------------------------
    def start(self) -> bool:
        """Begin a new session from the menu or after a game over."""

        if self.status not in (GameStatus.MENU, GameStatus.GAME_OVER):
            LOGGER.debug("Start ignored while %s", self.status.value)
            return False
        self._reset_session()
        self.status = GameStatus.PLAYING
        LOGGER.info("Game started")
        self._spawn_next()
        return True

    def pause(self) -> bool:
        if self.status is not GameStatus.PLAYING:
            LOGGER.debug("Pause ignored while %s", self.status.value)
            return False
        self.status = GameStatus.PAUSED
        LOGGER.info("Paused")
        return True

    def resume(self) -> bool:
        if self.status is not GameStatus.PAUSED:
            LOGGER.debug("Resume ignored while %s", self.status.value)
            return False
        self.status = GameStatus.PLAYING
        LOGGER.info("Resumed")
        return True

    def toggle_pause(self) -> bool:
        """Pause a running session or resume a paused one."""

        if self.status is GameStatus.PAUSED:
            return self.resume()
        return self.pause()

    def reset(self) -> None:
        """Discard the session and return to the menu."""

        self._reset_session()
        self.status = GameStatus.MENU
        LOGGER.info("Game reset")

    # ------------------------------------------------------------------
    # Piece commands
    # ------------------------------------------------------------------
    def move_left(self) -> bool:
        if not self._playing():
            return False
        return self._controller.try_move(-1, 0)

    def move_right(self) -> bool:
        if not self._playing():
            return False
        return self._controller.try_move(1, 0)

    def rotate(self) -> bool:
        if not self._playing():
            return False
        return self._controller.rotate()

    def soft_drop(self) -> bool:
        """Move the piece down one row, locking it if it cannot move.

        Returns ``True`` if the piece moved.
        """

        if not self._playing():
            return False
        return self._step_down()

    def hard_drop(self) -> bool:
        """Drop the piece to its landing row and lock it immediately."""

        if not self._playing():
            return False
        steps = self._controller.hard_drop()
        self.score += steps * HARD_DROP_POINTS
        self._lock_and_respawn()
        return True

    def tick(self, elapsed_ms: float) -> bool:
        """Advance the gravity clock by ``elapsed_ms``.

        Returns ``True`` if a gravity step was performed.
        """

        if not self._playing():
            return False
        if not self._clock.advance(elapsed_ms):
            return False
        self._step_down()
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _playing(self) -> bool:
        return self.status is GameStatus.PLAYING and self._controller.active is not None

    def _reset_session(self) -> None:
        self.board.reset()
        self._controller.clear()
        self._clock.interval_ms = drop_interval_ms(1)
        self._clock.reset()
        self.next_piece = None
        self.last_lock = None
        self.score = 0
        self.level = 1
        self.lines = 0
        self.drop_interval_ms = drop_interval_ms(1)

    def _new_piece(self) -> ActivePiece:
        return spawn(random_template(self._rng))

    def _spawn_next(self) -> bool:
        """Promote the next piece to active; return ``False`` on a top out."""

        if self.next_piece is None:
            self.next_piece = self._new_piece()
        self._controller.place(self.next_piece)
        self.next_piece = self._new_piece()
        if self._controller.collides():
            self._game_over()
            return False
        return True

    def _step_down(self) -> bool:
        if self._controller.try_move(0, 1):
            return True
        self._lock_and_respawn()
        return False

    def _lock_and_respawn(self) -> LockResult:
        self._controller.lock()
        cleared = self.board.clear_full_rows()
        score_delta = score_for_lines(cleared, self.level)
        self.score += score_delta
        if cleared:
            self.lines += cleared
            self._update_level()
            LOGGER.debug("Cleared %d row(s). Score: %d", cleared, self.score)
        alive = self._spawn_next()
        self.last_lock = LockResult(
            lines_cleared=cleared,
            score_delta=score_delta,
            level=self.level,
            game_over=not alive,
        )
        return self.last_lock

    def _update_level(self) -> None:
        new_level = level_for_lines(self.lines)
        if new_level > self.level:
            self.level = new_level
            self.drop_interval_ms = drop_interval_ms(new_level)
            self._clock.interval_ms = self.drop_interval_ms
            LOGGER.info("Level %d, drop interval %d ms", self.level, self.drop_interval_ms)

    def _game_over(self) -> None:
        self.status = GameStatus.GAME_OVER
        event = GameOverEvent(final_score=self.score, final_lines=self.lines)
        LOGGER.info("Game over. Score: %d, lines: %d", event.final_score, event.final_lines)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                LOGGER.exception("Game over listener failed")


__all__ = [
    "GameEngine",
    "GameOverEvent",
    "GameSnapshot",
    "GameStatus",
    "LockResult",
    "PieceView",
]
