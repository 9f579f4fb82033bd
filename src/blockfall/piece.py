"""Active piece state and the controller that moves it.

The controller owns the falling piece and validates every movement against
the :class:`~blockfall.board.Board` before applying it, so a rejected move
never leaves the piece half-updated.  Rotation works on a fresh copy of the
shape and only replaces the current one once a collision-free placement has
been found.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .board import Board, WIDTH
from .shapes import PIECE_VALUES, PieceKind, PieceTemplate, Shape

# Offsets tried in order when a rotated shape collides at its origin: left,
# right, up, up-left, up-right.
WALL_KICKS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (-1, -1), (1, -1))


def rotate_shape(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    Cell ``[i][j]`` of the result is cell ``[rows - 1 - j][i]`` of the input,
    so a ``rows x cols`` matrix becomes ``cols x rows``.
    """

    return np.ascontiguousarray(shape[::-1].T)


def spawn_position(template: PieceTemplate) -> Tuple[int, int]:
    """Return the ``(x, y)`` spawn anchor, horizontally centred on row 0."""

    return WIDTH // 2 - template.width // 2, 0


@dataclass
class ActivePiece:
    """Falling piece: a shape matrix anchored at ``(x, y)`` on the board."""

    template: PieceTemplate
    shape: Shape
    x: int
    y: int

    @property
    def kind(self) -> PieceKind:
        return self.template.kind

    @property
    def color(self) -> str:
        return self.template.color

    @property
    def value(self) -> int:
        """Colour code written to the board when the piece locks."""

        return PIECE_VALUES[self.template.kind]

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global ``(row, col)`` coordinates of the filled cells."""

        rows, cols = np.nonzero(self.shape)
        return [(int(r) + self.y, int(c) + self.x) for r, c in zip(rows, cols)]


def spawn(template: PieceTemplate) -> ActivePiece:
    """Create a piece for ``template`` at its spawn position.

    No collision test is performed; callers decide what an occupied spawn
    position means.
    """

    x, y = spawn_position(template)
    return ActivePiece(template=template, shape=template.shape, x=x, y=y)


class PieceController:
    """Move, rotate and drop the active piece on a board."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.active: Optional[ActivePiece] = None

    def spawn(self, template: PieceTemplate) -> ActivePiece:
        """Make a new piece for ``template`` the active piece."""

        self.active = spawn(template)
        return self.active

    def place(self, piece: ActivePiece) -> ActivePiece:
        """Make an already spawned ``piece`` the active piece."""

        self.active = piece
        return piece

    def clear(self) -> None:
        self.active = None

    def collides(self) -> bool:
        """Return ``True`` if the active piece overlaps at its current position."""

        piece = self.active
        if piece is None:
            return False
        return self.board.is_blocked(piece.shape, piece.x, piece.y)

    def try_move(self, dx: int, dy: int) -> bool:
        """Translate the active piece by ``(dx, dy)`` if the target is free.

        Returns ``True`` when the move was applied and ``False`` when it was
        rejected, in which case the piece is left untouched.
        """

        piece = self.active
        if piece is None:
            return False
        if self.board.is_blocked(piece.shape, piece.x + dx, piece.y + dy):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def rotate(self) -> bool:
        """Rotate the active piece clockwise, applying a wall kick if needed.

        The rotated shape is tried at the current origin first and then at
        each offset in :data:`WALL_KICKS`.  The first placement that fits is
        applied.  If none fits the piece keeps its previous shape and origin.
        """

        piece = self.active
        if piece is None:
            return False
        candidate = rotate_shape(piece.shape)
        for dx, dy in ((0, 0),) + WALL_KICKS:
            if not self.board.is_blocked(candidate, piece.x + dx, piece.y + dy):
                piece.shape = candidate
                piece.x += dx
                piece.y += dy
                return True
        return False

    def ghost_row(self) -> Optional[int]:
        """Return the ``y`` the active piece would land on if dropped now."""

        piece = self.active
        if piece is None:
            return None
        y = piece.y
        while not self.board.is_blocked(piece.shape, piece.x, y + 1):
            y += 1
        return y

    def hard_drop(self) -> int:
        """Move the piece down until blocked and return the rows travelled."""

        steps = 0
        while self.try_move(0, 1):
            steps += 1
        return steps

    def lock(self) -> ActivePiece:
        """Write the active piece into the board and release it.

        Raises:
            RuntimeError: If there is no active piece.
        """

        piece = self.active
        if piece is None:
            raise RuntimeError("No active piece to lock")
        self.board.lock(piece.shape, piece.x, piece.y, piece.value)
        self.active = None
        return piece


__all__ = [
    "ActivePiece",
    "PieceController",
    "WALL_KICKS",
    "rotate_shape",
    "spawn",
    "spawn_position",
]
