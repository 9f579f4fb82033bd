"""Snapshot helpers for renderers.

Front-ends never touch the engine's internals; they receive a
:class:`~blockfall.engine.GameSnapshot` and turn it into pixels or text.
"""

from __future__ import annotations

from typing import List, Protocol

from .engine import GameSnapshot, GameStatus
from .shapes import PIECE_VALUES

# Marker used for ghost cells in composed grids.  Colour codes are 1..7.
GHOST_VALUE = -1


class Renderer(Protocol):
    """Anything able to display a snapshot."""

    def draw(self, snapshot: GameSnapshot) -> None: ...


def compose_grid(snapshot: GameSnapshot, *, ghost: bool = True) -> List[List[int]]:
    """Return a copy of the board with the active piece overlaid.

    When ``ghost`` is true the landing position is marked with
    :data:`GHOST_VALUE` in cells that neither the board nor the active piece
    occupy.  Cells above the board are skipped.
    """

    grid = [list(row) for row in snapshot.board]
    height = len(grid)
    width = len(grid[0]) if grid else 0
    active = snapshot.active
    if active is None:
        return grid

    if ghost and snapshot.ghost_row is not None:
        offset = snapshot.ghost_row - active.y
        for r, c in active.blocks():
            r += offset
            if 0 <= r < height and 0 <= c < width and grid[r][c] == 0:
                grid[r][c] = GHOST_VALUE

    value = PIECE_VALUES[active.kind]
    for r, c in active.blocks():
        if 0 <= r < height and 0 <= c < width:
            grid[r][c] = value
    return grid


def render_ascii(snapshot: GameSnapshot) -> str:
    """Render ``snapshot`` as text: ``#`` filled, ``:`` ghost, ``.`` empty."""

    lines = []
    for row in compose_grid(snapshot):
        lines.append(
            "".join("#" if cell > 0 else ":" if cell == GHOST_VALUE else "." for cell in row)
        )
    status = f"{snapshot.status.value} score={snapshot.score} level={snapshot.level} lines={snapshot.lines}"
    if snapshot.next_piece is not None:
        status += f" next={snapshot.next_piece.kind.value}"
    if snapshot.status is GameStatus.GAME_OVER:
        status += " GAME OVER"
    lines.append(status)
    return "\n".join(lines)


class AsciiRenderer:
    """Renderer printing snapshots through a ``write`` callable."""

    def __init__(self, write=print) -> None:
        self._write = write

    def draw(self, snapshot: GameSnapshot) -> None:
        self._write(render_ascii(snapshot))


__all__ = ["AsciiRenderer", "GHOST_VALUE", "Renderer", "compose_grid", "render_ascii"]
