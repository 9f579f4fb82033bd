"""Board representation for the playfield."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .shapes import PALETTE, Shape


# Dimensions of the board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def _filled_cells(shape: Shape, origin_x: int, origin_y: int) -> tuple[NDArray, NDArray]:
    rows, cols = np.nonzero(shape)
    return rows + origin_y, cols + origin_x


class Board:
    """Fixed-size grid holding the locked cells.

    Each cell stores ``0`` when empty or the colour code of the piece that
    filled it (see :data:`blockfall.shapes.PALETTE`).
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def reset(self) -> None:
        """Empty every cell."""

        self.grid = create_empty_grid()

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == 0)
        return False

    def is_blocked(self, shape: Shape, origin_x: int, origin_y: int) -> bool:
        """Return ``True`` if ``shape`` placed at the origin would collide.

        A filled cell collides when it falls outside the board horizontally,
        at or below the floor, or onto an occupied cell.  Cells above the top
        edge (negative rows) are only checked against the side walls.
        """

        rows, cols = _filled_cells(shape, origin_x, origin_y)
        if np.any(cols < 0) or np.any(cols >= self.width) or np.any(rows >= self.height):
            return True
        visible = rows >= 0
        return bool(np.any(self.grid[rows[visible], cols[visible]] != 0))

    def lock(self, shape: Shape, origin_x: int, origin_y: int, value: int) -> None:
        """Write ``value`` into every filled cell of ``shape`` on the board.

        Cells landing above the top edge are dropped.

        Raises:
            IndexError: If a cell lies beside the board or below the floor.
        """

        rows, cols = _filled_cells(shape, origin_x, origin_y)
        if np.any(cols < 0) or np.any(cols >= self.width) or np.any(rows >= self.height):
            raise IndexError("Block out of bounds")
        visible = rows >= 0
        self.grid[rows[visible], cols[visible]] = np.uint8(value)

    def full_rows(self) -> List[int]:
        """Return the indices of completely filled rows, top to bottom."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid != 0, axis=1))]

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Remaining rows keep their order and drop down; one empty row is added
        at the top for each row removed.  This gives the same board as
        scanning bottom-up and re-testing a row index after every removal.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def load(self, rows: Sequence[Sequence[int]]) -> None:
        """Replace the board contents with ``rows``.

        Raises:
            ValueError: If ``rows`` does not match the board dimensions.
        """

        if len(rows) != self.height:
            raise ValueError("Grid height mismatch")
        for row in rows:
            if len(row) != self.width:
                raise ValueError("Grid width mismatch")
        self.grid = np.array(rows, dtype=np.uint8)

    def to_list(self) -> List[List[int]]:
        """Return a copy of the grid as nested lists."""

        return self.grid.tolist()

    def color_grid(self) -> List[List[Optional[str]]]:
        """Return the grid with codes replaced by colours (``None`` when empty)."""

        return [[PALETTE.get(int(v)) for v in row] for row in self.grid]
