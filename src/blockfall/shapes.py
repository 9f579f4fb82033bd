"""Piece templates for the falling-block engine.

The catalog holds the seven classic tetromino shapes in their spawn
orientation.  Shapes are stored as small binary numpy matrices where ``1``
marks a filled cell; the matrices are flagged read-only so a template can be
shared between every piece spawned from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple
import random

import numpy as np
from numpy.typing import NDArray

Shape = NDArray[np.uint8]


class PieceKind(str, Enum):
    """Enumeration of the seven piece shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _frozen_shape(rows: Sequence[Sequence[int]]) -> Shape:
    shape = np.array(rows, dtype=np.uint8)
    shape.flags.writeable = False
    return shape


@dataclass(frozen=True, eq=False)
class PieceTemplate:
    """Immutable shape matrix plus display colour."""

    kind: PieceKind
    shape: Shape
    color: str

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])


_BASE_SHAPES: Tuple[Tuple[PieceKind, Tuple[Tuple[int, ...], ...], str], ...] = (
    (PieceKind.I, ((1, 1, 1, 1),), "#00f5ff"),
    (PieceKind.O, ((1, 1), (1, 1)), "#ffff00"),
    (PieceKind.T, ((0, 1, 0), (1, 1, 1)), "#a000f0"),
    (PieceKind.S, ((0, 1, 1), (1, 1, 0)), "#00f000"),
    (PieceKind.Z, ((1, 1, 0), (0, 1, 1)), "#f00000"),
    (PieceKind.J, ((1, 0, 0), (1, 1, 1)), "#0000f0"),
    (PieceKind.L, ((0, 0, 1), (1, 1, 1)), "#ff7f00"),
)

TEMPLATES: Tuple[PieceTemplate, ...] = tuple(
    PieceTemplate(kind, _frozen_shape(rows), color) for kind, rows, color in _BASE_SHAPES
)

TEMPLATE_BY_KIND: Dict[PieceKind, PieceTemplate] = {t.kind: t for t in TEMPLATES}

# Integer stored in the board grid for each kind.  ``0`` is reserved for an
# empty cell.
PIECE_VALUES: Dict[PieceKind, int] = {t.kind: i + 1 for i, t in enumerate(TEMPLATES)}

PALETTE: Dict[int, str] = {PIECE_VALUES[t.kind]: t.color for t in TEMPLATES}


def random_template(rng: Optional[random.Random] = None) -> PieceTemplate:
    """Return one of the seven templates chosen uniformly at random.

    ``rng`` may be any object exposing ``choice``; the module level
    :mod:`random` functions are used when it is omitted.
    """

    return (rng or random).choice(TEMPLATES)


__all__ = [
    "PieceKind",
    "PieceTemplate",
    "Shape",
    "TEMPLATES",
    "TEMPLATE_BY_KIND",
    "PIECE_VALUES",
    "PALETTE",
    "random_template",
]
