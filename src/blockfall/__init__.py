"""Falling-block puzzle engine with pluggable front-ends."""

from .board import Board
from .shapes import PieceKind, PieceTemplate, TEMPLATES, random_template
from .piece import ActivePiece, PieceController, rotate_shape
from .rules import drop_interval_ms, level_for_lines, score_for_lines
from .timing import GravityClock
from .engine import GameEngine, GameOverEvent, GameSnapshot, GameStatus, LockResult, PieceView
from .render import AsciiRenderer, Renderer, compose_grid, render_ascii

__all__ = [
    "ActivePiece",
    "AsciiRenderer",
    "Board",
    "GameEngine",
    "GameOverEvent",
    "GameSnapshot",
    "GameStatus",
    "GravityClock",
    "LockResult",
    "PieceController",
    "PieceKind",
    "PieceTemplate",
    "PieceView",
    "Renderer",
    "TEMPLATES",
    "compose_grid",
    "drop_interval_ms",
    "level_for_lines",
    "random_template",
    "render_ascii",
    "rotate_shape",
    "score_for_lines",
]
