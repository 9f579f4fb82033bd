import pygame

from blockfall.board import HEIGHT, WIDTH
from blockfall.engine import GameEngine, GameStatus
from blockfall.run_pygame import CELL_COLORS, CELL_SIZE, draw_board, handle_key, hex_to_rgb
from blockfall.shapes import PIECE_VALUES, PieceKind


def test_hex_to_rgb():
    assert hex_to_rgb("#ff7f00") == (255, 127, 0)
    assert CELL_COLORS[PIECE_VALUES[PieceKind.I]] == (0, 245, 255)


def test_keys_map_to_engine_commands():
    engine = GameEngine(seed=0)
    handle_key(pygame.K_RETURN, engine)
    assert engine.status is GameStatus.PLAYING
    x = engine.active.x
    handle_key(pygame.K_LEFT, engine)
    assert engine.active.x == x - 1
    handle_key(pygame.K_p, engine)
    assert engine.status is GameStatus.PAUSED
    handle_key(pygame.K_p, engine)
    handle_key(pygame.K_SPACE, engine)
    assert engine.score > 0
    handle_key(pygame.K_r, engine)
    assert engine.status is GameStatus.MENU


def test_draw_board_paints_active_piece():
    engine = GameEngine(seed=0)
    engine.start()
    surface = pygame.Surface((WIDTH * CELL_SIZE, HEIGHT * CELL_SIZE))
    draw_board(surface, engine.snapshot())
    r, c = engine.active.blocks()[0]
    centre = (c * CELL_SIZE + CELL_SIZE // 2, r * CELL_SIZE + CELL_SIZE // 2)
    assert tuple(surface.get_at(centre))[:3] == CELL_COLORS[engine.active.value]
