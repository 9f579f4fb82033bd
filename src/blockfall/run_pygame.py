"""pygame front-end for the falling-block engine.

The window is a plain collaborator: it translates key presses into engine
commands, feeds the frame time into :meth:`GameEngine.tick` and draws the
snapshot it gets back.  Run with ``python -m blockfall.run_pygame``.
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from .board import HEIGHT, WIDTH
from .engine import GameEngine, GameOverEvent, GameSnapshot, GameStatus, PieceView
from .render import GHOST_VALUE, compose_grid
from .shapes import PALETTE

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Size of a cell in the next-piece preview
PREVIEW_CELL_SIZE = 20
SIDEBAR_WIDTH = 160
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (26, 32, 44)
GRID_LINE = (45, 55, 72)
GHOST_COLOR = (90, 90, 110)
TEXT_COLOR = (230, 230, 230)


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {value: hex_to_rgb(color) for value, color in PALETTE.items()}


def draw_board(screen: pygame.Surface, snapshot: GameSnapshot) -> None:
    """Render the locked cells, the ghost and the active piece."""

    for r, row in enumerate(compose_grid(snapshot)):
        for c, value in enumerate(row):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            if value == GHOST_VALUE:
                pygame.draw.rect(screen, GHOST_COLOR, rect, 2)
            elif value:
                pygame.draw.rect(screen, CELL_COLORS[value], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_preview(screen: pygame.Surface, piece: Optional[PieceView], left: int, top: int) -> None:
    """Render the next piece inside the sidebar."""

    if piece is None:
        return
    color = hex_to_rgb(piece.color)
    for r, row in enumerate(piece.shape):
        for c, value in enumerate(row):
            if not value:
                continue
            rect = pygame.Rect(
                left + c * PREVIEW_CELL_SIZE,
                top + r * PREVIEW_CELL_SIZE,
                PREVIEW_CELL_SIZE,
                PREVIEW_CELL_SIZE,
            )
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_sidebar(screen: pygame.Surface, font: pygame.font.Font, snapshot: GameSnapshot) -> None:
    left = WIDTH * CELL_SIZE + 12
    lines = [
        "Next:",
        "",
        "",
        "",
        f"Score: {snapshot.score}",
        f"Level: {snapshot.level}",
        f"Lines: {snapshot.lines}",
    ]
    for i, text in enumerate(lines):
        screen.blit(font.render(text, True, TEXT_COLOR), (left, 12 + i * 24))
    draw_preview(screen, snapshot.next_piece, left, 40)

    banner = {
        GameStatus.MENU: "Enter: start",
        GameStatus.PAUSED: "Paused (P)",
        GameStatus.GAME_OVER: "Game over - Enter",
    }.get(snapshot.status)
    if banner:
        screen.blit(font.render(banner, True, TEXT_COLOR), (left, HEIGHT * CELL_SIZE - 36))


def handle_key(key: int, engine: GameEngine) -> None:
    """Translate a key press into an engine command."""

    if key == pygame.K_LEFT:
        engine.move_left()
    elif key == pygame.K_RIGHT:
        engine.move_right()
    elif key == pygame.K_UP:
        engine.rotate()
    elif key == pygame.K_DOWN:
        engine.soft_drop()
    elif key == pygame.K_SPACE:
        engine.hard_drop()
    elif key == pygame.K_p:
        engine.toggle_pause()
    elif key == pygame.K_RETURN:
        engine.start()
    elif key == pygame.K_r:
        engine.reset()


class GameRunner:
    """Own the window and drive the engine once per frame."""

    def __init__(self, engine: Optional[GameEngine] = None) -> None:
        self.engine = engine or GameEngine()
        self.engine.add_game_over_listener(self._on_game_over)
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None

    @property
    def running(self) -> bool:
        return self._running

    def _on_game_over(self, event: GameOverEvent) -> None:
        if event.celebrate:
            LOGGER.info("New milestone! Final score %d", event.final_score)

    def draw(self, snapshot: GameSnapshot) -> None:
        if self._screen is None or self._font is None:
            return
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, snapshot)
        draw_sidebar(self._screen, self._font, snapshot)
        pygame.display.set_caption(
            f"Blockfall - {'Paused - ' if snapshot.status is GameStatus.PAUSED else ''}"
            f"Score: {snapshot.score}"
        )
        pygame.display.flip()

    def run(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(
            (WIDTH * CELL_SIZE + SIDEBAR_WIDTH, HEIGHT * CELL_SIZE)
        )
        self._font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        self._running = True
        LOGGER.info("Window opened")
        try:
            while self._running:
                dt = clock.tick(FPS)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        handle_key(event.key, self.engine)
                self.engine.tick(dt)
                self.draw(self.engine.snapshot())
        finally:
            pygame.quit()
            LOGGER.info("Window closed")

    def stop(self) -> None:
        self._running = False


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s: %(message)s")
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
