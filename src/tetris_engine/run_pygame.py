"""pygame front-end for the Tetris engine.

Install the ``pygame`` extra and run with ``python -m tetris_engine.run_pygame``.
Arrow keys move and rotate, space hard-drops, ``p`` pauses, ``r`` restarts and
``q`` or closing the window quits.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import pygame

from .config import GameConfig
from .controller import GameController
from .game_service import GameState
from .point import Point
from .tetromino import Tetromino, TetrominoType

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel showing score and next piece
PANEL_WIDTH = 6 * CELL_SIZE
# Frames per second to run the game loop at
FPS = 60

LOCKED_COLOR = (128, 128, 128)
GRID_COLOR = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

KEY_COMMANDS = {
    pygame.K_LEFT: "left",
    pygame.K_a: "left",
    pygame.K_RIGHT: "right",
    pygame.K_d: "right",
    pygame.K_DOWN: "down",
    pygame.K_s: "down",
    pygame.K_UP: "rotate",
    pygame.K_w: "rotate",
    pygame.K_SPACE: "drop",
    pygame.K_p: "pause",
    pygame.K_r: "restart",
    pygame.K_q: "quit",
}


def _draw_cell(screen: pygame.Surface, x: int, y: int, color: tuple[int, int, int]) -> None:
    rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)
    pygame.draw.rect(screen, GRID_COLOR, rect, 1)


def draw_board(screen: pygame.Surface, state: GameState) -> None:
    """Render the locked cells."""

    height, width = state.grid.shape
    for y in range(height):
        for x in range(width):
            _draw_cell(screen, x, y, LOCKED_COLOR if state.grid[y, x] else (0, 0, 0))


def draw_tetromino(screen: pygame.Surface, piece: Optional[Tetromino], offset_x: int = 0, offset_y: int = 0) -> None:
    """Render ``piece`` shifted by the given cell offsets."""

    if piece is None:
        return
    color = SHAPE_COLORS[piece.kind]
    for block in piece.blocks():
        _draw_cell(screen, block.x + offset_x, block.y + offset_y, color)


def draw_panel(screen: pygame.Surface, font: pygame.font.Font, state: GameState, paused: bool) -> None:
    """Render score, lines, level and the next piece to the right of the board."""

    left = state.grid.shape[1] * CELL_SIZE + 10
    rows = [
        f"Score: {state.score}",
        f"Lines: {state.lines}",
        f"Level: {state.level}",
        "Next:",
    ]
    for i, text in enumerate(rows):
        screen.blit(font.render(text, True, TEXT_COLOR), (left, 10 + i * 24))
    if state.next_piece is not None:
        # Draw the queued piece at its own origin, inside the panel.
        preview = state.next_piece.copy()
        preview.position = Point(0, 0)
        draw_tetromino(screen, preview, offset_x=state.grid.shape[1] + 1, offset_y=4)
    if paused:
        screen.blit(font.render("PAUSED", True, TEXT_COLOR), (left, 10 + 9 * 24))
    if state.game_over:
        screen.blit(font.render("GAME OVER", True, TEXT_COLOR), (left, 10 + 10 * 24))
        screen.blit(font.render("r: restart", True, TEXT_COLOR), (left, 10 + 11 * 24))


class GameRunner:
    """Own the pygame window and run the game loop until the player quits."""

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self._config = config or GameConfig()
        self._running = False
        self._task: asyncio.Task | None = None
        self._controller: GameController | None = None

    async def _run_loop(self) -> None:
        pygame.init()
        board_px = self._config.width * CELL_SIZE + PANEL_WIDTH
        board_py = self._config.height * CELL_SIZE
        screen = pygame.display.set_mode((board_px, board_py))
        pygame.display.set_caption("Tetris")
        clock = pygame.time.Clock()
        font = pygame.font.Font(None, 24)

        self._controller = GameController(self._config, clock=pygame.time.get_ticks)
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN and event.key in KEY_COMMANDS:
                    if not self._controller.handle_input(KEY_COMMANDS[event.key]):
                        self._running = False

            self._controller.tick()

            state = self._controller.state()
            screen.fill((0, 0, 0))
            draw_board(screen, state)
            draw_tetromino(screen, state.current_piece)
            draw_panel(screen, font, state, self._controller.paused)
            pygame.display.set_caption(
                f"Tetris - {'Paused - ' if self._controller.paused else ''}Score: {state.score}"
            )
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (e.g., plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    GameRunner().start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
