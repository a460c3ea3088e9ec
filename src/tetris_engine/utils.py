"""Utility helpers shared by the front-ends."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from .config import BASE_DROP_INTERVAL_MS, DROP_INTERVAL_STEP_MS, MIN_DROP_INTERVAL_MS
from .game_service import GameState
from .tetromino import Tetromino

# Values written by ``render_grid``.
EMPTY = 0
LOCKED = 1
ACTIVE = 2

FILLED_BLOCK = "██"
EMPTY_BLOCK = "  "


def drop_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    The interval shortens by a fixed step per level and never drops below
    :data:`~tetris_engine.config.MIN_DROP_INTERVAL_MS`.
    """

    interval = BASE_DROP_INTERVAL_MS - (level - 1) * DROP_INTERVAL_STEP_MS
    return max(MIN_DROP_INTERVAL_MS, interval)


def render_grid(grid: np.ndarray, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return the board as nested lists with the active piece overlaid.

    Locked cells are :data:`LOCKED` and cells covered by ``active`` are
    :data:`ACTIVE`.  Piece cells outside the board are skipped.  ``grid`` is
    not modified.
    """

    height, width = grid.shape
    cells = [[LOCKED if cell else EMPTY for cell in row] for row in grid]
    if active is not None:
        for block in active.blocks():
            if 0 <= block.y < height and 0 <= block.x < width:
                cells[block.y][block.x] = ACTIVE
    return cells


def _center(text: str, width: int) -> str:
    if len(text) >= width:
        return text[:width]
    return text.center(width)


def render_text(state: GameState) -> str:
    """Render a framed text view of ``state`` for terminals."""

    cells = render_grid(state.grid, state.current_piece)
    inner = len(cells[0]) * len(FILLED_BLOCK)
    panel = max(inner, 32)

    lines = [
        "┌" + "─" * panel + "┐",
        "│" + _center("TETRIS", panel) + "│",
        "├" + "─" * panel + "┤",
        "│" + f" Score: {state.score:<8d} Lines: {state.lines:<6d}".ljust(panel)[:panel] + "│",
        "│" + f" Level: {state.level:<8d} Next: {_next_name(state)}".ljust(panel)[:panel] + "│",
        "├" + "─" * panel + "┤",
    ]
    for row in cells:
        body = "".join(FILLED_BLOCK if cell else EMPTY_BLOCK for cell in row)
        lines.append("│" + body.ljust(panel) + "│")
    lines.append("└" + "─" * panel + "┘")

    if state.game_over:
        lines.extend(
            [
                "",
                "┌" + "─" * 30 + "┐",
                "│" + _center("GAME OVER", 30) + "│",
                "│" + _center(f"Final score: {state.score}", 30) + "│",
                "│" + _center(f"Lines: {state.lines}", 30) + "│",
                "│" + _center("r: restart, q: quit", 30) + "│",
                "└" + "─" * 30 + "┘",
            ]
        )
    return "\n".join(lines)


def _next_name(state: GameState) -> str:
    return state.next_piece.kind.value if state.next_piece is not None else "-"
