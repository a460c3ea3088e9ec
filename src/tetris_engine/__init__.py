"""Rules engine for a falling-block puzzle game."""

from .board import Board
from .config import GameConfig
from .controller import GameController, map_input_to_command
from .errors import (
    BlockOccupiedError,
    GameOverError,
    InvalidInputError,
    InvalidMoveError,
    InvalidSizeError,
    InvalidTetrominoTypeError,
    NoPieceError,
    OutOfBoundsError,
    RotationFailedError,
    TetrisError,
)
from .game_service import GameService, GameState
from .pieces import BagPieceSource, FixedPieceSource, PieceSource, RandomPieceSource
from .point import Point
from .tetromino import Tetromino, TetrominoType, shape_blocks
from .utils import drop_interval_ms, render_grid, render_text

__all__ = [
    "Board",
    "Point",
    "Tetromino",
    "TetrominoType",
    "GameService",
    "GameState",
    "GameConfig",
    "GameController",
    "PieceSource",
    "RandomPieceSource",
    "BagPieceSource",
    "FixedPieceSource",
    "map_input_to_command",
    "drop_interval_ms",
    "render_grid",
    "render_text",
    "shape_blocks",
    "TetrisError",
    "InvalidSizeError",
    "OutOfBoundsError",
    "BlockOccupiedError",
    "InvalidTetrominoTypeError",
    "RotationFailedError",
    "InvalidMoveError",
    "NoPieceError",
    "GameOverError",
    "InvalidInputError",
]
