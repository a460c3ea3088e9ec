"""Game session state machine.

:class:`GameService` owns the board, the falling piece, the queued next piece
and the progression counters.  It is the only object that mutates any of
them.  Every command either commits its change or restores the previous state
and raises; nothing is retried internally.

The service is synchronous and keeps no timers.  Gravity is applied by
calling :meth:`GameService.update` from whatever loop drives the game.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .board import Board, Grid
from .config import LINE_SCORES, LINES_PER_LEVEL, GameConfig
from .errors import GameOverError, InvalidMoveError, NoPieceError
from .pieces import PieceSource
from .point import DOWN, Point
from .tetromino import Tetromino


LOGGER = logging.getLogger(__name__)


def level_for_lines(lines: int) -> int:
    """Return the level reached after clearing ``lines`` lines in total."""

    return lines // LINES_PER_LEVEL + 1


@dataclass(frozen=True)
class GameState:
    """Read-only picture of a session, handed to renderers."""

    grid: Grid
    current_piece: Optional[Tetromino]
    next_piece: Optional[Tetromino]
    score: int
    lines: int
    level: int
    game_over: bool


class GameService:
    """Rules engine for one game session.

    Parameters
    ----------
    config:
        Board size and piece-source settings.  Defaults to a 10x20 board with
        uniformly random pieces.
    source:
        Explicit piece source; overrides the one described by ``config``.
    board:
        Optional pre-filled board to start from.  The service takes ownership
        of it.  When omitted an empty board of ``config``'s size is created.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        source: Optional[PieceSource] = None,
        board: Optional[Board] = None,
    ) -> None:
        self.config = config or GameConfig()
        self._source = source if source is not None else self.config.source()
        self._board = board if board is not None else Board(self.config.width, self.config.height)
        self._current: Optional[Tetromino] = None
        self._next: Optional[Tetromino] = None
        self._score = 0
        self._lines = 0
        self._level = 1
        self._game_over = False
        self._start()

    # Query surface ----------------------------------------------------
    @property
    def grid(self) -> Grid:
        """Read-only copy of the locked cells."""

        return self._board.snapshot()

    @property
    def width(self) -> int:
        return self._board.width

    @property
    def height(self) -> int:
        return self._board.height

    @property
    def current_piece(self) -> Optional[Tetromino]:
        return self._current.copy() if self._current is not None else None

    @property
    def next_piece(self) -> Optional[Tetromino]:
        return self._next.copy() if self._next is not None else None

    @property
    def score(self) -> int:
        return self._score

    @property
    def lines(self) -> int:
        return self._lines

    @property
    def level(self) -> int:
        return self._level

    @property
    def game_over(self) -> bool:
        return self._game_over

    def state(self) -> GameState:
        """Return an immutable snapshot of the whole session."""

        return GameState(
            grid=self.grid,
            current_piece=self.current_piece,
            next_piece=self.next_piece,
            score=self._score,
            lines=self._lines,
            level=self._level,
            game_over=self._game_over,
        )

    # Commands ---------------------------------------------------------
    def move_piece(self, delta: Point) -> None:
        """Shift the active piece by ``delta``.

        Raises:
            GameOverError: If the game has ended.
            NoPieceError: If there is no active piece.
            InvalidMoveError: If the piece would leave the board or overlap a
                filled cell.  The piece keeps its previous position.
        """

        piece = self._require_piece()
        original = piece.position
        piece.move(delta)
        if not self._board.can_place(piece):
            piece.position = original
            raise InvalidMoveError(f"cannot move {piece.kind.value} by ({delta.x}, {delta.y})")

    def rotate_piece(self) -> None:
        """Advance the active piece to its next rotation state.

        Raises:
            GameOverError: If the game has ended.
            NoPieceError: If there is no active piece.
            InvalidMoveError: If the rotated piece does not fit.  The previous
                rotation is restored.
        """

        piece = self._require_piece()
        original = piece.rotation
        piece.rotate()
        if not self._board.can_place(piece):
            piece.rotation = original
            raise InvalidMoveError(f"cannot rotate {piece.kind.value}")

    def drop_piece(self) -> int:
        """Hard drop: move down until blocked, then lock.

        Returns the number of rows the piece fell.
        """

        if self._game_over:
            raise GameOverError("game is over")
        distance = 0
        while True:
            try:
                self.move_piece(DOWN)
            except InvalidMoveError:
                break
            distance += 1
        self._lock_piece()
        return distance

    def update(self) -> None:
        """Apply one gravity step, locking the piece if it cannot fall."""

        if self._game_over:
            raise GameOverError("game is over")
        try:
            self.move_piece(DOWN)
        except InvalidMoveError:
            self._lock_piece()

    def reset(self) -> None:
        """Start a fresh session on an empty board.

        The piece source is kept, so a fixed sequence continues where it left
        off.
        """

        self._board = Board(self.config.width, self.config.height)
        self._score = 0
        self._lines = 0
        self._level = 1
        self._game_over = False
        self._start()
        LOGGER.info("Game reset")

    # Internal helpers -------------------------------------------------
    def _require_piece(self) -> Tetromino:
        if self._game_over:
            raise GameOverError("game is over")
        if self._current is None:
            raise NoPieceError("no active piece")
        return self._current

    def _spawn_position(self) -> Point:
        return Point(self._board.width // 2 - 2, 0)

    def _new_piece(self) -> Tetromino:
        return Tetromino(self._source.next_kind(), self._spawn_position())

    def _start(self) -> None:
        self._current = self._new_piece()
        self._next = self._new_piece()
        if self._board.is_game_over():
            LOGGER.info("Game over: top row already occupied")
            self._game_over = True
        elif not self._board.can_place(self._current):
            LOGGER.info("Game over: no room to spawn %s", self._current.kind.value)
            self._game_over = True

    def _lock_piece(self) -> int:
        """Commit the active piece, clear lines and bring in the next piece.

        Returns the number of lines cleared.
        """

        if self._current is None:
            raise NoPieceError("no active piece to lock")

        self._board.place(self._current)
        LOGGER.debug("Locked %s at %s", self._current.kind.value, self._current.position)

        completed = self._board.completed_lines()
        if completed:
            self._board.clear_lines(completed)
            self._add_lines(len(completed))
            LOGGER.debug(
                "Cleared %d line(s). Score: %d, level: %d",
                len(completed),
                self._score,
                self._level,
            )

        if self._board.is_game_over():
            LOGGER.info("Game over: stack reached the top. Score: %d", self._score)
            self._game_over = True
            return len(completed)

        self._current = self._next
        self._next = self._new_piece()
        if not self._board.can_place(self._current):
            LOGGER.info("Game over: no room to spawn. Score: %d", self._score)
            self._game_over = True
        return len(completed)

    def _add_lines(self, cleared: int) -> None:
        # The level is bumped before scoring, so a clear that crosses a
        # threshold is paid at the new level.
        self._lines += cleared
        self._level = level_for_lines(self._lines)
        self._score += LINE_SCORES.get(cleared, 0) * self._level


__all__ = ["GameService", "GameState", "level_for_lines"]
