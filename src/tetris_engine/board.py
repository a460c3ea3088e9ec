"""Board representation for the Tetris playfield."""

from __future__ import annotations

import operator
from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .errors import BlockOccupiedError, InvalidSizeError, OutOfBoundsError
from .point import Point
from .tetromino import Tetromino


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.bool_]


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty ``(height, width)`` occupancy grid."""

    return np.zeros((height, width), dtype=np.bool_)


class Board:
    """Fixed-size occupancy grid.

    Cells are addressed with :class:`~tetris_engine.point.Point` where ``x`` is
    the column and ``y`` the row, row ``0`` being the top of the well.  The grid
    itself is stored row-major, i.e. ``grid[y, x]``.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise InvalidSizeError(f"invalid board size: width={width}, height={height}")
        self.width = width
        self.height = height
        self._grid: Grid = create_empty_grid(width, height)

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height}, occupied={self.occupied_count()})"

    # Cell access ------------------------------------------------------
    def is_valid_position(self, point: Point) -> bool:
        """Return ``True`` if ``point`` lies on the board."""

        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def is_occupied(self, point: Point) -> bool:
        """Return whether the cell at ``point`` is filled.

        Raises:
            OutOfBoundsError: If ``point`` is outside the board.
        """

        if not self.is_valid_position(point):
            raise OutOfBoundsError(f"cell out of bounds: ({point.x}, {point.y})")
        return bool(self._grid[point.y, point.x])

    def set_block(self, point: Point, occupied: bool = True) -> None:
        """Fill or empty the cell at ``point``.

        Raises:
            OutOfBoundsError: If ``point`` is outside the board.
        """

        if not self.is_valid_position(point):
            raise OutOfBoundsError(f"cell out of bounds: ({point.x}, {point.y})")
        self._grid[point.y, point.x] = bool(occupied)

    # Pieces -----------------------------------------------------------
    def can_place(self, tetromino: Optional[Tetromino]) -> bool:
        """Return ``True`` if every block of ``tetromino`` is on an empty cell.

        This is the only collision test in the engine: moves, rotations and
        spawns are all validated through it.
        """

        if tetromino is None:
            return False
        for block in tetromino.blocks():
            if not self.is_valid_position(block):
                return False
            if self._grid[block.y, block.x]:
                return False
        return True

    def place(self, tetromino: Tetromino) -> None:
        """Lock the tetromino's blocks into the grid.

        Raises:
            BlockOccupiedError: If any block is off the board or already filled.
        """

        if not self.can_place(tetromino):
            raise BlockOccupiedError(f"cannot place {tetromino!r}")
        for block in tetromino.blocks():
            self._grid[block.y, block.x] = True

    # Lines ------------------------------------------------------------
    def completed_lines(self) -> List[int]:
        """Return the indices of full rows in ascending order."""

        full_rows = np.all(self._grid, axis=1)
        return [int(row) for row in np.flatnonzero(full_rows)]

    def clear_lines(self, rows: Iterable[int]) -> None:
        """Remove ``rows`` and let everything above fall into the gap.

        The surviving rows keep their relative order and sink to the bottom;
        one empty row appears at the top for every row removed.  This holds
        for adjacent and non-adjacent rows alike.  Duplicate indices count
        once.

        Raises:
            OutOfBoundsError: If any row index is outside the board.  The grid
                is left untouched in that case.
        """

        targets = set()
        for row in rows:
            try:
                index = operator.index(row)
            except TypeError:
                raise OutOfBoundsError(f"row index must be an integer: {row!r}") from None
            if not 0 <= index < self.height:
                raise OutOfBoundsError(f"row out of bounds: {row}")
            targets.add(index)
        if not targets:
            return

        keep = np.ones(self.height, dtype=np.bool_)
        keep[sorted(targets)] = False
        remaining = self._grid[keep]
        new_rows = np.zeros((len(targets), self.width), dtype=self._grid.dtype)
        self._grid = np.vstack((new_rows, remaining))

    def is_game_over(self) -> bool:
        """Return ``True`` if any cell of the top row is filled."""

        return bool(np.any(self._grid[0]))

    # Views ------------------------------------------------------------
    def snapshot(self) -> Grid:
        """Return a read-only copy of the occupancy grid."""

        grid = self._grid.copy()
        grid.flags.writeable = False
        return grid

    def occupied_count(self) -> int:
        """Return the number of filled cells."""

        return int(np.count_nonzero(self._grid))

    def reset(self) -> None:
        """Empty every cell."""

        self._grid.fill(False)
