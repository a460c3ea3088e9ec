"""Tetromino definitions and rotation tables.

Each variant owns a fixed, ordered list of rotation states.  A state is a 4x4
boolean matrix whose origin (top-left cell) is anchored at the piece's
``position``.  Rotating a piece only advances its index into that list; the
anchor never moves and there are no wall kicks.  Whether the rotated piece
fits is decided by :meth:`tetris_engine.board.Board.can_place`, not here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidTetrominoTypeError, RotationFailedError
from .point import Point

Shape = NDArray[np.bool_]

# Side length of every rotation-state matrix.
SHAPE_SIZE = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def _parse(rows: Sequence[str]) -> Shape:
    """Convert a picture made of ``#`` and ``.`` into a read-only matrix."""

    if len(rows) != SHAPE_SIZE or any(len(row) != SHAPE_SIZE for row in rows):
        raise ValueError(f"rotation state must be {SHAPE_SIZE}x{SHAPE_SIZE}: {rows!r}")
    matrix = np.array([[cell == "#" for cell in row] for row in rows], dtype=np.bool_)
    if int(np.count_nonzero(matrix)) != 4:
        raise ValueError(f"rotation state must have exactly 4 cells: {rows!r}")
    matrix.flags.writeable = False
    return matrix


# Rotation states in cycle order.  The first entry is the spawn orientation.
_STATE_PICTURES: Dict[TetrominoType, Tuple[Tuple[str, ...], ...]] = {
    TetrominoType.I: (
        ("....", "####", "....", "...."),
        ("..#.", "..#.", "..#.", "..#."),
    ),
    TetrominoType.O: (
        ("....", ".##.", ".##.", "...."),
    ),
    TetrominoType.T: (
        ("....", ".#..", "###.", "...."),
        ("....", ".#..", ".##.", ".#.."),
        ("....", "....", "###.", ".#.."),
        ("....", ".#..", "##..", ".#.."),
    ),
    TetrominoType.S: (
        ("....", ".##.", "##..", "...."),
        ("....", ".#..", ".##.", "..#."),
    ),
    TetrominoType.Z: (
        ("....", "##..", ".##.", "...."),
        ("....", "..#.", ".##.", ".#.."),
    ),
    TetrominoType.J: (
        ("....", "#...", "###.", "...."),
        ("....", ".##.", ".#..", ".#.."),
        ("....", "....", "###.", "..#."),
        ("....", ".#..", ".#..", "##.."),
    ),
    TetrominoType.L: (
        ("....", "..#.", "###.", "...."),
        ("....", ".#..", ".#..", ".##."),
        ("....", "....", "###.", "#..."),
        ("....", "##..", ".#..", ".#.."),
    ),
}


TETROMINO_SHAPES: Dict[TetrominoType, Tuple[Shape, ...]] = {
    t_type: tuple(_parse(state) for state in states)
    for t_type, states in _STATE_PICTURES.items()
}


def rotation_count(kind: TetrominoType) -> int:
    """Return how many distinct rotation states ``kind`` cycles through."""

    return len(TETROMINO_SHAPES[kind])


def shape_blocks(kind: TetrominoType, rotation: int) -> List[Point]:
    """Return the cell offsets for ``kind`` at ``rotation``.

    Offsets are relative to the matrix origin and listed row by row.  Values of
    ``rotation`` are wrapped so any integer is accepted.
    """

    states = TETROMINO_SHAPES[kind]
    state = states[rotation % len(states)]
    return [Point(int(col), int(row)) for row, col in np.argwhere(state)]


@dataclass
class Tetromino:
    """A piece on the board: its variant, rotation index and anchor."""

    kind: TetrominoType
    position: Point = field(default_factory=lambda: Point(0, 0))
    rotation: int = 0

    def __post_init__(self) -> None:
        try:
            self.kind = TetrominoType(self.kind)
        except ValueError as exc:
            raise InvalidTetrominoTypeError(f"unknown tetromino type: {self.kind!r}") from exc
        if self.kind not in TETROMINO_SHAPES:
            raise InvalidTetrominoTypeError(f"no rotation table for {self.kind.value}")
        self._state()

    def _state(self) -> Shape:
        states = TETROMINO_SHAPES.get(self.kind)
        if not states:
            raise RotationFailedError(f"no rotation table for {self.kind!r}")
        if not 0 <= self.rotation < len(states):
            raise RotationFailedError(
                f"{self.kind.value} has no rotation state {self.rotation}"
            )
        return states[self.rotation]

    @property
    def shape(self) -> Shape:
        """Return a writable copy of the current rotation-state matrix."""

        return self._state().copy()

    def blocks(self) -> List[Point]:
        """Return the absolute board cells covered by this piece."""

        origin = self.position
        return [
            Point(origin.x + int(col), origin.y + int(row))
            for row, col in np.argwhere(self._state())
        ]

    def move(self, delta: Point) -> None:
        """Translate the piece by ``delta`` without any collision check."""

        self.position = self.position + delta

    def rotate(self) -> None:
        """Advance to the next rotation state in the variant's cycle.

        Single-state variants are left untouched.

        Raises:
            RotationFailedError: If the current rotation index is not a valid
                state for this variant.
        """

        self._state()
        states = TETROMINO_SHAPES[self.kind]
        if len(states) <= 1:
            return
        self.rotation = (self.rotation + 1) % len(states)

    def copy(self) -> "Tetromino":
        """Return an independent piece with the same kind, rotation and anchor."""

        return Tetromino(self.kind, self.position, self.rotation)


__all__ = [
    "SHAPE_SIZE",
    "TETROMINO_SHAPES",
    "Tetromino",
    "TetrominoType",
    "rotation_count",
    "shape_blocks",
]
