"""Exception types raised by the Tetris engine.

Every error derives from :class:`TetrisError`.  Errors that describe a bad
argument also derive from the matching builtin (``ValueError`` or
``IndexError``) so callers used to the builtins keep working.

:class:`InvalidMoveError` and :class:`GameOverError` are control-flow signals
rather than faults: the controller absorbs them silently.
"""

from __future__ import annotations


class TetrisError(Exception):
    """Base class for all engine errors."""


class InvalidSizeError(TetrisError, ValueError):
    """Board dimensions are not strictly positive."""


class OutOfBoundsError(TetrisError, IndexError):
    """A cell or row index lies outside the board."""


class BlockOccupiedError(TetrisError):
    """A piece was committed onto occupied or off-board cells."""


class InvalidTetrominoTypeError(TetrisError, ValueError):
    """The requested variant is not one of the seven tetrominoes."""


class RotationFailedError(TetrisError):
    """The piece's rotation state does not exist in its rotation table."""


class InvalidMoveError(TetrisError):
    """A move or rotation was rejected because the result does not fit."""


class NoPieceError(TetrisError):
    """A command needed an active piece but there was none."""


class GameOverError(TetrisError):
    """A command was issued after the game ended."""


class InvalidInputError(TetrisError, ValueError):
    """A key or command name could not be decoded."""


__all__ = [
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
