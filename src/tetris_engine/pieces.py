"""Piece sources deciding which tetromino comes next.

The game service never touches a global random generator; it asks a
:class:`PieceSource` for the next variant.  Tests use
:class:`FixedPieceSource` to make whole games reproducible.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Protocol

from .tetromino import TetrominoType


class PieceSource(Protocol):
    """Anything that can name the next tetromino variant."""

    def next_kind(self) -> TetrominoType:
        ...


class RandomPieceSource:
    """Pick each variant uniformly at random."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def next_kind(self) -> TetrominoType:
        return self._rng.choice(list(TetrominoType))


class BagPieceSource:
    """Deal variants from shuffled bags holding one of each of the seven.

    Every run of seven consecutive pieces starting at a bag boundary contains
    each variant exactly once.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)
        self._bag: List[TetrominoType] = []

    def next_kind(self) -> TetrominoType:
        if not self._bag:
            self._bag = list(TetrominoType)
            self._rng.shuffle(self._bag)
        return self._bag.pop()


class FixedPieceSource:
    """Replay a predetermined sequence of variants.

    With ``cycle=True`` the sequence restarts once exhausted; otherwise an
    ``IndexError`` is raised.
    """

    def __init__(self, kinds: Iterable[TetrominoType | str], *, cycle: bool = True) -> None:
        self._kinds = [TetrominoType(kind) for kind in kinds]
        if not self._kinds:
            raise ValueError("FixedPieceSource needs at least one tetromino type")
        self._cycle = cycle
        self._index = 0

    def next_kind(self) -> TetrominoType:
        if self._index >= len(self._kinds):
            if not self._cycle:
                raise IndexError("piece sequence exhausted")
            self._index = 0
        kind = self._kinds[self._index]
        self._index += 1
        return kind


__all__ = ["PieceSource", "RandomPieceSource", "BagPieceSource", "FixedPieceSource"]
