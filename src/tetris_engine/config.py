"""Game configuration and tuning constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .board import HEIGHT, WIDTH
from .pieces import BagPieceSource, PieceSource, RandomPieceSource


# Base points per simultaneous line clear, multiplied by the level.
LINE_SCORES: Dict[int, int] = {1: 100, 2: 300, 3: 500, 4: 800}

# Lines needed to advance one level.
LINES_PER_LEVEL = 10

# Gravity timing used by the controller.
BASE_DROP_INTERVAL_MS = 1000
DROP_INTERVAL_STEP_MS = 100
MIN_DROP_INTERVAL_MS = 100


@dataclass(frozen=True)
class GameConfig:
    """Settings for one game session.

    ``seed`` feeds the piece source; ``bag`` switches from uniform random
    selection to a shuffled 7-bag.
    """

    width: int = WIDTH
    height: int = HEIGHT
    seed: Optional[int] = None
    bag: bool = False

    def source(self) -> PieceSource:
        """Build the piece source described by this configuration."""

        if self.bag:
            return BagPieceSource(self.seed)
        return RandomPieceSource(self.seed)
