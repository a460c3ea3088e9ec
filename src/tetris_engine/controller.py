"""Input decoding and gravity scheduling around :class:`GameService`.

The controller is the layer that front-ends talk to.  It keeps the pieces of
state that are not part of the rules: the pause flag and the drop timer.  It
also turns the engine's control-flow errors (:class:`InvalidMoveError`,
:class:`GameOverError`) into quiet no-ops.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Optional

from .config import GameConfig
from .errors import GameOverError, InvalidInputError, InvalidMoveError
from .game_service import GameService, GameState
from .pieces import PieceSource
from .point import DOWN, LEFT, RIGHT
from .utils import drop_interval_ms


LOGGER = logging.getLogger(__name__)

COMMANDS = ("left", "right", "down", "rotate", "drop", "pause", "quit", "restart")

_KEY_MAP: Dict[str, str] = {
    "a": "left",
    "d": "right",
    "s": "down",
    "w": "rotate",
    " ": "drop",
    "space": "drop",
    "p": "pause",
    "q": "quit",
    "r": "restart",
}


def map_input_to_command(key: str) -> str:
    """Decode a raw key or command name into one of :data:`COMMANDS`.

    Single-letter keys are case-insensitive.

    Raises:
        InvalidInputError: If ``key`` is not recognised.
    """

    if key in COMMANDS:
        return key
    command = _KEY_MAP.get(key) or (_KEY_MAP.get(key.lower()) if len(key) == 1 else None)
    if command is None:
        raise InvalidInputError(f"unknown input: {key!r}")
    return command


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameController:
    """Drive a :class:`GameService` from decoded commands and a clock.

    ``clock`` returns the current time in milliseconds and defaults to
    :func:`time.monotonic`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        source: Optional[PieceSource] = None,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self._source = source
        self._clock = clock if clock is not None else _monotonic_ms
        self.service = GameService(self.config, source)
        self.paused = False
        self.drop_interval = drop_interval_ms(self.service.level)
        self._drop_timer = self._clock()

    def state(self) -> GameState:
        return self.service.state()

    @property
    def game_over(self) -> bool:
        return self.service.game_over

    def tick(self) -> bool:
        """Apply gravity if the drop interval has elapsed.

        Returns ``True`` when a gravity step was applied.
        """

        if self.paused or self.service.game_over:
            return False
        now = self._clock()
        if now - self._drop_timer < self.drop_interval:
            return False
        try:
            self.service.update()
        except GameOverError:
            return False
        self._drop_timer = now
        self.drop_interval = drop_interval_ms(self.service.level)
        return True

    def handle_input(self, command: str) -> bool:
        """Execute ``command``.

        Returns ``False`` when the player asked to quit, ``True`` otherwise.
        Commands other than ``quit`` and ``restart`` are ignored once the game
        is over.

        Raises:
            InvalidInputError: If ``command`` is not one of :data:`COMMANDS`.
        """

        if command not in COMMANDS:
            raise InvalidInputError(f"unknown command: {command!r}")
        if command == "quit":
            return False
        if command == "restart":
            self.reset()
            return True
        if self.service.game_over:
            return True
        if command == "pause":
            self.toggle_pause()
            return True
        if self.paused:
            return True

        try:
            if command == "left":
                self.service.move_piece(LEFT)
            elif command == "right":
                self.service.move_piece(RIGHT)
            elif command == "down":
                self.service.move_piece(DOWN)
                self._drop_timer = self._clock()
            elif command == "rotate":
                self.service.rotate_piece()
            elif command == "drop":
                self.service.drop_piece()
                self._drop_timer = self._clock()
                self.drop_interval = drop_interval_ms(self.service.level)
        except (InvalidMoveError, GameOverError):
            pass
        return True

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        LOGGER.info("Paused" if self.paused else "Resumed")

    def reset(self) -> None:
        """Start a new game and clear the pause flag and timers."""

        self.service = GameService(self.config, self._source)
        self.paused = False
        self.drop_interval = drop_interval_ms(self.service.level)
        self._drop_timer = self._clock()
        LOGGER.info("Game restarted")


__all__ = ["COMMANDS", "GameController", "map_input_to_command"]
