"""Terminal front-end for the Tetris engine.

Run with: `python -m tetris_engine`

Type a command and press enter: ``a``/``d`` move, ``s`` soft-drops, ``w``
rotates, ``space`` (or an empty line) hard-drops, ``p`` pauses, ``r`` restarts
and ``q`` quits.  Gravity keeps running while you type.
"""

from __future__ import annotations

import argparse
import logging
import queue
import sys
import threading
import time
from typing import Optional, Sequence

from .config import GameConfig
from .controller import GameController, map_input_to_command
from .errors import InvalidInputError, InvalidSizeError
from .utils import render_text


LOGGER = logging.getLogger(__name__)

FRAME_SECONDS = 1 / 60
CLEAR_SCREEN = "\x1b[2J\x1b[H"

CONTROLS = (
    "Controls:",
    "  a/d: move left/right",
    "  s: move down",
    "  w: rotate",
    "  space: hard drop",
    "  p: pause",
    "  r: restart",
    "  q: quit",
)


def _read_lines(lines: "queue.Queue[Optional[str]]") -> None:
    for line in sys.stdin:
        line = line.rstrip("\n")
        lines.put(line if line else " ")
    lines.put(None)


def _draw(controller: GameController) -> None:
    frame = render_text(controller.state())
    if controller.paused:
        frame += "\n\n  PAUSED"
    sys.stdout.write(CLEAR_SCREEN + frame + "\n\n" + "\n".join(CONTROLS) + "\n> ")
    sys.stdout.flush()


def run(controller: GameController) -> None:
    """Run the game loop until the player quits or stdin closes."""

    lines: "queue.Queue[Optional[str]]" = queue.Queue()
    reader = threading.Thread(target=_read_lines, args=(lines,), daemon=True)
    reader.start()

    _draw(controller)
    running = True
    while running:
        dirty = False
        try:
            while True:
                key = lines.get_nowait()
                if key is None:
                    running = False
                    break
                try:
                    command = map_input_to_command(key)
                except InvalidInputError:
                    LOGGER.debug("Ignoring unknown input %r", key)
                    continue
                running = controller.handle_input(command)
                dirty = True
                if not running:
                    break
        except queue.Empty:
            pass

        if running and controller.tick():
            dirty = True
        if dirty:
            _draw(controller)
        time.sleep(FRAME_SECONDS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Tetris in the terminal.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece sequence")
    parser.add_argument("--width", type=int, default=GameConfig.width, help="board width")
    parser.add_argument("--height", type=int, default=GameConfig.height, help="board height")
    parser.add_argument("--bag", action="store_true", help="deal pieces from shuffled 7-bags")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (log lines go to stderr)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    config = GameConfig(width=args.width, height=args.height, seed=args.seed, bag=args.bag)
    try:
        controller = GameController(config)
    except InvalidSizeError as exc:
        parser.error(str(exc))
    try:
        run(controller)
    except KeyboardInterrupt:
        pass
    state = controller.state()
    print(f"\nFinal score: {state.score}  Lines: {state.lines}  Level: {state.level}")


if __name__ == "__main__":
    main()
