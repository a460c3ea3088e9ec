import pytest

from tetris_engine.__main__ import build_parser, main
from tetris_engine.board import Board
from tetris_engine.game_service import GameService
from tetris_engine.pieces import FixedPieceSource
from tetris_engine.point import Point
from tetris_engine.tetromino import Tetromino, TetrominoType
from tetris_engine.utils import ACTIVE, EMPTY, LOCKED, render_grid, render_text


def test_render_grid_overlays_active_piece_without_mutating():
    board = Board(6, 4)
    board.set_block(Point(0, 3))
    grid = board.snapshot()
    piece = Tetromino(TetrominoType.O, Point(1, 0))

    cells = render_grid(grid, piece)

    assert cells[3][0] == LOCKED
    assert cells[1][2] == ACTIVE
    assert cells[2][3] == ACTIVE
    assert cells[0][0] == EMPTY
    assert board.occupied_count() == 1


def test_render_grid_skips_cells_outside_board():
    grid = Board(4, 4).snapshot()
    piece = Tetromino(TetrominoType.I, Point(2, 0))
    cells = render_grid(grid, piece)
    assert cells[1] == [EMPTY, EMPTY, ACTIVE, ACTIVE]


def test_render_text_shows_panel_and_board():
    service = GameService(source=FixedPieceSource(["T", "L"]))
    text = render_text(service.state())
    assert "Score: 0" in text
    assert "Level: 1" in text
    assert "Next: L" in text
    assert text.count("██") == 4
    assert "GAME OVER" not in text


def test_render_text_game_over_box():
    board = Board()
    board.set_block(Point(4, 1))
    service = GameService(source=FixedPieceSource(["O"]), board=board)
    assert "GAME OVER" in render_text(service.state())


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert (args.width, args.height, args.seed, args.bag) == (10, 20, None, False)
    args = build_parser().parse_args(["--seed", "4", "--bag", "--log-level", "DEBUG"])
    assert args.seed == 4
    assert args.bag
    assert args.log_level == "DEBUG"


def test_main_rejects_bad_board_size():
    with pytest.raises(SystemExit):
        main(["--width", "0"])
