from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.board import Board
from tetris_engine.errors import BlockOccupiedError, InvalidSizeError, OutOfBoundsError
from tetris_engine.point import Point
from tetris_engine.tetromino import Tetromino, TetrominoType


def _fill_row(board: Board, row: int) -> None:
    for col in range(board.width):
        board.set_block(Point(col, row))


def test_default_board_is_empty_10_by_20() -> None:
    board = Board()
    assert (board.width, board.height) == (10, 20)
    assert board.snapshot().shape == (20, 10)
    assert board.occupied_count() == 0


@pytest.mark.parametrize("width, height", [(0, 20), (10, 0), (-1, 20), (10, -5)])
def test_invalid_size_rejected(width: int, height: int) -> None:
    with pytest.raises(InvalidSizeError):
        Board(width, height)
    with pytest.raises(ValueError):
        Board(width, height)


def test_is_valid_position_matches_bounds() -> None:
    board = Board(4, 3)
    for y in range(-2, 5):
        for x in range(-2, 6):
            expected = 0 <= x < 4 and 0 <= y < 3
            assert board.is_valid_position(Point(x, y)) is expected


def test_set_block_and_is_occupied() -> None:
    board = Board()
    board.set_block(Point(5, 10))
    assert board.is_occupied(Point(5, 10))
    board.set_block(Point(5, 10), False)
    assert not board.is_occupied(Point(5, 10))


@pytest.mark.parametrize("point", [Point(10, 0), Point(0, 20), Point(-1, 5), Point(3, -1)])
def test_cell_access_out_of_bounds(point: Point) -> None:
    board = Board()
    with pytest.raises(OutOfBoundsError):
        board.is_occupied(point)
    with pytest.raises(OutOfBoundsError):
        board.set_block(point)


def test_can_place() -> None:
    board = Board()
    piece = Tetromino(TetrominoType.O, Point(3, 0))
    assert board.can_place(piece)
    assert not board.can_place(None)

    board.set_block(Point(4, 1))
    assert not board.can_place(piece)

    off_board = Tetromino(TetrominoType.I, Point(8, 0))
    assert not board.can_place(off_board)


def test_place_marks_four_cells() -> None:
    board = Board()
    piece = Tetromino(TetrominoType.T, Point(0, 0))
    board.place(piece)
    assert board.occupied_count() == 4
    for block in piece.blocks():
        assert board.is_occupied(block)


def test_place_rejects_conflicts() -> None:
    board = Board()
    piece = Tetromino(TetrominoType.O, Point(3, 0))
    board.set_block(Point(5, 2))
    with pytest.raises(BlockOccupiedError):
        board.place(piece)
    assert board.occupied_count() == 1
    with pytest.raises(BlockOccupiedError):
        board.place(None)
    assert board.occupied_count() == 1


def test_completed_lines_ascending_including_gaps() -> None:
    board = Board()
    assert board.completed_lines() == []
    for row in (19, 15, 18):
        _fill_row(board, row)
    board.set_block(Point(0, 10))
    assert board.completed_lines() == [15, 18, 19]


def test_clear_single_line_drops_rows_above() -> None:
    board = Board()
    _fill_row(board, 19)
    board.set_block(Point(0, 18))
    before = board.occupied_count()

    board.clear_lines([19])

    grid = board.snapshot()
    assert grid[19].tolist() == [True] + [False] * 9
    assert not grid[0].any()
    assert board.occupied_count() == before - 10


def test_clear_two_adjacent_lines() -> None:
    board = Board()
    _fill_row(board, 18)
    _fill_row(board, 19)
    board.set_block(Point(2, 17))
    board.set_block(Point(7, 10))

    board.clear_lines([18, 19])

    assert board.occupied_count() == 2
    assert board.is_occupied(Point(2, 19))
    assert board.is_occupied(Point(7, 12))
    grid = board.snapshot()
    assert not grid[:2].any()


def test_clear_non_adjacent_lines() -> None:
    board = Board()
    _fill_row(board, 15)
    _fill_row(board, 19)
    board.set_block(Point(1, 17))
    board.set_block(Point(3, 14))

    board.clear_lines(board.completed_lines())

    assert board.occupied_count() == 2
    assert board.is_occupied(Point(1, 18))
    assert board.is_occupied(Point(3, 16))


def test_clear_lines_empty_request_is_noop() -> None:
    board = Board()
    board.set_block(Point(1, 1))
    board.clear_lines([])
    assert board.is_occupied(Point(1, 1))


@pytest.mark.parametrize("rows", [[20], [-1], [19, 25]])
def test_clear_lines_out_of_bounds_leaves_grid(rows: list[int]) -> None:
    board = Board()
    _fill_row(board, 19)
    before = board.snapshot()
    with pytest.raises(OutOfBoundsError):
        board.clear_lines(rows)
    assert np.array_equal(board.snapshot(), before)


@pytest.mark.parametrize("rows", [[18.5], ["3"], [19, None]])
def test_clear_lines_rejects_non_integer_rows(rows: list) -> None:
    board = Board()
    _fill_row(board, 18)
    _fill_row(board, 19)
    before = board.snapshot()
    with pytest.raises(OutOfBoundsError):
        board.clear_lines(rows)
    assert np.array_equal(board.snapshot(), before)


def test_is_game_over_only_for_top_row() -> None:
    board = Board()
    assert not board.is_game_over()
    board.set_block(Point(5, 1))
    assert not board.is_game_over()
    board.set_block(Point(9, 0))
    assert board.is_game_over()


def test_snapshot_is_read_only_copy() -> None:
    board = Board()
    grid = board.snapshot()
    with pytest.raises(ValueError):
        grid[0, 0] = True
    board.set_block(Point(0, 0))
    assert not grid[0, 0]


def test_reset_empties_board() -> None:
    board = Board()
    _fill_row(board, 3)
    board.reset()
    assert board.occupied_count() == 0
