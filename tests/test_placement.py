from __future__ import annotations

import numpy as np

from falling_blocks.game import BASE_SHAPES, GameGrid, Piece, TetrominoType, can_place, rotate_cw


def test_left_wall_blocks_horizontal_i_piece() -> None:
    grid = GameGrid(10, 20)
    piece = Piece.spawn(TetrominoType.I, grid.width)
    piece.x = 0

    assert not can_place(grid, piece, -1, 0)
    assert can_place(grid, piece, 1, 0)


def test_right_wall_and_floor() -> None:
    grid = GameGrid(10, 20)
    piece = Piece.spawn(TetrominoType.O, grid.width)
    piece.x, piece.y = 8, 18

    assert not can_place(grid, piece, 1, 0)
    assert not can_place(grid, piece, 0, 1)
    assert can_place(grid, piece, -1, 0)


def test_occupied_cell_blocks_move() -> None:
    grid = GameGrid(10, 20)
    piece = Piece.spawn(TetrominoType.O, grid.width)
    grid.set_cell(4, 2, 1)

    assert not can_place(grid, piece, 0, 1)
    assert can_place(grid, piece, 1, 0)


def test_empty_shape_cells_impose_nothing() -> None:
    grid = GameGrid(10, 20)
    piece = Piece(kind=TetrominoType.T, shape=BASE_SHAPES[TetrominoType.T], x=0, y=0)
    # T is [[1,1,1],[0,1,0]]; (0, 1) is an empty corner.
    grid.set_cell(0, 1, 4)

    assert can_place(grid, piece, 0, 0)


def test_cells_above_the_top_are_free() -> None:
    grid = GameGrid(10, 20)
    piece = Piece(kind=TetrominoType.I, shape=rotate_cw(BASE_SHAPES[TetrominoType.I]), x=0, y=-3)

    assert can_place(grid, piece, 0, 0)


def test_prospective_shape_is_checked_instead_of_current() -> None:
    grid = GameGrid(10, 20)
    piece = Piece.spawn(TetrominoType.I, grid.width)
    piece.y = 19
    vertical = rotate_cw(piece.shape)

    assert can_place(grid, piece, 0, 0)
    assert not can_place(grid, piece, 0, 0, shape=vertical)


def test_can_place_is_pure() -> None:
    grid = GameGrid(10, 20)
    grid.set_cell(5, 10, 2)
    piece = Piece.spawn(TetrominoType.L, grid.width)
    piece.y = 7
    grid_before = grid.clone_state()
    piece_before = (piece.kind, piece.shape.copy(), piece.x, piece.y)

    for dx, dy in [(0, 1), (-1, 0), (1, 0), (0, 0), (0, 5), (-9, 0)]:
        for _ in range(3):
            can_place(grid, piece, dx, dy)
    can_place(grid, piece, 0, 0, shape=rotate_cw(piece.shape))

    assert np.array_equal(grid.grid, grid_before)
    assert (piece.kind, piece.x, piece.y) == (piece_before[0], piece_before[2], piece_before[3])
    assert np.array_equal(piece.shape, piece_before[1])
