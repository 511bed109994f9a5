from __future__ import annotations

from typing import Optional

from .grid import GameGrid
from .pieces import Piece, Shape


def can_place(grid: GameGrid, piece: Piece, dx: int, dy: int, shape: Optional[Shape] = None) -> bool:
    """True if every occupied cell of `shape` fits at the piece position offset by (dx, dy).

    `shape` defaults to the piece's own shape; pass a prospective shape to
    validate a rotation. Neither the grid nor the piece is touched.
    """
    base_x = piece.x + dx
    base_y = piece.y + dy
    return all(grid.is_cell_free(base_x + x, base_y + y) for x, y in piece.cells(shape))
