from __future__ import annotations

from typing import List

import numpy as np


EMPTY = 0


class GameGrid:
    """Fixed-size matrix of locked cells.

    Row 0 is the top. The grid uses 0 for empty cells and positive integers
    (palette ids) for occupied cells, so a cell's value doubles as its color.
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_cell_free(self, x: int, y: int) -> bool:
        # Anything above the top edge counts as free so pieces can spawn partly hidden.
        if x < 0 or x >= self.width or y >= self.height:
            return False
        return y < 0 or self.grid[y, x] == EMPTY

    def cell(self, x: int, y: int) -> int:
        return int(self.grid[y, x])

    def set_cell(self, x: int, y: int, color: int) -> None:
        if not self.is_inside(x, y):
            return
        self.grid[y, x] = color

    def is_row_full(self, row: int) -> bool:
        if not 0 <= row < self.height:
            raise IndexError(f"row {row} outside grid of height {self.height}")
        return bool(np.all(self.grid[row] != EMPTY))

    def full_rows(self) -> List[int]:
        """Indices of full rows, bottom to top."""
        return [y for y in range(self.height - 1, -1, -1) if self.is_row_full(y)]

    def clear_full_rows(self) -> int:
        """Remove full rows, shift the rest down and return how many were cleared.

        Single compaction pass from the bottom: surviving rows are copied down to
        the write index, then the vacated rows at the top are emptied.
        """
        write = self.height - 1
        cleared = 0
        for read in range(self.height - 1, -1, -1):
            if self.is_row_full(read):
                cleared += 1
                continue
            if write != read:
                self.grid[write] = self.grid[read]
            write -= 1
        if cleared:
            self.grid[: write + 1] = EMPTY
        return cleared

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
