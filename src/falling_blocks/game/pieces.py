from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    L = 3
    J = 4
    S = 5
    Z = 6


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.bool_)
    shape.setflags(write=False)
    return shape


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[1, 1, 1], [0, 1, 0]]),
    TetrominoType.L: _frozen([[1, 1, 1], [1, 0, 0]]),
    TetrominoType.J: _frozen([[1, 1, 1], [0, 0, 1]]),
    TetrominoType.S: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.Z: _frozen([[0, 1, 1], [1, 1, 0]]),
}

# Hex colors, indexed like TetrominoType.
PALETTE: Tuple[str, ...] = (
    "#FF0000",
    "#00FF00",
    "#0000FF",
    "#FFFF00",
    "#FF00FF",
    "#00FFFF",
    "#FFA500",
)


def color_token(kind: TetrominoType) -> int:
    """Grid value for a kind; 0 is reserved for empty cells."""
    return int(kind) + 1


def color_hex(token: int) -> str:
    if not 1 <= token <= len(PALETTE):
        raise ValueError(f"no color for token {token}; 0 marks an empty cell")
    return PALETTE[token - 1]


def rotate_cw(shape: Shape) -> Shape:
    """Quarter turn: an R x C shape becomes C x R with new[i][j] = old[j][C-1-i].

    Pure; the caller decides whether to commit the result.
    """
    rotated = np.ascontiguousarray(np.rot90(shape))
    rotated.setflags(write=False)
    return rotated


def spawn_x(grid_width: int, shape: Shape) -> int:
    return grid_width // 2 - shape.shape[1] // 2


@dataclass
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, grid_width: int, spawn_y: int = 0) -> "Piece":
        shape = BASE_SHAPES[kind]
        return cls(kind=kind, shape=shape, x=spawn_x(grid_width, shape), y=spawn_y)

    @property
    def color(self) -> int:
        return color_token(self.kind)

    def cells(self, shape: Shape | None = None) -> List[Tuple[int, int]]:
        """Occupied cells of `shape` (default: own shape) relative to the origin."""
        s = self.shape if shape is None else shape
        ys, xs = np.nonzero(s)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + x, origin_y + y) for x, y in self.cells()]


def color_rgb(token: int) -> Tuple[int, int, int]:
    h = color_hex(token).lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
