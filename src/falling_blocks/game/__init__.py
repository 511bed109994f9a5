"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation and line clearing
- Piece: Tetromino piece, shapes, palette and rotation
- can_place: Collision/placement check shared by gravity, moves and rotation
- ScoringRules: Flat per-line scoring
- GameEngine: Tick-driven state machine over a single GameState
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, PALETTE, Piece, TetrominoType, color_hex, color_rgb, rotate_cw
from .placement import can_place
from .rules import ScoringRules
from .core import (
    Action,
    GameConfig,
    GameEngine,
    GameSnapshot,
    GameState,
    LineClearEvent,
    Phase,
)

__all__ = [
    "GameGrid",
    "Piece",
    "TetrominoType",
    "BASE_SHAPES",
    "PALETTE",
    "color_hex",
    "color_rgb",
    "rotate_cw",
    "can_place",
    "ScoringRules",
    "GameEngine",
    "GameState",
    "GameConfig",
    "GameSnapshot",
    "LineClearEvent",
    "Phase",
    "Action",
]
