from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, List, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import BASE_SHAPES, Piece, Shape, TetrominoType, rotate_cw
from .placement import can_place
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    DOWN = 3
    ROTATE = 4


class Phase(Enum):
    SPAWNING = "spawning"
    FALLING = "falling"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0
    tick_ms: int = 1000
    cell_size: int = 30
    max_episode_steps: int = 10000


@dataclass
class GameState:
    grid: GameGrid
    piece: Optional[Piece] = None
    score: int = 0
    game_over: bool = False
    lines_cleared_total: int = 0
    pieces_spawned: int = 0

    @property
    def phase(self) -> Phase:
        if self.game_over:
            return Phase.GAME_OVER
        if self.piece is None:
            return Phase.SPAWNING
        return Phase.FALLING


@dataclass(frozen=True)
class LineClearEvent:
    """Rows removed by one lock, captured before they were overwritten.

    `rows` are grid indices bottom to top; `colors[i]` holds the color tokens
    of `rows[i]` left to right.
    """

    rows: Tuple[int, ...]
    colors: Tuple[Tuple[int, ...], ...]

    @property
    def count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class PieceView:
    kind: TetrominoType
    shape: Shape
    color: int
    x: int
    y: int


@dataclass(frozen=True)
class GameSnapshot:
    grid: np.ndarray
    piece: Optional[PieceView]
    score: int
    game_over: bool
    lines_cleared_total: int = 0


LineClearListener = Callable[[LineClearEvent], None]


class GameEngine:
    """Spawn, gravity, lock, line clear and game over over a single GameState.

    The engine has no clock of its own: a host calls `tick()` on a fixed period
    and forwards player commands in between, all from one thread.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        widest = max(s.shape[1] for s in BASE_SHAPES.values())
        if self.config.width < widest:
            raise ValueError(f"grid width {self.config.width} is narrower than the widest piece ({widest})")
        self.state = GameState(grid=GameGrid(self.config.width, self.config.height))
        self.last_clear: Optional[LineClearEvent] = None
        self._listeners: List[LineClearListener] = []

    # Convenience accessors
    @property
    def grid(self) -> GameGrid:
        return self.state.grid

    @property
    def piece(self) -> Optional[Piece]:
        return self.state.piece

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def add_line_clear_listener(self, listener: LineClearListener) -> None:
        self._listeners.append(listener)

    def reset(self) -> None:
        self.state.grid.reset()
        self.state.piece = None
        self.state.score = 0
        self.state.game_over = False
        self.state.lines_cleared_total = 0
        self.state.pieces_spawned = 0
        self.last_clear = None

    def _random_kind(self) -> TetrominoType:
        return TetrominoType(self.rng.randrange(len(TetrominoType)))

    def _spawn_piece(self) -> bool:
        piece = Piece.spawn(self._random_kind(), self.grid.width, self.config.spawn_y)
        self.state.piece = piece
        self.state.pieces_spawned += 1
        logger.debug("spawned %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        if not can_place(self.grid, piece, 0, 0):
            self.state.game_over = True
            logger.info(
                "game over: %s blocked at spawn, score=%d lines=%d",
                piece.kind.name,
                self.state.score,
                self.state.lines_cleared_total,
            )
            return False
        return True

    def _lock_piece(self) -> int:
        piece = self.state.piece
        assert piece is not None
        for x, y in piece.cells_at(piece.x, piece.y):
            if y >= 0:
                self.grid.set_cell(x, y, piece.color)

        full = self.grid.full_rows()
        event: Optional[LineClearEvent] = None
        if full:
            event = LineClearEvent(
                rows=tuple(full),
                colors=tuple(tuple(int(v) for v in self.grid.grid[y]) for y in full),
            )
        lines = self.grid.clear_full_rows()
        self.state.score += self.rules.score_for_lines(lines)
        self.state.lines_cleared_total += lines
        self.state.piece = None
        logger.debug("locked %s at (%d, %d), cleared %d", piece.kind.name, piece.x, piece.y, lines)

        if event is not None:
            self.last_clear = event
            for listener in self._listeners:
                listener(event)
        return lines

    def tick(self) -> None:
        """Advance the game by one gravity period."""
        if self.state.game_over:
            return
        if self.state.piece is None and not self._spawn_piece():
            return
        piece = self.state.piece
        assert piece is not None
        if can_place(self.grid, piece, 0, 1):
            piece.y += 1
        else:
            self._lock_piece()

    def _shift(self, dx: int, dy: int) -> bool:
        piece = self.state.piece
        if self.state.game_over or piece is None:
            return False
        if not can_place(self.grid, piece, dx, dy):
            return False
        piece.x += dx
        piece.y += dy
        return True

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def soft_drop(self) -> bool:
        # Blocked drops wait for the next tick to lock.
        return self._shift(0, 1)

    def rotate(self) -> bool:
        piece = self.state.piece
        if self.state.game_over or piece is None:
            return False
        rotated = rotate_cw(piece.shape)
        if not can_place(self.grid, piece, 0, 0, shape=rotated):
            return False
        piece.shape = rotated
        return True

    def step(self, action: Action | int) -> bool:
        """Apply one player command; returns whether the state changed."""
        action = Action(action)
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.DOWN:
            return self.soft_drop()
        if action == Action.ROTATE:
            return self.rotate()
        return False

    def snapshot(self) -> GameSnapshot:
        piece = self.state.piece
        view = None
        if piece is not None:
            view = PieceView(kind=piece.kind, shape=piece.shape, color=piece.color, x=piece.x, y=piece.y)
        return GameSnapshot(
            grid=self.grid.clone_state(),
            piece=view,
            score=self.state.score,
            game_over=self.state.game_over,
            lines_cleared_total=self.state.lines_cleared_total,
        )

    def get_state(self) -> np.ndarray:
        """Grid copy with the active piece's visible cells overlaid."""
        state = self.grid.clone_state()
        piece = self.state.piece
        if piece is not None:
            for x, y in piece.cells_at(piece.x, piece.y):
                if self.grid.is_inside(x, y):
                    state[y, x] = piece.color
        return state
