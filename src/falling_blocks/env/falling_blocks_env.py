from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from falling_blocks.game import Action, GameConfig, GameEngine, PALETTE, color_rgb


class FallingBlocksEnv(gym.Env):
    """
    Falling-block environment driven by the game engine's own tick.

    Actions (5 total), the engine's `Action` enum:
      0: No-op
      1: Move Left
      2: Move Right
      3: Soft Drop (one row, never locks)
      4: Rotate

    Each step applies the action, then advances the game by one tick. The
    observation is the grid with the active piece overlaid (0 empty, 1..7 color
    ids). The reward is the score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.engine = GameEngine(config)
        self.render_mode = render_mode

        h = self.engine.config.height
        w = self.engine.config.width
        self.observation_space = spaces.Box(low=0, high=len(PALETTE), shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "lines_cleared_total": self.engine.state.lines_cleared_total,
            "pieces_spawned": self.engine.state.pieces_spawned,
            "phase": self.engine.phase.value,
            "steps": self._steps,
        }

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[dict] = None
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng.seed(seed)
        self.engine.reset()
        self._steps = 0
        # Bring the first piece onto the board.
        self.engine.tick()
        return self.engine.get_state(), self._get_info()

    def step(self, action: int):
        score_before = self.engine.score
        moved = self.engine.step(Action(int(action)))
        self.engine.tick()
        self._steps += 1

        terminated = bool(self.engine.game_over)
        truncated = self._steps >= self.engine.config.max_episode_steps and not terminated
        reward = float(self.engine.score - score_before)

        info = self._get_info()
        info["action_applied"] = moved
        return self.engine.get_state(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.engine.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = color_rgb(v) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
