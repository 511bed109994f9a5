from __future__ import annotations

import argparse
import logging

import gymnasium as gym

# Ensure envs are registered
import falling_blocks.env  # noqa: F401
from falling_blocks.utils.logging import setup_logger


logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d finished: score=%d lines=%d", episodes, info["score"], info["lines_cleared_total"])
            obs, info = env.reset()
    env.close()
    logger.info("random agent total reward: %.2f over %d steps", total_reward, steps)
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="falling_blocks", use_rich=True, level=args.log_level)
    run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
