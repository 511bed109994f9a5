from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from falling_blocks.game import Action, GameConfig, GameEngine, LineClearEvent
from falling_blocks.utils.logging import setup_logger

from .effects import ParticleSystem, ScreenFeedback
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_UP: Action.ROTATE,
}


def action_for_key(key: int) -> Optional[Action]:
    return KEY_TO_ACTION.get(key)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=1000, help="Gravity period in milliseconds")
    p.add_argument("--cell-size", type=int, default=30, help="Pixels per grid cell")
    p.add_argument("--log-level", type=str, default="info")
    return p


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        width=args.width,
        height=args.height,
        random_seed=args.seed,
        tick_ms=args.tick_ms,
        cell_size=args.cell_size,
    )


def run(config: Optional[GameConfig] = None) -> None:
    config = config or GameConfig()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        engine = GameEngine(config)
        renderer = Renderer(cell_size=config.cell_size)
        particles = ParticleSystem()
        feedback = ScreenFeedback()

        def on_clear(event: LineClearEvent) -> None:
            particles.emit_line_clear(event, config.cell_size)
            feedback.trigger()
            logger.info("cleared %d row(s), score=%d", event.count, engine.score)

        engine.add_line_clear_listener(on_clear)

        screen = pygame.display.set_mode((config.width * config.cell_size, config.height * config.cell_size))
        pygame.display.set_caption("Falling Blocks")

        last_tick = pygame.time.get_ticks()
        running = True
        while running:
            pending: List[Action] = []
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and engine.game_over:
                        logger.info("restarting after game over (score=%d)", engine.score)
                        engine.reset()
                    else:
                        action = action_for_key(event.key)
                        if action is not None:
                            pending.append(action)

            for action in pending:
                engine.step(action)

            now = pygame.time.get_ticks()
            if now - last_tick >= config.tick_ms:
                engine.tick()
                last_tick = now

            # Effects keep running after game over
            dt = clock.tick(60)
            particles.update()
            feedback.update(dt)
            renderer.draw(screen, engine.snapshot(), particles, feedback)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="falling_blocks", use_rich=True, level=args.log_level)
    run(config_from_args(args))


if __name__ == "__main__":  # pragma: no cover
    main()
