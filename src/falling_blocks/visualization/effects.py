from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from falling_blocks.game import LineClearEvent, color_rgb


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Tuple[int, int, int]
    alpha: float = 1.0
    life: float = 20.0

    @property
    def alive(self) -> bool:
        return self.life > 0 and self.alpha > 0


class ParticleSystem:
    """Burst particles for cleared cells, updated once per frame."""

    GRAVITY = 0.2
    FADE = 0.05
    PER_CELL = 10

    def __init__(self, max_particles: int = 100, rng: Optional[random.Random] = None) -> None:
        self.max_particles = int(max_particles)
        self.rng = rng or random.Random()
        self.particles: List[Particle] = []

    def emit(self, x: float, y: float, color: Tuple[int, int, int]) -> None:
        for _ in range(self.PER_CELL):
            self.particles.append(
                Particle(
                    x=x,
                    y=y,
                    vx=self.rng.uniform(-5.0, 5.0),
                    vy=self.rng.uniform(-15.0, -5.0),
                    size=self.rng.uniform(2.0, 7.0),
                    color=color,
                    life=self.rng.uniform(10.0, 30.0),
                )
            )
        # Keep the newest
        if len(self.particles) > self.max_particles:
            del self.particles[: len(self.particles) - self.max_particles]

    def emit_line_clear(self, event: LineClearEvent, cell_size: int) -> None:
        half = cell_size / 2
        for row, colors in zip(event.rows, event.colors):
            for x, token in enumerate(colors):
                self.emit(x * cell_size + half, row * cell_size + half, color_rgb(token))

    def update(self) -> None:
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.vy += self.GRAVITY
            p.alpha -= self.FADE
            p.life -= 1
        self.particles = [p for p in self.particles if p.alive]


class ScreenFeedback:
    """Background flash and screen shake triggered by a line clear."""

    def __init__(
        self,
        flash_ms: int = 100,
        shake_ms: int = 200,
        shake_px: int = 5,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.flash_ms = flash_ms
        self.shake_ms = shake_ms
        self.shake_px = shake_px
        self.rng = rng or random.Random()
        self._flash_left = 0
        self._shake_left = 0
        self.offset: Tuple[int, int] = (0, 0)

    def trigger(self) -> None:
        self._flash_left = self.flash_ms
        self._shake_left = self.shake_ms
        self.offset = (
            self.rng.randint(-self.shake_px, self.shake_px),
            self.rng.randint(-self.shake_px, self.shake_px),
        )

    @property
    def flashing(self) -> bool:
        return self._flash_left > 0

    def update(self, dt_ms: int) -> None:
        self._flash_left = max(0, self._flash_left - dt_ms)
        self._shake_left = max(0, self._shake_left - dt_ms)
        if self._shake_left == 0:
            self.offset = (0, 0)
