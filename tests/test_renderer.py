from __future__ import annotations

import pygame
import pytest

from falling_blocks.game import GameConfig, GameEngine
from falling_blocks.visualization.effects import ParticleSystem, ScreenFeedback
from falling_blocks.visualization.renderer import Renderer


CELL = 30


@pytest.fixture
def screen(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    surface = pygame.display.set_mode((10 * CELL, 20 * CELL))
    yield surface
    pygame.quit()


def _center(x: int, y: int) -> tuple[int, int]:
    return x * CELL + CELL // 2, y * CELL + CELL // 2


def _engine_with_red_row(y: int) -> GameEngine:
    engine = GameEngine(GameConfig(random_seed=0))
    for x in range(engine.grid.width):
        engine.grid.set_cell(x, y, 1)
    return engine


def test_locked_cells_drawn_in_palette_color(screen: pygame.Surface) -> None:
    engine = _engine_with_red_row(19)
    Renderer(cell_size=CELL).draw(screen, engine.snapshot(), ParticleSystem(), ScreenFeedback())

    assert tuple(screen.get_at(_center(8, 19)))[:3] == (255, 0, 0)
    assert tuple(screen.get_at(_center(8, 10)))[:3] == (0, 0, 0)


def test_game_over_overlay_darkens_board(screen: pygame.Surface) -> None:
    engine = _engine_with_red_row(0)
    for x in range(engine.grid.width):
        engine.grid.set_cell(x, 1, 1)
    engine.tick()
    assert engine.game_over

    Renderer(cell_size=CELL).draw(screen, engine.snapshot(), ParticleSystem(), ScreenFeedback())

    r, g, b = tuple(screen.get_at(_center(8, 1)))[:3]
    assert 0 < r < 128
    assert (g, b) == (0, 0)


def test_flash_lightens_background(screen: pygame.Surface) -> None:
    engine = GameEngine(GameConfig(random_seed=0))
    feedback = ScreenFeedback(shake_px=0)
    feedback.trigger()

    Renderer(cell_size=CELL).draw(screen, engine.snapshot(), ParticleSystem(), feedback)

    assert tuple(screen.get_at(_center(8, 10)))[:3] == (51, 51, 51)
