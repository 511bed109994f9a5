from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import GameSnapshot, color_rgb

from .effects import ParticleSystem, ScreenFeedback


BACKGROUND = (0, 0, 0)
FLASH_BACKGROUND = (51, 51, 51)
TEXT_COLOR = (255, 255, 255)


def _glow(color: Tuple[int, int, int]) -> Tuple[int, int, int]:
    return tuple(min(255, c // 2 + 40) for c in color)  # type: ignore[return-value]


class Renderer:
    def __init__(self, cell_size: int = 30) -> None:
        self.cell_size = cell_size
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont("Arial", 20)
            self._big_font = pygame.font.SysFont("Arial", 40)
        return self._font, self._big_font

    def _block(self, surf: pygame.Surface, x: int, y: int, color: Tuple[int, int, int], glow: int) -> None:
        cs = self.cell_size
        halo = pygame.Rect(x * cs - glow, y * cs - glow, cs - 1 + 2 * glow, cs - 1 + 2 * glow)
        pygame.draw.rect(surf, _glow(color), halo, border_radius=glow)
        pygame.draw.rect(surf, color, pygame.Rect(x * cs, y * cs, cs - 1, cs - 1))

    def _board_surface(self, snap: GameSnapshot, particles: Optional[ParticleSystem], flashing: bool) -> pygame.Surface:
        h, w = snap.grid.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(FLASH_BACKGROUND if flashing else BACKGROUND)

        for y in range(h):
            for x in range(w):
                v = int(snap.grid[y, x])
                if v:
                    self._block(surf, x, y, color_rgb(v), glow=2)

        piece = snap.piece
        if piece is not None:
            color = color_rgb(piece.color)
            for py in range(piece.shape.shape[0]):
                for px in range(piece.shape.shape[1]):
                    if piece.shape[py, px] and piece.y + py >= 0:
                        self._block(surf, piece.x + px, piece.y + py, color, glow=3)

        if particles is not None:
            for p in particles.particles:
                dot = pygame.Surface((int(p.size * 2) + 1, int(p.size * 2) + 1), pygame.SRCALPHA)
                alpha = max(0, min(255, int(p.alpha * 255)))
                pygame.draw.circle(dot, (*p.color, alpha), (int(p.size), int(p.size)), int(p.size))
                surf.blit(dot, (int(p.x - p.size), int(p.y - p.size)))
        return surf

    def _overlay_text(self, surf: pygame.Surface, snap: GameSnapshot) -> None:
        font, big_font = self._fonts()
        surf.blit(font.render(f"Score: {snap.score}", True, TEXT_COLOR), (10, 10))
        if not snap.game_over:
            return
        shade = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 178))
        surf.blit(shade, (0, 0))
        cx, cy = surf.get_width() // 2, surf.get_height() // 2
        title = big_font.render("Game Over!", True, TEXT_COLOR)
        surf.blit(title, title.get_rect(center=(cx, cy)))
        final = font.render(f"Final Score: {snap.score}", True, TEXT_COLOR)
        surf.blit(final, final.get_rect(center=(cx, cy + 40)))

    def draw(
        self,
        screen: pygame.Surface,
        snap: GameSnapshot,
        particles: Optional[ParticleSystem] = None,
        feedback: Optional[ScreenFeedback] = None,
    ) -> None:
        flashing = feedback is not None and feedback.flashing
        offset = feedback.offset if feedback is not None else (0, 0)
        board = self._board_surface(snap, particles, flashing)
        self._overlay_text(board, snap)
        screen.fill(FLASH_BACKGROUND if flashing else BACKGROUND)
        screen.blit(board, offset)
        pygame.display.flip()
