"""
Full Pygame Renderer
====================

Renderer using pygame for human play. Supports both display mode and
headless RGB output.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from stacker.stack_core.config_loader import GameConfig, get_config


class PygameRenderer:
    """
    Pygame renderer.

    Draws the translucent backdrop, boxes, debris and a score line, plus a
    game over banner once the game has ended.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        if config is None:
            config = get_config()

        self._config = config

        if not pygame.get_init():
            pygame.init()

        # Display surface (created on demand)
        self._screen: Optional[pygame.Surface] = None
        self._screen_size: Optional[Tuple[int, int]] = None

        pygame.font.init()
        self._font = pygame.font.Font(None, 22)
        self._font_large = pygame.font.Font(None, 44)

        self._backdrop_color = (0, 0, 0, 128)
        self._text_color = (255, 255, 255)
        self._banner_color = (255, 220, 220)

    @property
    def window_size(self) -> Tuple[int, int]:
        return (self._config.playfield.width, self._config.playfield.height)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render to RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        base = pygame.Surface(self.window_size)
        self._render_to_surface(base, render_data)
        if (width, height) != self.window_size:
            base = pygame.transform.smoothscale(base, (width, height))
        array = pygame.surfarray.array3d(base)
        return np.transpose(array, (1, 0, 2))

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """Render to the pygame window, creating it on first use."""
        size = self.window_size
        if self._screen is None or self._screen_size != size:
            self._screen = pygame.display.set_mode(size)
            self._screen_size = size
            pygame.display.set_caption("Box Stacker")

        self._render_to_surface(self._screen, render_data)
        pygame.display.flip()

    def _render_to_surface(
        self,
        surface: pygame.Surface,
        render_data: Dict[str, Any]
    ) -> None:
        """Render game state to a pygame surface."""
        surface.fill(render_data["background"])

        backdrop = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        backdrop.fill(self._backdrop_color)
        surface.blit(backdrop, (0, 0))

        for box in render_data["boxes"]:
            pygame.draw.rect(surface, box["color"], pygame.Rect(*box["rect"]))

        debris = render_data["debris"]
        if debris["visible"]:
            pygame.draw.rect(surface, debris["color"], pygame.Rect(*debris["rect"]))

        score = self._font.render(f"Score: {render_data['score']}", True, self._text_color)
        surface.blit(score, (8, 6))

        if render_data["mode"] == "gameover":
            self._draw_game_over(surface, render_data["score"])

    def _draw_game_over(self, surface: pygame.Surface, score: int) -> None:
        w, h = surface.get_size()
        msg = self._font_large.render("GAME OVER", True, self._banner_color)
        surface.blit(msg, msg.get_rect(center=(w // 2, h // 2 - 16)))
        hint = self._font.render(f"Score {score} - R to restart", True, self._text_color)
        surface.blit(hint, hint.get_rect(center=(w // 2, h // 2 + 16)))

    def close(self) -> None:
        """Close the display window if one was opened."""
        if self._screen is not None:
            pygame.display.quit()
            self._screen = None
            self._screen_size = None
