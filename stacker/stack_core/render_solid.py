"""
Solid Renderer
==============

Fast numpy-based renderer that draws every box and the debris as filled
rectangles. Used for image observations and headless tooling.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import numpy as np

from stacker.stack_core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders render data (from ``CoreGame.get_render_data()``) to RGB arrays.

    The playfield is scaled uniformly to fit the output size and centered.
    Rectangles outside the image are clipped.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._bg_color = np.array(config.colors.background, dtype=np.uint8)
        self._wall_color = np.array([60, 60, 70], dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from CoreGame.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = np.array(render_data.get("background", self._bg_color), dtype=np.uint8)

        field_w = render_data["playfield_width"]
        field_h = render_data["playfield_height"]
        scale = min(width / field_w, height / field_h)
        offset_x = (width - field_w * scale) / 2
        offset_y = (height - field_h * scale) / 2

        # Side walls mark the bounce limits
        left = int(offset_x)
        right = int(offset_x + field_w * scale)
        if left > 0:
            img[:, left - 1:left] = self._wall_color
        if right < width:
            img[:, right:right + 1] = self._wall_color

        for box in render_data["boxes"]:
            self._fill_rect(img, box["rect"], box["color"], scale, offset_x, offset_y)

        debris = render_data["debris"]
        if debris["visible"]:
            self._fill_rect(img, debris["rect"], debris["color"], scale, offset_x, offset_y)

        return img

    def _fill_rect(
        self,
        img: np.ndarray,
        rect: Tuple[float, float, float, float],
        color: Tuple[int, int, int],
        scale: float,
        offset_x: float,
        offset_y: float
    ) -> None:
        """Fill a screen-space rectangle, clipped to the image."""
        height, width = img.shape[:2]
        x, y, w, h = rect

        x_min = max(0, int(round(x * scale + offset_x)))
        x_max = min(width, int(round((x + w) * scale + offset_x)))
        y_min = max(0, int(round(y * scale + offset_y)))
        y_max = min(height, int(round((y + h) * scale + offset_y)))

        if y_min >= y_max or x_min >= x_max:
            return

        img[y_min:y_max, x_min:x_max] = np.array(color, dtype=np.uint8)

    def render_to_screen(self, render_data: Dict[str, Any]) -> None:
        """
        Render to screen (no-op for solid renderer).

        Use PygameRenderer for screen display.
        """
        pass

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
