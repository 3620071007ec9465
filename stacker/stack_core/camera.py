"""
Camera
======

Linear vertical scroll that keeps the top of the stack on screen.
"""

from __future__ import annotations

from typing import Optional

from stacker.stack_core.config_loader import GameConfig, get_config


class Camera:
    """
    Scroll owed after each landing, paid back one unit per tick.

    ``camera_y`` never decreases.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._camera_y: int = 0
        self._scroll_counter: int = 0

    @property
    def camera_y(self) -> int:
        """Cumulative scroll offset."""
        return self._camera_y

    @property
    def scroll_counter(self) -> int:
        """Scroll ticks still owed."""
        return self._scroll_counter

    @property
    def scrolling(self) -> bool:
        return self._scroll_counter > 0

    def arm(self) -> None:
        """Owe one box height of scroll (called on every successful landing)."""
        self._scroll_counter += self._config.box_height

    def step(self) -> None:
        """Advance the scroll by one tick."""
        if self._scroll_counter > 0:
            self._camera_y += 1
            self._scroll_counter -= 1

    def to_screen_y(self, logical_y: float) -> float:
        """Project a logical height to a screen y coordinate."""
        return self._config.camera.to_screen_y(logical_y, self._camera_y)

    def reset(self) -> None:
        self._camera_y = 0
        self._scroll_counter = 0
