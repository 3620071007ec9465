"""
RNG - Box Color Generator
=========================

Provides deterministic, seedable box colors. The base box and the first
dropped box are always drawn in the base color; every later box gets a
uniform random RGB triple.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from stacker.stack_core.config_loader import GameConfig, get_config

Color = Tuple[int, int, int]

# Box indexes that always use the base color
FIXED_COLOR_INDEXES = (0, 1)


class ColorGenerator:
    """
    Seedable color source for newly spawned boxes.

    Colors are purely cosmetic; seeding only matters for reproducible
    replays and rendered observations.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize the generator.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = random.Random(seed)

    def _channel(self) -> int:
        colors = self._config.colors
        return self._rng.randint(colors.random_min, colors.random_max)

    def color_for(self, index: int) -> Color:
        """
        Color for the box at ``index``.

        Args:
            index: Position of the box in the stack.

        Returns:
            RGB triple.
        """
        if index in FIXED_COLOR_INDEXES:
            return self._config.colors.base
        return (self._channel(), self._channel(), self._channel())

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the color sequence.

        Args:
            seed: New random seed. Keeps the current one if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
