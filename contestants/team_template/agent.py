"""
Team Template Agent
===================

Your agent must provide one of:
1. A `StackerAgent` class with an `act(obs) -> action` method
2. A standalone `act(obs) -> action` function

Actions are 1 (drop the box) or 0 (wait). Drops outside the bounce phase
are ignored by the game.
"""

from __future__ import annotations

from typing import Dict
import numpy as np


class StackerAgent:
    """
    Your agent implementation.

    Replace the strategy in `act()` with your own logic.
    """

    def __init__(self):
        """Initialize your agent. Load models, set up state, etc."""
        self.rng = np.random.default_rng()

    def act(self, obs: Dict[str, np.ndarray]) -> int:
        """
        Choose an action based on the observation.

        Args:
            obs: Dictionary containing game state (see StackerEnv).

        Returns:
            action: 1 to drop, 0 to wait.
        """
        # Drops at a random moment roughly once every 30 ticks
        return int(self.rng.random() < 1 / 30)

    def reset(self) -> None:
        """Called when a new episode starts (optional)."""
        pass


def act(obs: Dict[str, np.ndarray]) -> int:
    """Standalone act function (alternative to class-based agent)."""
    return int(np.random.random() < 1 / 30)
