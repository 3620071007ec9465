"""
Baseline Aligner Agent - Drops the box when it lines up.

A falling box keeps its x position, so the horizontal offset at the
moment of the drop is exactly the offset at landing. The box moves
|x_speed| units per tick while bouncing, so some tick always brings it
within |x_speed| / 2 of the target as it sweeps past.

Strategy:
- Wait while the game is not in BOUNCE (mode 0)
- Drop once |offset| <= max(tolerance, |x_speed| / 2)
"""

import numpy as np
from typing import Any, Dict, Optional

BOUNCE_MODE = 0


class StackerAgent:
    """
    Drops when the bouncing box is within tolerance of the box beneath.
    """

    def __init__(self, tolerance: float = 0.0, debug: bool = False):
        """
        Initialize the agent.

        Args:
            tolerance: Extra offset (units) accepted on top of half a tick of motion.
            debug: If True, print decisions to stdout.
        """
        self.tolerance = tolerance
        self.debug = debug

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset agent state for a new episode (stateless)."""
        pass

    def act(self, observation: Dict[str, Any]) -> int:
        """
        Decide whether to drop this tick.

        Args:
            observation: Observation dict from StackerEnv.

        Returns:
            1 to drop, 0 to wait.
        """
        if int(observation["mode"]) != BOUNCE_MODE:
            return 0

        offset = float(observation["offset"])
        half_step = abs(float(observation["x_speed"])) / 2.0
        window = max(self.tolerance, half_step)

        if abs(offset) <= window:
            if self.debug:
                print(f"[DEBUG] Drop at offset={offset:.1f} (window={window:.1f})")
            return 1
        return 0


def create_agent(**kwargs) -> StackerAgent:
    """Factory used by tooling."""
    return StackerAgent(**kwargs)


def act(observation: Dict[str, np.ndarray]) -> int:
    """Standalone act function (alternative to class-based agent)."""
    return StackerAgent().act(observation)
