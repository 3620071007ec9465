"""
Alignment Resolver
==================

Decides what happens when a falling box meets the box beneath it: the
overlap survives (trimmed, with a debris slice) or nothing overlaps and
the game ends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from stacker.stack_core.boxes import Box, Debris


@dataclass(frozen=True)
class LandingResult:
    """Outcome of a landing. Geometry fields are only meaningful if survived."""
    survived: bool
    difference: int          # current.x - previous.x, signed
    x: int                   # Surviving box x
    width: int               # Surviving box width
    debris: Optional[Debris]

    @property
    def trimmed(self) -> int:
        """Width sliced off the landed box."""
        return abs(self.difference)

    @property
    def perfect(self) -> bool:
        return self.survived and self.difference == 0

    def __repr__(self) -> str:
        if not self.survived:
            return f"LandingResult(miss, difference={self.difference})"
        return f"LandingResult(x={self.x}, width={self.width}, trimmed={self.trimmed})"


def resolve_landing(current: Box, previous: Box) -> LandingResult:
    """
    Compute the overlap of ``current`` resting on ``previous``.

    Args:
        current: The box that just landed.
        previous: The box directly beneath it.

    Returns:
        LandingResult. Neither box is modified.
    """
    difference = current.x - previous.x

    if abs(difference) >= current.width:
        return LandingResult(
            survived=False,
            difference=difference,
            x=current.x,
            width=current.width,
            debris=None
        )

    if current.x > previous.x:
        # Overhang on the right: keep x, slice off the right end
        width = current.width - difference
        x = current.x
        debris = Debris(x=x + width, y=current.y, width=difference)
    else:
        # Overhang on the left (or perfect): snap to the box beneath
        width = current.width + difference
        x = previous.x
        debris = Debris(x=current.x, y=current.y, width=-difference)

    return LandingResult(
        survived=True,
        difference=difference,
        x=x,
        width=width,
        debris=debris
    )


def apply_landing(current: Box, result: LandingResult) -> None:
    """Trim ``current`` in place to the surviving geometry."""
    assert result.survived, "Cannot apply a missed landing"
    current.x = result.x
    current.width = result.width
