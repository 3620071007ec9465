"""
Box Physics
===========

Per-tick integrators for the bouncing and falling box.

Both integrators mutate only the box they are given and return whatever
the caller needs to update the rest of the game state.
"""

from __future__ import annotations

from stacker.stack_core.boxes import Box


def bounce_step(box: Box, x_speed: int, playfield_width: int) -> int:
    """
    Slide ``box`` horizontally by one tick.

    The box is moved first; if it then pokes past either wall the speed
    is reflected for the next tick. Overshoot is not clamped.

    Args:
        box: The bouncing box.
        x_speed: Signed horizontal speed.
        playfield_width: X coordinate of the right wall.

    Returns:
        The horizontal speed to use on the next tick.
    """
    box.x += x_speed
    hit_right = box.x + box.width > playfield_width
    hit_left = box.x < 0
    if hit_right or hit_left:
        return -x_speed
    return x_speed


def fall_step(box: Box, y_speed: int, target_y: int, detection: str = "exact") -> bool:
    """
    Drop ``box`` by one tick and report whether it landed.

    Args:
        box: The falling box.
        y_speed: Units per tick.
        target_y: Top surface of the box beneath.
        detection: "exact" lands only when y == target_y. "crossed" lands
            once y <= target_y and clamps y to target_y.

    Returns:
        True if the box landed this tick.
    """
    box.y -= y_speed
    if detection == "crossed":
        if box.y <= target_y:
            box.y = target_y
            return True
        return False
    return box.y == target_y


def increase_speed(x_speed: int, increment: int) -> int:
    """Grow the magnitude of ``x_speed`` by ``increment``, keeping its sign."""
    return x_speed + increment if x_speed > 0 else x_speed - increment
