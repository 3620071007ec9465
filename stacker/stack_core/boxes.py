"""
Boxes
=====

Box and debris geometry plus the ordered stack that owns them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

Color = Tuple[int, int, int]


@dataclass
class Box:
    """
    A single box in the stack.

    ``y`` is the logical height of the bottom edge above the ground.
    """
    x: int
    y: int
    width: int
    color: Color

    @property
    def right(self) -> int:
        """X coordinate of the right edge."""
        return self.x + self.width

    def copy(self) -> "Box":
        return Box(self.x, self.y, self.width, self.color)


@dataclass
class Debris:
    """Slice trimmed off the most recently landed box. Never collides."""
    x: int = 0
    y: int = 0
    width: int = 0

    @property
    def visible(self) -> bool:
        return self.width > 0

    def copy(self) -> "Debris":
        return Debris(self.x, self.y, self.width)


class BoxStack:
    """
    Ordered boxes in stacking order. Box 0 is the fixed base.

    Indexing outside the stack is a programming error and fails loudly.
    """

    def __init__(self) -> None:
        self._boxes: List[Box] = []

    def __len__(self) -> int:
        return len(self._boxes)

    def __iter__(self) -> Iterator[Box]:
        return iter(self._boxes)

    def __getitem__(self, index: int) -> Box:
        assert 0 <= index < len(self._boxes), (
            f"Box index {index} outside stack of {len(self._boxes)} boxes"
        )
        return self._boxes[index]

    def append(self, box: Box) -> int:
        """Append a box and return its index."""
        assert box.width > 0, f"Cannot stack a box of width {box.width}"
        self._boxes.append(box)
        return len(self._boxes) - 1

    def clear(self) -> None:
        self._boxes.clear()

    @property
    def top(self) -> Box:
        """The most recently appended box."""
        return self[len(self._boxes) - 1]

    def copy_boxes(self) -> List[Box]:
        """Independent copies of every box (for renderers and snapshots)."""
        return [box.copy() for box in self._boxes]
