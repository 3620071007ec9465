"""
Scoring System
==============

Score is the number of boxes successfully stacked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class ScoreEvent:
    """Record of a successful landing."""
    box_index: int
    trimmed: int
    width: int

    @property
    def perfect(self) -> bool:
        return self.trimmed == 0

    def __repr__(self) -> str:
        if self.perfect:
            return f"ScoreEvent(box={self.box_index}, perfect)"
        return f"ScoreEvent(box={self.box_index}, trimmed={self.trimmed})"


class ScoreTracker:
    """Tracks the score and the history of landings for one session."""

    def __init__(self) -> None:
        self._score: int = 0
        self._events: List[ScoreEvent] = []

    @property
    def score(self) -> int:
        """Boxes successfully stacked."""
        return self._score

    @property
    def perfect_count(self) -> int:
        """Landings that lost no width."""
        return sum(1 for e in self._events if e.perfect)

    @property
    def total_trimmed(self) -> int:
        """Width lost to debris over the session."""
        return sum(e.trimmed for e in self._events)

    @property
    def events(self) -> List[ScoreEvent]:
        return list(self._events)

    def apply_landing(self, box_index: int, trimmed: int, width: int) -> ScoreEvent:
        """
        Record the landing of the box at ``box_index``.

        The box index equals the number of boxes stacked on top of the base,
        so it becomes the score.
        """
        event = ScoreEvent(box_index=box_index, trimmed=trimmed, width=width)
        self._events.append(event)
        self._score = box_index
        return event

    def reset(self) -> None:
        self._score = 0
        self._events = []
