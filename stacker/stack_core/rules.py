"""
Game Rules
==========

Mode state machine: which transitions exist and what triggers them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet


class Mode(str, Enum):
    """Game modes."""
    BOUNCE = "bounce"       # Box slides side to side at the top
    FALL = "fall"           # Box drops toward the stack
    GAMEOVER = "gameover"   # Terminal


class Trigger(str, Enum):
    """Events that move the state machine."""
    DROP = "drop"
    LANDED = "landed"
    MISSED = "missed"


class InvalidTransition(ValueError):
    """Raised when a trigger does not apply to the current mode."""

    def __init__(self, mode: Mode, trigger: Trigger):
        super().__init__(f"No transition from {mode.value} on {trigger.value}")
        self.mode = mode
        self.trigger = trigger


TRANSITIONS: Dict[Mode, Dict[Trigger, Mode]] = {
    Mode.BOUNCE: {Trigger.DROP: Mode.FALL},
    Mode.FALL: {Trigger.LANDED: Mode.BOUNCE, Trigger.MISSED: Mode.GAMEOVER},
    Mode.GAMEOVER: {},
}

INITIAL_MODE = Mode.BOUNCE
TERMINAL_MODES: FrozenSet[Mode] = frozenset({Mode.GAMEOVER})


@dataclass
class ModeMachine:
    """Tracks the current mode and applies transitions."""
    mode: Mode = INITIAL_MODE
    transitions: int = 0

    @property
    def is_over(self) -> bool:
        return self.mode in TERMINAL_MODES

    def can_fire(self, trigger: Trigger) -> bool:
        return trigger in TRANSITIONS[self.mode]

    def fire(self, trigger: Trigger) -> Mode:
        """
        Apply ``trigger`` and return the new mode.

        Raises:
            InvalidTransition: If the trigger does not apply to the current mode.
        """
        targets = TRANSITIONS[self.mode]
        if trigger not in targets:
            raise InvalidTransition(self.mode, trigger)
        self.mode = targets[trigger]
        self.transitions += 1
        return self.mode

    def reset(self) -> None:
        self.mode = INITIAL_MODE
        self.transitions = 0
