"""
Tests for the mode state machine.
"""

import pytest

from stacker.stack_core.rules import (
    InvalidTransition,
    Mode,
    ModeMachine,
    TRANSITIONS,
    Trigger,
)


class TestTransitions:
    """Legal and illegal mode changes."""

    def test_starts_in_bounce(self):
        assert ModeMachine().mode == Mode.BOUNCE

    def test_drop_then_land(self):
        machine = ModeMachine()
        assert machine.fire(Trigger.DROP) == Mode.FALL
        assert machine.fire(Trigger.LANDED) == Mode.BOUNCE
        assert machine.transitions == 2

    def test_drop_then_miss(self):
        machine = ModeMachine()
        machine.fire(Trigger.DROP)
        assert machine.fire(Trigger.MISSED) == Mode.GAMEOVER
        assert machine.is_over

    @pytest.mark.parametrize("mode,trigger", [
        (Mode.BOUNCE, Trigger.LANDED),
        (Mode.BOUNCE, Trigger.MISSED),
        (Mode.FALL, Trigger.DROP),
        (Mode.GAMEOVER, Trigger.DROP),
        (Mode.GAMEOVER, Trigger.LANDED),
    ])
    def test_invalid_transition_raises(self, mode, trigger):
        machine = ModeMachine(mode=mode)
        assert not machine.can_fire(trigger)
        with pytest.raises(InvalidTransition) as excinfo:
            machine.fire(trigger)
        assert excinfo.value.mode == mode
        assert excinfo.value.trigger == trigger
        assert machine.mode == mode

    def test_invalid_transition_is_value_error(self):
        with pytest.raises(ValueError):
            ModeMachine(mode=Mode.FALL).fire(Trigger.DROP)

    def test_gameover_has_no_exits(self):
        assert TRANSITIONS[Mode.GAMEOVER] == {}

    def test_reset(self):
        machine = ModeMachine()
        machine.fire(Trigger.DROP)
        machine.fire(Trigger.MISSED)
        machine.reset()
        assert machine.mode == Mode.BOUNCE
        assert machine.transitions == 0
