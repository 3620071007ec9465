"""
Tests for landing resolution.
"""

import pytest

from stacker.stack_core.alignment import apply_landing, resolve_landing
from stacker.stack_core.boxes import Box

WHITE = (255, 255, 255)


def make_box(x, width, y=250):
    return Box(x=x, y=y, width=width, color=WHITE)


class TestResolveLanding:
    """Overlap, trimming and debris geometry."""

    def test_perfect_landing(self):
        """Aligned boxes keep full width and leave no debris."""
        result = resolve_landing(make_box(60, 200), make_box(60, 200, y=200))

        assert result.survived
        assert result.perfect
        assert result.x == 60
        assert result.width == 200
        assert result.trimmed == 0
        assert not result.debris.visible

    def test_right_overhang(self):
        """Box 190 to the right keeps 10 units; the rest becomes debris."""
        result = resolve_landing(make_box(250, 200), make_box(60, 200, y=200))

        assert result.survived
        assert result.x == 250
        assert result.width == 10
        assert result.debris.x == 260
        assert result.debris.y == 250
        assert result.debris.width == 190

    def test_left_overhang(self):
        """Box to the left snaps to the box beneath; debris starts at its old x."""
        result = resolve_landing(make_box(20, 200), make_box(60, 200, y=200))

        assert result.survived
        assert result.x == 60
        assert result.width == 160
        assert result.debris.x == 20
        assert result.debris.width == 40

    def test_miss_ends_game(self):
        """An offset of at least the box width is a miss."""
        result = resolve_landing(make_box(300, 50), make_box(60, 50, y=200))

        assert not result.survived
        assert result.difference == 240
        assert result.debris is None

    @pytest.mark.parametrize("difference", [200, -200])
    def test_touching_edges_is_a_miss(self, difference):
        """Zero overlap does not count as landing."""
        result = resolve_landing(make_box(60 + difference, 200), make_box(60, 200, y=200))
        assert not result.survived

    def test_one_unit_overlap_survives(self):
        result = resolve_landing(make_box(259, 200), make_box(60, 200, y=200))
        assert result.survived
        assert result.width == 1

    def test_inputs_not_modified(self):
        current = make_box(250, 200)
        previous = make_box(60, 200, y=200)
        resolve_landing(current, previous)

        assert current.x == 250 and current.width == 200
        assert previous.x == 60 and previous.width == 200

    def test_width_plus_debris_is_conserved(self):
        """Kept width and debris width always add up to the landed width."""
        previous = make_box(60, 120, y=200)
        for x in range(-50, 180, 7):
            result = resolve_landing(make_box(x, 120), previous)
            if result.survived:
                assert result.width + result.debris.width == 120
                assert result.width > 0


class TestApplyLanding:

    def test_trims_in_place(self):
        current = make_box(250, 200)
        result = resolve_landing(current, make_box(60, 200, y=200))
        apply_landing(current, result)

        assert current.x == 250
        assert current.width == 10

    def test_refuses_missed_landing(self):
        current = make_box(300, 50)
        result = resolve_landing(current, make_box(60, 50, y=200))
        with pytest.raises(AssertionError):
            apply_landing(current, result)
