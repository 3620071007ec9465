"""
Tests for the bounce and fall integrators.
"""

from stacker.stack_core.boxes import Box
from stacker.stack_core.physics import bounce_step, fall_step, increase_speed


def make_box(x=0, y=550, width=200):
    return Box(x=x, y=y, width=width, color=(255, 255, 255))


class TestBounce:
    """Horizontal motion between the walls."""

    def test_moves_by_speed(self):
        box = make_box(x=10)
        speed = bounce_step(box, 2, 320)
        assert box.x == 12
        assert speed == 2

    def test_reflects_after_right_wall(self):
        """The box moves past the wall first, then the speed flips."""
        box = make_box(x=120)
        speed = bounce_step(box, 2, 320)
        assert box.x == 122
        assert speed == -2

    def test_right_edge_on_wall_does_not_flip(self):
        box = make_box(x=118)
        assert bounce_step(box, 2, 320) == 2
        assert box.right == 320

    def test_reflects_after_left_wall(self):
        box = make_box(x=1)
        speed = bounce_step(box, -2, 320)
        assert box.x == -1
        assert speed == 2

    def test_one_flip_per_wall_contact(self):
        """Between flips x moves monotonically; each flip happens out of bounds."""
        box = make_box(x=0)
        speed = 3
        positions = [box.x]
        flips = 0
        for _ in range(1000):
            new_speed = bounce_step(box, speed, 320)
            positions.append(box.x)
            if new_speed != speed:
                flips += 1
                assert box.x < 0 or box.right > 320
                # The very next step brings it back toward the field
                assert (new_speed > 0) == (box.x < 0)
            speed = new_speed

        assert flips > 0
        direction_changes = sum(
            1 for a, b, c in zip(positions, positions[1:], positions[2:])
            if (b - a) * (c - b) < 0
        )
        assert direction_changes == flips or direction_changes == flips - 1

    def test_only_x_changes(self):
        box = make_box(x=40, y=550)
        bounce_step(box, 5, 320)
        assert box.y == 550
        assert box.width == 200


class TestFall:
    """Vertical motion and landing detection."""

    def test_exact_lands_on_target(self):
        box = make_box(y=260)
        assert not fall_step(box, 5, 250)
        assert box.y == 255
        assert fall_step(box, 5, 250)
        assert box.y == 250

    def test_exact_misses_skipped_target(self):
        """Exact detection never fires if the target is stepped over."""
        box = make_box(y=256)
        assert not fall_step(box, 7, 250)
        assert box.y == 249

    def test_crossed_clamps_to_target(self):
        box = make_box(y=256)
        assert fall_step(box, 7, 250, detection="crossed")
        assert box.y == 250

    def test_crossed_waits_above_target(self):
        box = make_box(y=264)
        assert not fall_step(box, 7, 250, detection="crossed")
        assert box.y == 257

    def test_fall_keeps_x(self):
        box = make_box(x=77, y=300)
        fall_step(box, 5, 250)
        assert box.x == 77


class TestSpeedIncrease:

    def test_positive_speed_grows(self):
        assert increase_speed(2, 1) == 3

    def test_negative_speed_grows_in_magnitude(self):
        assert increase_speed(-4, 1) == -5

    def test_zero_increment(self):
        assert increase_speed(-4, 0) == -4
