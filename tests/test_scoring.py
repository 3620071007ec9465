"""
Tests for score tracking and box colors.
"""

from stacker.stack_core.rng import ColorGenerator
from stacker.stack_core.scoring import ScoreTracker


class TestScoreTracker:

    def test_score_is_box_index(self):
        tracker = ScoreTracker()
        tracker.apply_landing(1, 0, 200)
        tracker.apply_landing(2, 12, 188)
        assert tracker.score == 2

    def test_perfect_and_trimmed_totals(self):
        tracker = ScoreTracker()
        tracker.apply_landing(1, 0, 200)
        tracker.apply_landing(2, 12, 188)
        tracker.apply_landing(3, 0, 188)

        assert tracker.perfect_count == 2
        assert tracker.total_trimmed == 12
        assert [e.box_index for e in tracker.events] == [1, 2, 3]

    def test_reset(self):
        tracker = ScoreTracker()
        tracker.apply_landing(1, 3, 197)
        tracker.reset()
        assert tracker.score == 0
        assert tracker.events == []


class TestColors:

    def test_first_two_boxes_use_base_color(self, config):
        colors = ColorGenerator(config, seed=1)
        assert colors.color_for(0) == (255, 255, 255)
        assert colors.color_for(1) == (255, 255, 255)

    def test_random_channels_in_range(self, config):
        colors = ColorGenerator(config, seed=3)
        for index in range(2, 200):
            for channel in colors.color_for(index):
                assert 0 <= channel <= 254

    def test_same_seed_same_colors(self, config):
        a = ColorGenerator(config, seed=9)
        b = ColorGenerator(config, seed=9)
        assert [a.color_for(i) for i in range(2, 20)] == [b.color_for(i) for i in range(2, 20)]

    def test_reset_replays_sequence(self, config):
        colors = ColorGenerator(config, seed=5)
        first = [colors.color_for(i) for i in range(2, 10)]
        colors.reset()
        assert [colors.color_for(i) for i in range(2, 10)] == first
