"""
Tests for Gymnasium environment API.
"""

import pytest
import numpy as np

from stacker.stack_core.env_gym import DROP, WAIT, StackerEnv


@pytest.fixture
def env():
    env = StackerEnv()
    yield env
    env.close()


def step_until_done(env, action_fn, max_steps=20_000):
    obs, info = env.reset(seed=42)
    for _ in range(max_steps):
        obs, reward, terminated, truncated, info = env.step(action_fn(obs))
        if terminated or truncated:
            return terminated, truncated, info
    raise AssertionError("Episode did not end")


class TestStackerEnv:
    """Test single environment API."""

    def test_reset_returns_obs_and_info(self, env):
        """Reset should return (observation, info) tuple."""
        result = env.reset(seed=42)

        assert isinstance(result, tuple)
        assert len(result) == 2

        obs, info = result
        assert isinstance(obs, dict)
        assert isinstance(info, dict)
        assert info["delta_score"] == 0

    def test_observation_structure(self, env):
        """Observation should have expected keys and shapes."""
        obs, _ = env.reset(seed=42)

        for key in ("mode", "score", "current_x", "previous_x", "offset",
                    "x_speed", "target_y", "camera_y", "debris_width"):
            assert key in obs

        max_boxes = env.config.observation.max_boxes
        assert obs["box_x"].shape == (max_boxes,)
        assert obs["box_width"].shape == (max_boxes,)
        assert obs["box_mask"].shape == (max_boxes,)
        assert int(obs["box_mask"].sum()) == 2

    def test_observation_in_space(self, env):
        obs, _ = env.reset(seed=42)
        assert env.observation_space.contains(obs)
        obs, *_ = env.step(WAIT)
        assert env.observation_space.contains(obs)

    def test_initial_offset(self, env):
        """Box 1 starts at x=0, the base box at x=60."""
        obs, _ = env.reset(seed=42)
        assert float(obs["offset"]) == -60.0
        assert int(obs["mode"]) == 0

    def test_step_returns_five_values(self, env):
        """Step should return (obs, reward, terminated, truncated, info)."""
        env.reset(seed=42)

        result = env.step(WAIT)

        assert isinstance(result, tuple)
        assert len(result) == 5

        obs, reward, terminated, truncated, info = result
        assert isinstance(obs, dict)
        assert isinstance(reward, (int, float))
        assert isinstance(terminated, bool)
        assert isinstance(truncated, bool)
        assert isinstance(info, dict)

    def test_reward_is_always_zero(self, env):
        """Environment reward should always be 0.0."""
        env.reset(seed=42)
        rng = np.random.default_rng(42)

        for _ in range(200):
            _, reward, terminated, truncated, _ = env.step(int(rng.integers(0, 2)))
            assert reward == 0.0

            if terminated or truncated:
                env.reset()

    def test_info_contains_score(self, env):
        """Info dict should contain score, delta_score and dropped."""
        env.reset(seed=42)

        _, _, _, _, info = env.step(DROP)

        assert "score" in info
        assert "delta_score" in info
        assert info["dropped"] is True
        assert info["mode"] == "fall"

    def test_drop_while_falling_is_ignored(self, env):
        env.reset(seed=42)
        env.step(DROP)
        _, _, _, _, info = env.step(DROP)
        assert info["dropped"] is False
        assert info["drops"] == 1

    def test_numpy_action(self, env):
        env.reset(seed=42)
        _, _, _, _, info = env.step(np.array(1))
        assert info["dropped"] is True

    def test_delta_score_on_landing(self, env):
        """Waiting 30 ticks lines box 1 up for a perfect landing."""
        env.reset(seed=42)
        for _ in range(30):
            env.step(WAIT)
        deltas = []
        _, _, _, _, info = env.step(DROP)
        deltas.append(info["delta_score"])
        while info["mode"] == "fall":
            _, _, _, _, info = env.step(WAIT)
            deltas.append(info["delta_score"])

        assert info["score"] == 1
        assert info["perfect_landings"] == 1
        assert sum(deltas) == 1

    def test_deterministic_with_seed(self):
        """Same seed should produce the same box colors and trajectory."""
        env1 = StackerEnv()
        env2 = StackerEnv()

        env1.reset(seed=123)
        env2.reset(seed=123)

        rng1 = np.random.default_rng(42)
        rng2 = np.random.default_rng(42)

        for _ in range(300):
            obs1, _, t1, tr1, _ = env1.step(int(rng1.random() < 0.05))
            obs2, _, t2, tr2, _ = env2.step(int(rng2.random() < 0.05))

            for key in obs1:
                assert np.array_equal(obs1[key], obs2[key])

            if t1 or tr1:
                break

        colors1 = [box.color for box in env1.game.boxes]
        colors2 = [box.color for box in env2.game.boxes]
        assert colors1 == colors2

        env1.close()
        env2.close()

    def test_episode_terminates_on_miss(self, env):
        """Dropping on the first tick from far away ends the game."""
        env.reset(seed=42)
        env.game.current_box.x = 300
        env.game.current_box.width = 50
        env.game.boxes[0].width = 50

        terminated = False
        steps = 0
        while not terminated and steps < 100:
            _, _, terminated, truncated, info = env.step(DROP)
            steps += 1

        assert terminated
        assert not truncated
        assert info["terminated_reason"] == "missed"
        assert steps == 60

    def test_truncates_at_max_ticks(self, config_path_factory):
        env = StackerEnv(config_path=config_path_factory({"caps.max_ticks": 10}))
        env.reset(seed=1)
        for _ in range(9):
            _, _, terminated, truncated, _ = env.step(WAIT)
            assert not truncated
        _, _, terminated, truncated, info = env.step(WAIT)

        assert truncated
        assert not terminated
        assert info["terminated_reason"] == "max_ticks"
        env.close()


class TestImageObservations:

    def test_board_rgb_shape(self):
        env = StackerEnv(image_obs=True)
        obs, _ = env.reset(seed=0)
        assert obs["board_rgb"].shape == (500, 320, 3)
        assert obs["board_rgb"].dtype == np.uint8
        env.close()

    def test_custom_image_size(self):
        env = StackerEnv(image_obs=True, image_width=64, image_height=100)
        obs, _ = env.reset(seed=0)
        assert obs["board_rgb"].shape == (100, 64, 3)
        assert env.observation_space.contains(obs)
        env.close()

    def test_rgb_array_render(self):
        env = StackerEnv(render_mode="rgb_array")
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (500, 320, 3)
        env.close()
