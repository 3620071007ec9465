"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the stacking game.
One environment step is one game tick. Reward is always 0.0 - agents
compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from stacker.stack_core.config_loader import GameConfig, load_config
from stacker.stack_core.game import CoreGame
from stacker.stack_core.state_snapshot import GameSnapshot

WAIT = 0
DROP = 1


class StackerEnv(gym.Env):
    """
    Box stacking game as a Gymnasium environment.

    Action Space:
        Discrete(2). 0 = let the box keep moving, 1 = drop it.
        A drop outside BOUNCE is ignored, exactly like a stray key press.

    Observation Space:
        Dict of scalar state, padded box arrays and optional RGB image.

    Reward:
        Always 0.0. Use info["delta_score"].

    Termination:
        terminated on GAMEOVER, truncated after caps.max_ticks ticks.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        image_obs: bool = False,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            image_obs: If True, include board_rgb in observations.
            image_width: Override observation image width.
            image_height: Override observation image height.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)

        self.render_mode = render_mode
        self._image_obs = image_obs
        self._debug = debug

        self._img_width = image_width or self._config.observation.image_width
        self._img_height = image_height or self._config.observation.image_height

        self._game = CoreGame(config=self._config)

        # Renderers (lazy)
        self._array_renderer = None
        self._screen_renderer = None

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] StackerEnv initialized")
            print(f"[DEBUG]   Playfield: {self._config.playfield.width}x{self._config.playfield.height}")
            print(f"[DEBUG]   Landing detection: {self._config.landing.detection}")
            print(f"[DEBUG]   Max ticks: {self._config.caps.max_ticks}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_boxes = self._config.observation.max_boxes
        big = np.float32(1e6)

        def scalar(low, high, dtype=np.float32):
            return spaces.Box(low=low, high=high, shape=(), dtype=dtype)

        obs_dict = {
            "mode": scalar(0, 2, np.int32),
            "score": scalar(0, np.iinfo(np.int64).max, np.int64),
            "current_index": scalar(1, np.iinfo(np.int32).max, np.int32),
            "box_count": scalar(2, np.iinfo(np.int32).max, np.int32),
            "x_speed": scalar(-big, big),
            "y_speed": scalar(0, big),
            "current_x": scalar(-big, big),
            "current_y": scalar(-big, big),
            "current_width": scalar(0, big),
            "previous_x": scalar(-big, big),
            "previous_width": scalar(0, big),
            "target_y": scalar(-big, big),
            "offset": scalar(-big, big),
            "camera_y": scalar(0, big),
            "debris_x": scalar(-big, big),
            "debris_y": scalar(-big, big),
            "debris_width": scalar(0, big),
            "playfield_width": scalar(0, big),
            "box_x": spaces.Box(low=-big, high=big, shape=(max_boxes,), dtype=np.float32),
            "box_y": spaces.Box(low=-big, high=big, shape=(max_boxes,), dtype=np.float32),
            "box_width": spaces.Box(low=0, high=big, shape=(max_boxes,), dtype=np.float32),
            "box_mask": spaces.MultiBinary(max_boxes),
        }

        if self._image_obs:
            obs_dict["board_rgb"] = spaces.Box(
                low=0,
                high=255,
                shape=(self._img_height, self._img_width, 3),
                dtype=np.uint8
            )

        return spaces.Dict(obs_dict)

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for box colors.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        snapshot = self._game.reset(seed=seed)

        obs = self._snapshot_to_obs(snapshot)
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Apply the action, then advance one tick.

        Args:
            action: 1 to drop, 0 to wait.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        score_before = self._game.score
        dropped = False
        if int(action) == DROP:
            dropped = self._game.drop()

        self._game.tick()

        terminated = self._game.is_over
        truncated = not terminated and self._game.ticks >= self._config.caps.max_ticks

        obs = self._snapshot_to_obs(self._game.build_snapshot())
        reward = 0.0

        info = self._game.get_info()
        info["delta_score"] = self._game.score - score_before
        info["dropped"] = dropped
        if truncated:
            info["terminated_reason"] = "max_ticks"

        if self._debug and (dropped or info["delta_score"] or terminated):
            print(f"[DEBUG] Tick {self._game.ticks}: dropped={dropped}, "
                  f"delta_score={info['delta_score']}, mode={info['mode']}")
            if terminated:
                print(f"[DEBUG] TERMINATED: score={info['score']}")

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        obs = snapshot.to_obs_dict()

        if self._image_obs:
            obs["board_rgb"] = self._render_to_array()

        return obs

    def _render_to_array(self) -> np.ndarray:
        """Render playfield to RGB array."""
        if self._array_renderer is None:
            from stacker.stack_core.render_solid import SolidRenderer
            self._array_renderer = SolidRenderer(self._config)

        return self._array_renderer.render(
            self._game.get_render_data(),
            self._img_width,
            self._img_height
        )

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            if self._screen_renderer is None:
                from stacker.stack_core.render_full_pygame import PygameRenderer
                self._screen_renderer = PygameRenderer(self._config)
            self._screen_renderer.render_to_screen(self._game.get_render_data())
            return None

        return None

    def close(self) -> None:
        """Clean up resources."""
        for renderer in (self._array_renderer, self._screen_renderer):
            if renderer is not None:
                renderer.close()
        self._array_renderer = None
        self._screen_renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
