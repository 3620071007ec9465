"""
Replay Recorder
===============

A simple wrapper to record Gymnasium environment episodes for replay.

Usage:
    from stacker.stack_core import StackerEnv, ReplayRecorder

    env = StackerEnv()
    recorder = ReplayRecorder(env)

    obs, info = recorder.reset(seed=42)

    done = False
    while not done:
        action = your_agent(obs)
        obs, reward, terminated, truncated, info = recorder.step(action)
        done = terminated or truncated

    recorder.save("my_replay.json")

Only the tick indexes of accepted drops determine a game, so a replay
stores those; ``replay_drops`` re-simulates one and returns the final game.
"""

from __future__ import annotations

import json
import hashlib
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
import gymnasium as gym

from stacker.stack_core.config_loader import GameConfig, load_config
from stacker.stack_core.game import CoreGame


def generate_replay_filename(
    agent_name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {agent_name}_{YYYYMMDD_HHMMSS}_s{seed}.json

    Args:
        agent_name: Name of the agent.
        seed: Random seed (optional, included if provided).
        directory: Directory for the file. Defaults to current directory.

    Returns:
        Path object for the replay file.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{agent_name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{agent_name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: Optional[GameConfig] = None) -> str:
    """Hash every config value that affects gameplay, for replay validation."""
    if config is None:
        config = load_config()
    hash_data = {
        "playfield": asdict(config.playfield),
        "box": asdict(config.box),
        "speeds": asdict(config.speeds),
        "landing": asdict(config.landing),
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records environment interactions for replay.

    Wraps a StackerEnv and records every action, the tick of every accepted
    drop, and the score after each step.

    Attributes:
        env: The wrapped Gymnasium environment.
        recording: Whether currently recording.
    """

    def __init__(
        self,
        env: gym.Env,
        agent_name: str = "unknown",
        auto_save_path: Optional[str] = None
    ):
        """
        Initialize the replay recorder.

        Args:
            env: The Gymnasium environment to wrap.
            agent_name: Name of the agent (stored in replay metadata).
            auto_save_path: If provided, automatically save replay on episode end.
        """
        self.env = env
        self.agent_name = agent_name
        self.auto_save_path = auto_save_path

        self._recording = False
        self._seed: Optional[int] = None
        self._actions: List[int] = []
        self._drop_ticks: List[int] = []
        self._scores: List[int] = []
        self._termination_reason: str = ""
        self._config_hash = compute_config_hash(getattr(env, "config", None))

    @property
    def recording(self) -> bool:
        """Whether currently recording."""
        return self._recording

    @property
    def observation_space(self):
        """Forward observation space from wrapped env."""
        return self.env.observation_space

    @property
    def action_space(self):
        """Forward action space from wrapped env."""
        return self.env.action_space

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict] = None
    ) -> Tuple[Any, Dict]:
        """
        Reset the environment and start recording.

        Args:
            seed: Random seed for the episode.
            options: Additional reset options.

        Returns:
            Initial observation and info dict.
        """
        self._actions = []
        self._drop_ticks = []
        self._scores = []
        self._termination_reason = ""
        self._seed = seed
        self._recording = True

        return self.env.reset(seed=seed, options=options)

    def step(self, action: Union[int, np.ndarray]) -> Tuple[Any, float, bool, bool, Dict]:
        """
        Take a step and record it.

        Args:
            action: The action to take.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if isinstance(action, np.ndarray):
            action_val = int(action.item())
        else:
            action_val = int(action)

        obs, reward, terminated, truncated, info = self.env.step(action)

        if self._recording:
            self._actions.append(action_val)
            self._scores.append(int(info.get("score", 0)))
            if info.get("dropped"):
                # The drop is applied right before tick number info["ticks"]
                self._drop_ticks.append(int(info["ticks"]))

            if terminated or truncated:
                self._termination_reason = info.get("terminated_reason", "unknown")

        if (terminated or truncated) and self.auto_save_path:
            self.save(self.auto_save_path)

        return obs, reward, terminated, truncated, info

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.

        Returns:
            Dictionary containing all replay data.
        """
        return {
            "seed": self._seed,
            "agent": self.agent_name,
            "config_hash": self._config_hash,
            "actions": self._actions.copy(),
            "drop_ticks": self._drop_ticks.copy(),
            "scores": self._scores.copy(),
            "final_score": self._scores[-1] if self._scores else 0,
            "total_steps": len(self._actions),
            "termination_reason": self._termination_reason,
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).

        Returns:
            Path where the replay was saved.
        """
        if path is None:
            path = generate_replay_filename(
                agent_name=self.agent_name,
                seed=self._seed,
                directory=directory
            )
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()

        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        print(f"Replay saved: {path}")
        print(f"  Seed: {self._seed}")
        print(f"  Steps: {len(self._actions)}")
        print(f"  Final score: {replay_data['final_score']}")

        return path

    def close(self) -> None:
        """Close the wrapped environment."""
        self.env.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """Load replay data saved by ``ReplayRecorder.save``."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")
    with open(path, "r") as f:
        return json.load(f)


def replay_drops(
    drop_ticks: Iterable[int],
    total_ticks: int,
    seed: Optional[int] = None,
    config: Optional[GameConfig] = None
) -> CoreGame:
    """
    Re-simulate a game from its drop ticks.

    Args:
        drop_ticks: Tick numbers (1-based) before which a drop was applied.
        total_ticks: Ticks to simulate; stops early on GAMEOVER.
        seed: Color seed of the original game.
        config: Game configuration. Uses default if None.

    Returns:
        The game in its final state.
    """
    game = CoreGame(config=config, seed=seed)
    pending = set(drop_ticks)

    for tick in range(1, total_ticks + 1):
        if game.is_over:
            break
        if tick in pending:
            game.drop()
        game.tick()

    return game


def verify_replay(replay: Dict[str, Any], config: Optional[GameConfig] = None) -> bool:
    """
    Check that a replay reproduces its recorded final score.

    Raises:
        ValueError: If the replay was recorded with a different game config.
    """
    if config is None:
        config = load_config()
    if replay.get("config_hash") != compute_config_hash(config):
        raise ValueError(
            f"Replay config hash {replay.get('config_hash')} does not match "
            f"current config {compute_config_hash(config)}"
        )
    game = replay_drops(
        replay["drop_ticks"],
        replay["total_steps"],
        seed=replay.get("seed"),
        config=config
    )
    return game.score == replay["final_score"]


def record_episode(
    env: gym.Env,
    agent_fn,
    seed: int,
    save_path: Optional[str] = None,
    agent_name: str = "unknown"
) -> Dict[str, Any]:
    """
    Convenience function to record a single episode.

    Args:
        env: The Gymnasium environment.
        agent_fn: Function that takes observation and returns action.
        seed: Random seed for the episode.
        save_path: If provided, save replay to this path.
        agent_name: Name of the agent.

    Returns:
        Replay data dictionary.
    """
    recorder = ReplayRecorder(env, agent_name=agent_name)

    obs, info = recorder.reset(seed=seed)

    done = False
    while not done:
        action = agent_fn(obs)
        obs, reward, terminated, truncated, info = recorder.step(action)
        done = terminated or truncated

    replay_data = recorder.get_replay_data()

    if save_path:
        recorder.save(save_path)

    return replay_data
