"""
Stack Core - The heart of the game.

This module provides the core game simulation, the frame loop driver,
the Gymnasium environment wrapper and all supporting systems.

Main exports:
- CoreGame: Game state and per-tick simulation
- TickLoop / FrameScheduler: Cancelable one-tick-per-frame driver
- StackerEnv: Gymnasium environment (one step = one tick)
- GameConfig: Configuration loaded from game_config.yaml
"""

from stacker.stack_core.config_loader import GameConfig, load_config
from stacker.stack_core.boxes import Box, BoxStack, Debris
from stacker.stack_core.alignment import LandingResult, resolve_landing
from stacker.stack_core.rules import InvalidTransition, Mode
from stacker.stack_core.game import CoreGame
from stacker.stack_core.frame_loop import FrameScheduler, TickLoop
from stacker.stack_core.env_gym import StackerEnv
from stacker.stack_core.replay_recorder import (
    ReplayRecorder,
    record_episode,
    generate_replay_filename,
)

__all__ = [
    "GameConfig",
    "load_config",
    "Box",
    "BoxStack",
    "Debris",
    "LandingResult",
    "resolve_landing",
    "InvalidTransition",
    "Mode",
    "CoreGame",
    "FrameScheduler",
    "TickLoop",
    "StackerEnv",
    "ReplayRecorder",
    "record_episode",
    "generate_replay_filename",
]
