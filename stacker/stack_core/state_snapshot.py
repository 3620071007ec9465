"""
State Snapshot
==============

Packs game state into fixed-size numpy arrays for Gymnasium observations
and renderers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from stacker.stack_core.config_loader import GameConfig, get_config
from stacker.stack_core.rules import Mode

if TYPE_CHECKING:
    from stacker.stack_core.game import CoreGame

MODE_IDS = {Mode.BOUNCE: 0, Mode.FALL: 1, Mode.GAMEOVER: 2}


@dataclass
class GameSnapshot:
    """
    Complete game state at the end of a tick.

    Box arrays hold the most recent ``max_boxes`` boxes, bottom to top,
    padded with zeros and masked.
    """
    # Core state
    mode_id: int
    score: int
    current_index: int
    box_count: int
    ticks: int

    # Motion
    x_speed: float
    y_speed: float

    # Current box and the box it will land on
    current_x: float
    current_y: float
    current_width: float
    previous_x: float
    previous_width: float
    target_y: float
    offset: float                  # current_x - previous_x

    # Camera
    camera_y: float
    scroll_counter: int

    # Debris
    debris_x: float
    debris_y: float
    debris_width: float

    # Box arrays (fixed size, padded)
    box_x: np.ndarray              # (MAX_BOXES,) float32
    box_y: np.ndarray              # (MAX_BOXES,) float32
    box_width: np.ndarray          # (MAX_BOXES,) float32
    box_screen_y: np.ndarray       # (MAX_BOXES,) float32
    box_mask: np.ndarray           # (MAX_BOXES,) int8

    # Playfield
    playfield_width: float
    box_height: float

    # Optional image
    board_rgb: Optional[np.ndarray] = None

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        obs = {
            "mode": np.array(self.mode_id, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "current_index": np.array(self.current_index, dtype=np.int32),
            "box_count": np.array(self.box_count, dtype=np.int32),
            "x_speed": np.array(self.x_speed, dtype=np.float32),
            "y_speed": np.array(self.y_speed, dtype=np.float32),
            "current_x": np.array(self.current_x, dtype=np.float32),
            "current_y": np.array(self.current_y, dtype=np.float32),
            "current_width": np.array(self.current_width, dtype=np.float32),
            "previous_x": np.array(self.previous_x, dtype=np.float32),
            "previous_width": np.array(self.previous_width, dtype=np.float32),
            "target_y": np.array(self.target_y, dtype=np.float32),
            "offset": np.array(self.offset, dtype=np.float32),
            "camera_y": np.array(self.camera_y, dtype=np.float32),
            "debris_x": np.array(self.debris_x, dtype=np.float32),
            "debris_y": np.array(self.debris_y, dtype=np.float32),
            "debris_width": np.array(self.debris_width, dtype=np.float32),
            "playfield_width": np.array(self.playfield_width, dtype=np.float32),
            "box_x": self.box_x,
            "box_y": self.box_y,
            "box_width": self.box_width,
            "box_mask": self.box_mask,
        }

        if self.board_rgb is not None:
            obs["board_rgb"] = self.board_rgb

        return obs


class SnapshotBuilder:
    """Builds GameSnapshot instances from a CoreGame."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_boxes = config.observation.max_boxes

    def build(
        self,
        game: "CoreGame",
        board_rgb: Optional[np.ndarray] = None
    ) -> GameSnapshot:
        """
        Snapshot ``game``.

        Args:
            game: The game to snapshot. Not modified.
            board_rgb: Optional rendered image to attach.

        Returns:
            GameSnapshot with copies of all geometry.
        """
        max_boxes = self._max_boxes
        box_x = np.zeros(max_boxes, dtype=np.float32)
        box_y = np.zeros(max_boxes, dtype=np.float32)
        box_width = np.zeros(max_boxes, dtype=np.float32)
        box_screen_y = np.zeros(max_boxes, dtype=np.float32)
        box_mask = np.zeros(max_boxes, dtype=np.int8)

        boxes = list(game.boxes)
        visible = boxes[-max_boxes:]
        camera = game.camera
        for slot, box in enumerate(visible):
            box_x[slot] = box.x
            box_y[slot] = box.y
            box_width[slot] = box.width
            box_screen_y[slot] = camera.to_screen_y(box.y)
            box_mask[slot] = 1

        current = game.current_box
        previous = game.previous_box
        debris = game.debris

        return GameSnapshot(
            mode_id=MODE_IDS[game.mode],
            score=game.score,
            current_index=game.current,
            box_count=len(boxes),
            ticks=game.ticks,
            x_speed=float(game.x_speed),
            y_speed=float(game.y_speed),
            current_x=float(current.x),
            current_y=float(current.y),
            current_width=float(current.width),
            previous_x=float(previous.x),
            previous_width=float(previous.width),
            target_y=float(game.target_y),
            offset=float(current.x - previous.x),
            camera_y=float(camera.camera_y),
            scroll_counter=camera.scroll_counter,
            debris_x=float(debris.x),
            debris_y=float(debris.y),
            debris_width=float(debris.width),
            box_x=box_x,
            box_y=box_y,
            box_width=box_width,
            box_screen_y=box_screen_y,
            box_mask=box_mask,
            playfield_width=float(self._config.playfield.width),
            box_height=float(self._config.box_height),
            board_rgb=board_rgb
        )
