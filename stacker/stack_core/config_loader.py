"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml


LANDING_DETECTIONS = ("exact", "crossed")


@dataclass(frozen=True)
class PlayfieldConfig:
    """Playfield geometry."""
    width: int    # Bounce walls at x=0 and x=width
    height: int   # Visible area height


@dataclass(frozen=True)
class BoxConfig:
    """Box geometry and spawn placement."""
    height: int
    initial_width: int
    base_y: int         # Logical height of box 0
    spawn_offset: int   # Box n spawns at (n + spawn_offset) * height
    spawn_x: int

    def spawn_y(self, index: int) -> int:
        """Logical spawn height of the box at ``index``."""
        return (index + self.spawn_offset) * self.height

    def landing_y(self, index: int) -> int:
        """Logical height at which the box at ``index`` rests on the stack."""
        return self.base_y + index * self.height

    @property
    def fall_gap(self) -> int:
        """Vertical distance every new box travels before landing."""
        return self.spawn_y(1) - self.landing_y(1)


@dataclass(frozen=True)
class SpeedConfig:
    """Initial velocities and difficulty progression."""
    x: int
    y: int
    x_increment: int


@dataclass(frozen=True)
class LandingConfig:
    """Landing detection strategy."""
    detection: str   # "exact" or "crossed"


@dataclass(frozen=True)
class CameraConfig:
    """Screen projection parameters."""
    base_y: int

    def to_screen_y(self, logical_y: float, camera_y: float) -> float:
        return self.base_y - logical_y + camera_y


@dataclass(frozen=True)
class DebrisConfig:
    """Debris fragment behaviour."""
    fall_speed: int


@dataclass(frozen=True)
class ColorConfig:
    """Colors for fixed elements and the random box palette."""
    base: Tuple[int, int, int]
    background: Tuple[int, int, int]
    debris: Tuple[int, int, int]
    random_min: int
    random_max: int


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits."""
    max_ticks: int


@dataclass(frozen=True)
class ObservationConfig:
    """Snapshot and image observation parameters."""
    max_boxes: int
    image_width: int
    image_height: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    playfield: PlayfieldConfig
    box: BoxConfig
    speeds: SpeedConfig
    landing: LandingConfig
    camera: CameraConfig
    debris: DebrisConfig
    colors: ColorConfig
    caps: CapsConfig
    observation: ObservationConfig

    @property
    def box_height(self) -> int:
        """Height shared by every box."""
        return self.box.height


def _parse_color(color_data) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    color = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    for channel in color:
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channel out of range [0, 255]: {color_data}")
    return color


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.playfield.width <= 0 or config.playfield.height <= 0:
        raise ValueError(
            f"playfield must have positive size, got "
            f"{config.playfield.width}x{config.playfield.height}"
        )

    if config.box.height <= 0:
        raise ValueError(f"box.height must be positive, got {config.box.height}")

    if not 0 < config.box.initial_width <= config.playfield.width:
        raise ValueError(
            f"box.initial_width ({config.box.initial_width}) must be in "
            f"(0, playfield.width={config.playfield.width}]"
        )

    if config.box.fall_gap <= 0:
        raise ValueError(
            f"Boxes must spawn above the stack: fall gap is {config.box.fall_gap} "
            f"(spawn_offset={config.box.spawn_offset}, base_y={config.box.base_y})"
        )

    if config.speeds.y <= 0:
        raise ValueError(f"speeds.y must be positive, got {config.speeds.y}")

    if config.speeds.x == 0:
        raise ValueError("speeds.x must be non-zero")

    if config.speeds.x_increment < 0:
        raise ValueError(f"speeds.x_increment must be >= 0, got {config.speeds.x_increment}")

    if config.landing.detection not in LANDING_DETECTIONS:
        raise ValueError(
            f"landing.detection must be one of {LANDING_DETECTIONS}, "
            f"got '{config.landing.detection}'"
        )

    # Exact detection only fires if the fall lands on the target exactly
    if config.landing.detection == "exact" and config.box.fall_gap % config.speeds.y != 0:
        raise ValueError(
            f"speeds.y ({config.speeds.y}) must evenly divide the fall gap "
            f"({config.box.fall_gap}) when landing.detection is 'exact'"
        )

    if config.debris.fall_speed < 0:
        raise ValueError(f"debris.fall_speed must be >= 0, got {config.debris.fall_speed}")

    if not 0 <= config.colors.random_min <= config.colors.random_max <= 255:
        raise ValueError(
            f"colors.random_min/random_max must satisfy 0 <= min <= max <= 255, got "
            f"{config.colors.random_min}/{config.colors.random_max}"
        )

    if config.caps.max_ticks <= 0:
        raise ValueError(f"caps.max_ticks must be positive, got {config.caps.max_ticks}")

    if config.observation.max_boxes < 2:
        raise ValueError(
            f"observation.max_boxes must be at least 2, got {config.observation.max_boxes}"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    playfield_data = raw["playfield"]
    playfield = PlayfieldConfig(
        width=int(playfield_data["width"]),
        height=int(playfield_data["height"])
    )

    box_data = raw["box"]
    box = BoxConfig(
        height=int(box_data["height"]),
        initial_width=int(box_data["initial_width"]),
        base_y=int(box_data["base_y"]),
        spawn_offset=int(box_data.get("spawn_offset", 10)),
        spawn_x=int(box_data.get("spawn_x", 0))
    )

    speed_data = raw["speeds"]
    speeds = SpeedConfig(
        x=int(speed_data["x"]),
        y=int(speed_data["y"]),
        x_increment=int(speed_data.get("x_increment", 1))
    )

    landing_data = raw.get("landing", {})
    landing = LandingConfig(
        detection=str(landing_data.get("detection", "exact"))
    )

    camera_data = raw["camera"]
    camera = CameraConfig(
        base_y=int(camera_data["base_y"])
    )

    debris_data = raw.get("debris", {})
    debris = DebrisConfig(
        fall_speed=int(debris_data.get("fall_speed", 0))
    )

    color_data = raw.get("colors", {})
    colors = ColorConfig(
        base=_parse_color(color_data.get("base", [255, 255, 255])),
        background=_parse_color(color_data.get("background", [0, 0, 0])),
        debris=_parse_color(color_data.get("debris", [255, 0, 0])),
        random_min=int(color_data.get("random_min", 0)),
        random_max=int(color_data.get("random_max", 254))
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_ticks=int(caps_data.get("max_ticks", 100000))
    )

    obs_data = raw.get("observation", {})
    observation = ObservationConfig(
        max_boxes=int(obs_data.get("max_boxes", 16)),
        image_width=int(obs_data.get("image_width", playfield.width)),
        image_height=int(obs_data.get("image_height", playfield.height))
    )

    config = GameConfig(
        playfield=playfield,
        box=box,
        speeds=speeds,
        landing=landing,
        camera=camera,
        debris=debris,
        colors=colors,
        caps=caps,
        observation=observation
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
