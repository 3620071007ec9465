"""
Core Game
=========

Main game orchestrator combining box physics, alignment, camera and scoring.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from stacker.stack_core.config_loader import GameConfig, get_config
from stacker.stack_core.boxes import Box, BoxStack, Debris
from stacker.stack_core.alignment import LandingResult, apply_landing, resolve_landing
from stacker.stack_core.physics import bounce_step, fall_step, increase_speed
from stacker.stack_core.rules import Mode, ModeMachine, Trigger
from stacker.stack_core.camera import Camera
from stacker.stack_core.rng import ColorGenerator
from stacker.stack_core.scoring import ScoreTracker
from stacker.stack_core.state_snapshot import SnapshotBuilder, GameSnapshot


class CoreGame:
    """
    Main game simulation class.

    Owns the whole session state:
    - Box stack and debris fragment
    - Horizontal and vertical speeds
    - Mode state machine
    - Camera scroll
    - Score

    One tick = one frame. ``drop()`` is the only other mutator.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        score_callback: Optional[Callable[[int], None]] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for box colors.
            score_callback: Called with the new score whenever it changes.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._score_callback = score_callback

        # Initialize subsystems
        self._boxes = BoxStack()
        self._machine = ModeMachine()
        self._camera = Camera(config)
        self._colors = ColorGenerator(config, seed)
        self._scorer = ScoreTracker()
        self._snapshot_builder = SnapshotBuilder(config)

        # Game state
        self._debris = Debris()
        self._current: int = 1
        self._x_speed: int = config.speeds.x
        self._y_speed: int = config.speeds.y
        self._ticks: int = 0
        self._drops: int = 0
        self._last_landing: Optional[LandingResult] = None

        self._seed_stack()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def mode(self) -> Mode:
        """Current mode."""
        return self._machine.mode

    @property
    def is_over(self) -> bool:
        """True once the game has reached GAMEOVER."""
        return self._machine.is_over

    @property
    def boxes(self) -> BoxStack:
        """The live box stack. Mutate only through the game."""
        return self._boxes

    @property
    def box_count(self) -> int:
        return len(self._boxes)

    @property
    def current(self) -> int:
        """Index of the box presently bouncing or falling."""
        return self._current

    @property
    def current_box(self) -> Box:
        return self._boxes[self._current]

    @property
    def previous_box(self) -> Box:
        """The box the current box will land on."""
        return self._boxes[self._current - 1]

    @property
    def target_y(self) -> int:
        """Logical height at which the current box lands."""
        return self.previous_box.y + self._config.box_height

    @property
    def debris(self) -> Debris:
        return self._debris

    @property
    def x_speed(self) -> int:
        return self._x_speed

    @property
    def y_speed(self) -> int:
        return self._y_speed

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def camera_y(self) -> int:
        return self._camera.camera_y

    @property
    def scroll_counter(self) -> int:
        return self._camera.scroll_counter

    @property
    def score(self) -> int:
        """Boxes successfully stacked."""
        return self._scorer.score

    @property
    def scorer(self) -> ScoreTracker:
        return self._scorer

    @property
    def ticks(self) -> int:
        """Ticks simulated since the last reset (GAMEOVER ticks excluded)."""
        return self._ticks

    @property
    def drops(self) -> int:
        """Drops accepted since the last reset."""
        return self._drops

    @property
    def last_landing(self) -> Optional[LandingResult]:
        """Outcome of the most recent landing, if any."""
        return self._last_landing

    def _seed_stack(self) -> None:
        """Place the base box and spawn the first box to drop."""
        box_cfg = self._config.box
        base = Box(
            x=self._config.playfield.width // 2 - box_cfg.initial_width // 2,
            y=box_cfg.base_y,
            width=box_cfg.initial_width,
            color=self._colors.color_for(0)
        )
        self._boxes.append(base)
        self._spawn_box(1)

    def _spawn_box(self, index: int) -> None:
        """Append the box at ``index``, as wide as the box beneath it."""
        assert index == len(self._boxes), (
            f"Spawning box {index} into a stack of {len(self._boxes)}"
        )
        below = self._boxes[index - 1]
        self._boxes.append(Box(
            x=self._config.box.spawn_x,
            y=self._config.box.spawn_y(index),
            width=below.width,
            color=self._colors.color_for(index)
        ))

    def _notify_score(self) -> None:
        if self._score_callback is not None:
            self._score_callback(self._scorer.score)

    def reset(self, seed: Optional[int] = None) -> GameSnapshot:
        """
        Reset game to initial state. Valid in any mode.

        Args:
            seed: New random seed. Uses previous if None.

        Returns:
            Initial game snapshot.
        """
        if seed is not None:
            self._seed = seed

        self._boxes.clear()
        self._machine.reset()
        self._camera.reset()
        self._colors.reset(self._seed)
        self._scorer.reset()

        self._debris = Debris()
        self._current = 1
        self._x_speed = self._config.speeds.x
        self._y_speed = self._config.speeds.y
        self._ticks = 0
        self._drops = 0
        self._last_landing = None

        self._seed_stack()
        self._notify_score()

        return self.build_snapshot()

    def drop(self) -> bool:
        """
        Release the bouncing box.

        Returns:
            True if the box started falling, False if the game was not in
            BOUNCE (the input is ignored).
        """
        if not self._machine.can_fire(Trigger.DROP):
            return False
        self._machine.fire(Trigger.DROP)
        self._drops += 1
        return True

    def tick(self) -> None:
        """Advance the simulation by one frame. No-op once the game is over."""
        if self.is_over:
            return

        self._ticks += 1
        self._camera.step()

        self._drift_debris()

        if self.mode == Mode.BOUNCE:
            self._x_speed = bounce_step(
                self.current_box,
                self._x_speed,
                self._config.playfield.width
            )
        elif self.mode == Mode.FALL:
            landed = fall_step(
                self.current_box,
                self._y_speed,
                self.target_y,
                self._config.landing.detection
            )
            if landed:
                self._handle_landing()

    def _drift_debris(self) -> None:
        """Let visible debris sink until it has left the bottom of the screen."""
        fall_speed = self._config.debris.fall_speed
        if not fall_speed or not self._debris.visible:
            return
        if self._camera.to_screen_y(self._debris.y) >= self._config.playfield.height:
            return
        self._debris.y -= fall_speed

    def _handle_landing(self) -> None:
        """Resolve the landing of the current box."""
        current_box = self.current_box
        result = resolve_landing(current_box, self.previous_box)
        self._last_landing = result

        if not result.survived:
            self._machine.fire(Trigger.MISSED)
            return

        apply_landing(current_box, result)
        self._debris = result.debris
        self._x_speed = increase_speed(self._x_speed, self._config.speeds.x_increment)
        self._scorer.apply_landing(self._current, result.trimmed, current_box.width)
        self._camera.arm()

        self._current += 1
        self._spawn_box(self._current)
        self._machine.fire(Trigger.LANDED)
        self._notify_score()

    def run_ticks(self, count: int) -> int:
        """
        Tick up to ``count`` times, stopping early on GAMEOVER.

        Returns:
            Number of ticks actually simulated.
        """
        done = 0
        for _ in range(count):
            if self.is_over:
                break
            self.tick()
            done += 1
        return done

    def build_snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(self)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "mode": self.mode.value,
            "ticks": self._ticks,
            "drops": self._drops,
            "box_count": len(self._boxes),
            "perfect_landings": self._scorer.perfect_count,
            "total_trimmed": self._scorer.total_trimmed,
            "camera_y": self._camera.camera_y,
            "terminated_reason": "missed" if self.is_over else "",
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get screen-space geometry for renderers.

        Every rectangle is ``(x, screen_y, width, height)`` where
        ``screen_y = camera.base_y - logical_y + camera_y``.
        """
        height = self._config.box_height
        boxes_data: List[Dict[str, Any]] = []
        for index, box in enumerate(self._boxes):
            boxes_data.append({
                "index": index,
                "rect": (box.x, self._camera.to_screen_y(box.y), box.width, height),
                "color": box.color,
            })

        debris = self._debris
        return {
            "playfield_width": self._config.playfield.width,
            "playfield_height": self._config.playfield.height,
            "background": self._config.colors.background,
            "boxes": boxes_data,
            "debris": {
                "rect": (debris.x, self._camera.to_screen_y(debris.y), debris.width, height),
                "color": self._config.colors.debris,
                "visible": debris.visible,
            },
            "score": self._scorer.score,
            "mode": self.mode.value,
            "camera_y": self._camera.camera_y,
        }
