"""
Human Play Mode
================

Play the stacking game in a pygame window. One game tick runs per frame
through TickLoop; minimizing the window cancels the loop and restoring it
resumes.

Controls:
    - Space/Click: Drop the box
    - R: Restart game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--config PATH]
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from stacker.stack_core.config_loader import load_config, GameConfig
from stacker.stack_core.game import CoreGame
from stacker.stack_core.frame_loop import FrameScheduler, TickLoop
from stacker.stack_core.render_full_pygame import PygameRenderer


class HumanPlayer:
    """
    Human-playable stacking game.

    The pygame clock plays the role of the host's frame callback: every
    clock tick runs one scheduler frame, which runs at most one game tick.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        self._debug = debug
        self._last_score = 0

        self._game = CoreGame(config=config, seed=seed, score_callback=self._on_score)

        pygame.init()
        self._clock = pygame.time.Clock()
        self._renderer = PygameRenderer(config)

        self._scheduler = FrameScheduler()
        self._loop = TickLoop(
            self._game,
            self._scheduler,
            render_sink=self._render,
            debug=debug
        )

        self._running = True
        self._paused = False
        self._announced = False

    def _on_score(self, score: int) -> None:
        if score > self._last_score:
            print(f"  Stacked! Score: {score}")
        self._last_score = score

    def _render(self, render_data: Dict[str, Any]) -> None:
        self._renderer.render_to_screen(render_data)

    def run(self) -> int:
        """Run the game loop. Returns final score."""
        print("=== Box Stacker ===")
        print("Space or click to drop the box")
        print("R to restart, ESC to quit")
        print()

        self._render(self._game.get_render_data())
        self._loop.start()

        while self._running:
            self._handle_events()
            self._scheduler.run_frame(pygame.time.get_ticks() / 1000.0)
            self._clock.tick(self._target_fps)

        self._loop.stop()
        self._renderer.close()
        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._restart()
                elif event.key == pygame.K_SPACE:
                    self._loop.request_drop()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._loop.request_drop()

            elif event.type == pygame.WINDOWMINIMIZED:
                self._paused = True
                self._loop.stop()

            elif event.type == pygame.WINDOWRESTORED and self._paused:
                self._paused = False
                if not self._game.is_over:
                    self._loop.start()

        if self._loop.halted_on_gameover and self._game.is_over:
            self._announce_game_over()

    def _announce_game_over(self) -> None:
        if self._announced:
            return
        self._announced = True
        print(f"\nGAME OVER - Score: {self._game.score}")

    def _restart(self) -> None:
        """Restart the game."""
        self._announced = False
        self._loop.reset()
        if not self._loop.running and not self._paused:
            self._loop.start()
        print("\n=== Game Restarted ===\n")


def main():
    parser = argparse.ArgumentParser(description="Play the box stacking game interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for box colors")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--debug", action="store_true", help="Print loop events")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            debug=args.debug
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
