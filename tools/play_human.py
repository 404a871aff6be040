"""
Human Play Mode
===============

Play Dodge the Weather in a pygame window.

Controls:
    - WASD / Arrow keys: Move
    - Space / Enter: Start (from menu)
    - R: Restart (from game over)
    - ESC: Back to menu (from game over), quit (from menu)
    - F1 / F2 / F3: Force sunny / cloudy / rainy (while playing, next run)

Usage:
    python -m tools.play_human [--weather {0,1,2}] [--seed SEED] [--fps FPS] [--debug]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from dodge_weather.dodge_core.config_loader import GameConfig, load_config
from dodge_weather.dodge_core.game import CoreGame, FrameInput
from dodge_weather.dodge_core.state_machine import GameState
from dodge_weather.dodge_core.weather import WeatherKind, WeatherState


class HumanPlayer:
    """
    Frame pump for human play: polls input, measures dt, steps the game
    and renders, once per frame at the target frame rate.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        weather: int = WeatherKind.SUNNY,
        seed: Optional[int] = None,
        target_fps: Optional[int] = None,
        debug: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps or config.display.target_fps
        self._max_dt = config.display.max_frame_dt

        # Initialize game
        self._weather = WeatherState(weather)
        self._game = CoreGame(config=config, weather=self._weather, seed=seed, debug=debug)

        # Initialize pygame
        pygame.init()
        self._clock = pygame.time.Clock()

        from dodge_weather.dodge_core.render_pygame import PygameRenderer
        self._renderer = PygameRenderer(config)

        self._running = True

    @property
    def weather(self) -> WeatherState:
        """Weather register; safe to set from another thread."""
        return self._weather

    def run(self) -> int:
        """Run the game loop. Returns the best score."""
        print("=== Dodge the Weather ===")
        print("WASD/Arrows to move, SPACE to start")
        print("R to restart, ESC for menu")
        print()

        # First tick just starts the clock
        self._clock.tick(self._target_fps)

        while self._running:
            frame_input = self._poll_input()
            if not self._running:
                break

            dt = min(self._clock.get_time() / 1000.0, self._max_dt)
            before = self._game.state
            self._game.step(frame_input, dt)
            self._report(before)

            self._renderer.render_to_screen(self._game.get_render_data())
            pygame.display.flip()
            self._clock.tick(self._target_fps)

        self._renderer.close()
        pygame.quit()
        return self._game.best_score

    def _poll_input(self) -> FrameInput:
        """Collect held directions and keys pressed this frame."""
        frame_input = FrameInput()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                key = event.key
                if key in (pygame.K_SPACE, pygame.K_RETURN):
                    frame_input.start = True
                elif key == pygame.K_r:
                    frame_input.restart = True
                elif key == pygame.K_ESCAPE:
                    if self._game.state is GameState.MENU:
                        self._running = False
                    frame_input.to_menu = True
                elif key == pygame.K_F1:
                    frame_input.force_sunny = True
                elif key == pygame.K_F2:
                    frame_input.force_cloudy = True
                elif key == pygame.K_F3:
                    frame_input.force_rainy = True

        held = pygame.key.get_pressed()
        frame_input.left = bool(held[pygame.K_LEFT] or held[pygame.K_a])
        frame_input.right = bool(held[pygame.K_RIGHT] or held[pygame.K_d])
        frame_input.up = bool(held[pygame.K_UP] or held[pygame.K_w])
        frame_input.down = bool(held[pygame.K_DOWN] or held[pygame.K_s])

        return frame_input

    def _report(self, before: GameState) -> None:
        after = self._game.state
        if after is before:
            return
        if after is GameState.PLAYING:
            print(f"=== Run started ({self._weather.name}) ===")
        elif after is GameState.GAME_OVER:
            print(f"GAME OVER - Score: {int(self._game.score)} (Best: {self._game.best_score})")


def main():
    parser = argparse.ArgumentParser(description="Play Dodge the Weather")
    parser.add_argument("--weather", type=int, default=int(WeatherKind.SUNNY),
                        help="Weather kind: 0 sunny, 1 cloudy, 2 rainy (default: 0)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--debug", action="store_true", help="Print state changes")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            weather=args.weather,
            seed=args.seed,
            target_fps=args.fps,
            debug=args.debug
        )
        best = player.run()
        print(f"\nBest Score: {best}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
