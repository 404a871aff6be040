"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the dodge game.
One env step is one frame at the configured target frame rate.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from dodge_weather.dodge_core.config_loader import GameConfig, load_config
from dodge_weather.dodge_core.game import CoreGame, FrameInput
from dodge_weather.dodge_core.rng import RandomSource
from dodge_weather.dodge_core.state_machine import GameEvent, GameState
from dodge_weather.dodge_core.weather import WeatherKind, WeatherState


# Action index -> (left, right, up, down)
ACTIONS: Tuple[Tuple[bool, bool, bool, bool], ...] = (
    (False, False, False, False),  # 0: stay
    (True, False, False, False),   # 1: left
    (False, True, False, False),   # 2: right
    (False, False, True, False),   # 3: up
    (False, False, False, True),   # 4: down
    (True, False, True, False),    # 5: up-left
    (False, True, True, False),    # 6: up-right
    (True, False, False, True),    # 7: down-left
    (False, True, False, True),    # 8: down-right
)


class DodgeEnv(gym.Env):
    """
    Dodge the Weather as a Gymnasium environment.

    Action Space:
        Discrete(9): stay, four directions and four diagonals.

    Observation Space:
        Dict with the player rectangle, enemy rectangles, speeds and kinds,
        the current weather and the run score.

    Reward:
        Survival points earned this frame (points_per_second / fps).

    Info:
        Contains score, best_score, weather, state, etc.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        weather: Optional[Union[int, WeatherKind]] = None,
        debug: bool = False,
    ):
        """
        Initialize dodge environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            weather: Initial weather kind. SUNNY if None.
            debug: If True, enables verbose debug output.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug
        self._dt = 1.0 / self._config.display.target_fps

        self._rng = RandomSource()
        self._game = CoreGame(
            config=self._config,
            weather=WeatherState(WeatherKind.SUNNY if weather is None else weather),
            rng=self._rng,
            debug=debug
        )

        # Initialize renderer (lazy)
        self._renderer = None

        self.action_space = spaces.Discrete(len(ACTIONS))
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] DodgeEnv initialized")
            print(f"[DEBUG]   Screen: {self._config.screen.width}x{self._config.screen.height}")
            print(f"[DEBUG]   Enemies: {self._config.enemies.count}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        count = self._config.enemies.count
        screen = self._config.screen

        return spaces.Dict({
            "player": spaces.Box(
                low=0, high=max(screen.width, screen.height), shape=(4,), dtype=np.float32
            ),
            "enemy_rects": spaces.Box(low=-np.inf, high=np.inf, shape=(count, 4), dtype=np.float32),
            "enemy_speed": spaces.Box(low=0, high=np.inf, shape=(count,), dtype=np.float32),
            "enemy_kind": spaces.Box(low=0, high=len(WeatherKind) - 1, shape=(count,), dtype=np.int8),
            "weather": spaces.Discrete(len(WeatherKind)),
            "score": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Start a new run.

        Args:
            seed: Random seed for reproducibility.
            options: Optional {"weather": kind} applied before spawning.

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        if seed is not None:
            self._rng.reset(seed)
        if options and "weather" in options:
            self._game.set_weather(options["weather"])

        state = self._game.state
        if state is GameState.MENU:
            self._game.handle_event(GameEvent.START)
        elif state is GameState.GAME_OVER:
            self._game.handle_event(GameEvent.RESTART)
        else:
            self._game.reset_run()

        return self._get_obs(), self._game.get_info()

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one frame.

        Args:
            action: Index into ACTIONS.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        left, right, up, down = ACTIONS[int(action)]

        result = self._game.step(
            FrameInput(left=left, right=right, up=up, down=down),
            self._dt
        )

        terminated = self._game.state is GameState.GAME_OVER
        reward = float(result.points)

        info = self._game.get_info()
        info["recycled"] = result.recycled

        if self._debug and terminated:
            print(f"[DEBUG] TERMINATED: score={self._game.score:.1f}, "
                  f"best={self._game.best_score}")

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, False, info

    def _get_obs(self) -> Dict[str, np.ndarray]:
        """Convert world state to observation dict."""
        world = self._game.world
        enemies = world.enemies

        return {
            "player": np.array(world.player.rect.as_tuple(), dtype=np.float32),
            "enemy_rects": np.array([e.rect.as_tuple() for e in enemies], dtype=np.float32),
            "enemy_speed": np.array([e.speed_y for e in enemies], dtype=np.float32),
            "enemy_kind": np.array([int(e.kind) for e in enemies], dtype=np.int8),
            "weather": int(self._game.weather.get_weather()),
            "score": np.array(self._game.score, dtype=np.float32),
        }

    def _init_renderer(self) -> None:
        from dodge_weather.dodge_core.render_pygame import PygameRenderer
        self._renderer = PygameRenderer(self._config)

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode is None:
            return None

        if self._renderer is None:
            self._init_renderer()

        render_data = self._game.get_render_data()
        if self.render_mode == "rgb_array":
            return self._renderer.render(render_data)

        import pygame
        self._renderer.render_to_screen(render_data)
        pygame.event.pump()
        pygame.display.flip()
        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._renderer is not None:
            self._renderer.close()
            self._renderer = None

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
