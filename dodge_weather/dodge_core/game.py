"""
Core Game
=========

Main game orchestrator combining the state machine, spawner, collision and
scoring. One call to step() is one rendered frame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from dodge_weather.dodge_core.collision import CollisionScorer, movement_direction
from dodge_weather.dodge_core.config_loader import GameConfig, get_config
from dodge_weather.dodge_core.entities import World
from dodge_weather.dodge_core.rng import RandomSource
from dodge_weather.dodge_core.scoring import ScoreTracker
from dodge_weather.dodge_core.spawner import SpawnRecycleEngine
from dodge_weather.dodge_core.state_machine import (
    Effect,
    GameEvent,
    GameState,
    GameStateMachine,
    Transition,
)
from dodge_weather.dodge_core.weather import WeatherKind, WeatherState


@dataclass
class FrameInput:
    """
    Input state for one frame.

    Directions are "held" flags; everything else is "pressed this frame".
    """
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    start: bool = False
    restart: bool = False
    to_menu: bool = False
    force_sunny: bool = False
    force_cloudy: bool = False
    force_rainy: bool = False


@dataclass
class StepResult:
    """Result of a single frame."""
    state: GameState
    transitions: List[Transition] = field(default_factory=list)
    collided: bool = False
    points: float = 0.0
    recycled: int = 0


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Game state machine (menu / playing / game over)
    - Enemy spawning and recycling
    - Player movement, collision and scoring
    - Render data for the frontend

    At most one state transition happens per frame.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        weather: Optional[WeatherState] = None,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        debug: bool = False
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            weather: Shared weather register. A new SUNNY one if None.
            rng: Random source. Overrides seed when given.
            seed: Seed for a new RandomSource. Unseeded if None.
            debug: If True, prints state changes.
        """
        if config is None:
            config = get_config()
        if rng is None:
            rng = RandomSource(seed)

        self._config = config
        self._weather = weather if weather is not None else WeatherState()
        self._debug = debug

        # Initialize subsystems
        self._spawner = SpawnRecycleEngine(self._weather, config, rng)
        self._scorer = ScoreTracker(config)
        self._collision = CollisionScorer(self._spawner, self._scorer, config)
        self._machine = GameStateMachine()
        self._world = World()

        self._frames: int = 0

        # Give the menu a populated world to sit on
        self.reset_run()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def weather(self) -> WeatherState:
        """Shared weather register."""
        return self._weather

    @property
    def world(self) -> World:
        """Player and enemy pool."""
        return self._world

    @property
    def spawner(self) -> SpawnRecycleEngine:
        return self._spawner

    @property
    def state(self) -> GameState:
        """Current game state."""
        return self._machine.state

    @property
    def score(self) -> float:
        """Current run score."""
        return self._scorer.score

    @property
    def best_score(self) -> int:
        """Best score of the process."""
        return self._scorer.best_score

    @property
    def frames(self) -> int:
        """Number of frames stepped so far."""
        return self._frames

    def set_weather(self, kind: Union[int, WeatherKind]) -> None:
        """Weather ingress. Out-of-range ints become SUNNY."""
        self._weather.set_weather(kind)
        if self._debug:
            print(f"[DEBUG] Weather set to {self._weather.name}")

    def reset_run(self) -> None:
        """Re-centre the player, respawn the pool and zero the score."""
        self._world.reset(
            self._spawner.spawn_player(),
            self._spawner.reset_run(self._config.enemies.count)
        )
        self._scorer.reset()
        if self._debug:
            print(f"[DEBUG] Run reset: {self._world.enemy_count} enemies, "
                  f"weather={self._weather.name}")

    def handle_event(self, event: GameEvent) -> Transition:
        """
        Feed one event to the state machine and apply its side effects.

        Returns:
            The transition taken (unchanged state for no-ops).
        """
        before = self._machine.state
        result = self._machine.handle(event)

        for effect in result.effects:
            if effect is Effect.RESET_RUN:
                self.reset_run()
            elif effect is Effect.RECORD_BEST:
                improved = self._scorer.record_run()
                if self._debug and improved:
                    print(f"[DEBUG] New best score: {self._scorer.best_score}")
            elif effect is Effect.SET_WEATHER:
                self.set_weather(result.weather)

        if self._debug and result.state is not before:
            print(f"[DEBUG] {before.name} -> {result.state.name} ({event.name})")

        return result

    def step(self, frame_input: FrameInput, dt: float) -> StepResult:
        """
        Execute one frame.

        Args:
            frame_input: Input state for this frame.
            dt: Elapsed real time since the previous frame, in seconds.

        Returns:
            StepResult with the state after the frame.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")

        self._frames += 1
        state = self._machine.state

        if state is GameState.MENU:
            return self._step_menu(frame_input)
        if state is GameState.PLAYING:
            return self._step_playing(frame_input, dt)
        return self._step_game_over(frame_input)

    def _step_menu(self, frame_input: FrameInput) -> StepResult:
        transitions = []
        if frame_input.start:
            transitions.append(self.handle_event(GameEvent.START))
        return StepResult(state=self.state, transitions=transitions)

    def _step_playing(self, frame_input: FrameInput, dt: float) -> StepResult:
        transitions = []

        direction = movement_direction(
            frame_input.left, frame_input.right, frame_input.up, frame_input.down
        )

        # Debug weather only affects the next reset, never live enemies
        if frame_input.force_sunny:
            transitions.append(self.handle_event(GameEvent.FORCE_SUNNY))
        if frame_input.force_cloudy:
            transitions.append(self.handle_event(GameEvent.FORCE_CLOUDY))
        if frame_input.force_rainy:
            transitions.append(self.handle_event(GameEvent.FORCE_RAINY))

        update = self._collision.update(self._world, direction, dt)
        if update.collided:
            transitions.append(self.handle_event(GameEvent.COLLISION))

        return StepResult(
            state=self.state,
            transitions=transitions,
            collided=update.collided,
            points=update.points,
            recycled=update.recycled
        )

    def _step_game_over(self, frame_input: FrameInput) -> StepResult:
        transitions = []
        if frame_input.restart:
            transitions.append(self.handle_event(GameEvent.RESTART))
        elif frame_input.to_menu:
            transitions.append(self.handle_event(GameEvent.TO_MENU))
        return StepResult(state=self.state, transitions=transitions)

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "state": self.state.value,
            "score": self._scorer.score,
            "display_score": self._scorer.display_score,
            "best_score": self._scorer.best_score,
            "runs_completed": self._scorer.runs_completed,
            "weather": self._weather.get_weather().key,
            "frames": self._frames,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with state, screen size, entity rectangles and HUD values.
        """
        player = self._world.player
        enemies_data = []
        for enemy in self._world.enemies:
            enemies_data.append({
                "kind": enemy.kind,
                "x": enemy.rect.x,
                "y": enemy.rect.y,
                "width": enemy.rect.width,
                "height": enemy.rect.height,
            })

        return {
            "state": self.state,
            "screen_width": self._config.screen.width,
            "screen_height": self._config.screen.height,
            "weather": self._weather.get_weather(),
            "player": player.rect.as_tuple(),
            "enemies": enemies_data,
            "score": self._scorer.display_score,
            "best_score": self._scorer.best_score,
        }
