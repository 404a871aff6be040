"""
Dodge Core - The simulation and control core of the game.

This module provides the frame-stepped game simulation, the weather register,
the spawn/recycle engine and a Gymnasium environment wrapper.

Main exports:
- CoreGame: Frame-stepped game (state machine + world + scoring)
- FrameInput: Per-frame input flags consumed by CoreGame.step()
- WeatherState / WeatherKind: Externally settable weather register
- DodgeEnv: Gymnasium environment for programmatic play
- GameConfig: Configuration loaded from game_config.yaml
"""

from dodge_weather.dodge_core.config_loader import GameConfig, load_config
from dodge_weather.dodge_core.weather import WeatherKind, WeatherState
from dodge_weather.dodge_core.state_machine import GameEvent, GameState, GameStateMachine
from dodge_weather.dodge_core.game import CoreGame, FrameInput, StepResult
from dodge_weather.dodge_core.env_gym import DodgeEnv

__all__ = [
    "GameConfig",
    "load_config",
    "WeatherKind",
    "WeatherState",
    "GameEvent",
    "GameState",
    "GameStateMachine",
    "CoreGame",
    "FrameInput",
    "StepResult",
    "DodgeEnv",
]
