"""
Game State Machine
==================

Menu / playing / game-over flow as an explicit transition table.
transition() is pure; GameStateMachine holds the current state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from dodge_weather.dodge_core.weather import WeatherKind


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class GameEvent(Enum):
    START = "start"
    COLLISION = "collision"
    RESTART = "restart"
    TO_MENU = "to_menu"
    FORCE_SUNNY = "force_sunny"
    FORCE_CLOUDY = "force_cloudy"
    FORCE_RAINY = "force_rainy"


class Effect(Enum):
    """Side effects the caller must apply after a transition."""
    RESET_RUN = "reset_run"
    RECORD_BEST = "record_best"
    SET_WEATHER = "set_weather"


# Debug events and the weather they force
DEBUG_WEATHER_EVENTS: Dict[GameEvent, WeatherKind] = {
    GameEvent.FORCE_SUNNY: WeatherKind.SUNNY,
    GameEvent.FORCE_CLOUDY: WeatherKind.CLOUDY,
    GameEvent.FORCE_RAINY: WeatherKind.RAINY,
}


@dataclass(frozen=True)
class Transition:
    """Result of feeding one event to the state machine."""
    state: GameState
    effects: Tuple[Effect, ...] = ()
    weather: Optional[WeatherKind] = None  # Set when effects include SET_WEATHER

    @staticmethod
    def stay(state: GameState) -> "Transition":
        return Transition(state)


TRANSITIONS: Dict[Tuple[GameState, GameEvent], Transition] = {
    (GameState.MENU, GameEvent.START): Transition(GameState.PLAYING, (Effect.RESET_RUN,)),
    (GameState.PLAYING, GameEvent.COLLISION): Transition(GameState.GAME_OVER, (Effect.RECORD_BEST,)),
    (GameState.GAME_OVER, GameEvent.RESTART): Transition(GameState.PLAYING, (Effect.RESET_RUN,)),
    (GameState.GAME_OVER, GameEvent.TO_MENU): Transition(GameState.MENU),
}


def transition(state: GameState, event: GameEvent) -> Transition:
    """
    Look up the next state and side effects for (state, event).

    Unlisted pairs leave the state unchanged with no effects. Debug weather
    events only do something while playing.
    """
    if event in DEBUG_WEATHER_EVENTS:
        if state is GameState.PLAYING:
            return Transition(state, (Effect.SET_WEATHER,), DEBUG_WEATHER_EVENTS[event])
        return Transition.stay(state)
    return TRANSITIONS.get((state, event), Transition.stay(state))


class GameStateMachine:
    """Holds the single authoritative game state. Starts at MENU."""

    def __init__(self, initial: GameState = GameState.MENU):
        self._state = initial

    @property
    def state(self) -> GameState:
        return self._state

    def handle(self, event: GameEvent) -> Transition:
        """Apply an event and return the transition taken."""
        result = transition(self._state, event)
        self._state = result.state
        return result

    def reset(self) -> None:
        self._state = GameState.MENU
