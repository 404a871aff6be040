"""
Weather State
=============

The weather kind drives which obstacles spawn and how fast they fall.
It is pushed in from outside the game loop (a weather lookup, a command-line
flag or a debug key) and may arrive from another thread at any time.
"""

from __future__ import annotations

import threading
from enum import IntEnum
from typing import Union


class WeatherKind(IntEnum):
    """Discrete weather categories. Values match the external ingress ints."""
    SUNNY = 0
    CLOUDY = 1
    RAINY = 2

    @property
    def key(self) -> str:
        """Lowercase name used in game_config.yaml."""
        return self.name.lower()

    @property
    def display_name(self) -> str:
        """Name shown in the HUD."""
        return self.name.capitalize()

    @classmethod
    def from_raw(cls, value: Union[int, "WeatherKind"]) -> "WeatherKind":
        """
        Convert an external integer into a kind.

        Anything outside {0, 1, 2} becomes SUNNY, matching the game's
        default weather when no lookup is available.
        """
        try:
            return cls(int(value))
        except ValueError:
            return cls.SUNNY


class WeatherState:
    """
    Shared, thread-safe weather register.

    One instance is owned by the game and handed to the spawner; external
    code only ever calls set_weather().
    """

    def __init__(self, kind: Union[int, WeatherKind] = WeatherKind.SUNNY):
        self._lock = threading.Lock()
        self._kind = WeatherKind.from_raw(kind)

    def set_weather(self, kind: Union[int, WeatherKind]) -> None:
        """Overwrite the current weather. Out-of-range values map to SUNNY."""
        resolved = WeatherKind.from_raw(kind)
        with self._lock:
            self._kind = resolved

    def get_weather(self) -> WeatherKind:
        """Current weather kind."""
        with self._lock:
            return self._kind

    @property
    def name(self) -> str:
        """Display name of the current weather."""
        return self.get_weather().display_name

    def __repr__(self) -> str:
        return f"WeatherState({self.get_weather().name})"
