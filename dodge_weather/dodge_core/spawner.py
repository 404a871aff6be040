"""
Spawner
=======

Creates the enemy pool at the start of a run and puts fallen enemies back
above the screen. Sizes and speeds depend on the weather kind.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from dodge_weather.dodge_core.config_loader import GameConfig, get_config
from dodge_weather.dodge_core.entities import Enemy, Player, Rect
from dodge_weather.dodge_core.rng import RandomSource
from dodge_weather.dodge_core.weather import WeatherKind, WeatherState


class SpawnRecycleEngine:
    """
    Weather-driven enemy generation.

    - reset_run(): a fresh pool, every enemy taking the weather at call time
    - recycle(): reposition one enemy above the screen, keeping its kind
    """

    def __init__(
        self,
        weather: WeatherState,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None
    ):
        """
        Initialize spawner.

        Args:
            weather: Shared weather register read at reset time.
            config: Game configuration. Uses default if None.
            rng: Random source. Unseeded if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._weather = weather
        self._rng = rng if rng is not None else RandomSource()

        self._screen_w = config.screen.width
        self._screen_h = config.screen.height
        self._recycle_y = config.recycle_threshold_y

    @property
    def rng(self) -> RandomSource:
        return self._rng

    def spawn_player(self) -> Player:
        """Player centred horizontally, near the bottom of the screen."""
        player_cfg = self._config.player
        rect = Rect(
            x=self._screen_w / 2.0 - player_cfg.width / 2.0,
            y=self._screen_h - player_cfg.bottom_offset,
            width=player_cfg.width,
            height=player_cfg.height
        )
        return Player(rect=rect, speed=player_cfg.speed)

    def reset_run(self, count: Optional[int] = None) -> List[Enemy]:
        """
        Generate a new enemy pool above the visible area.

        Args:
            count: Pool size. Uses the configured count if None.

        Returns:
            Exactly count enemies, all of the current weather kind.
        """
        if count is None:
            count = self._config.enemies.count

        # Snapshot once so a weather change mid-call can't mix kinds
        kind = self._weather.get_weather()
        y_max = self._config.enemies.spawn_y_max

        enemies = []
        for _ in range(count):
            width, height = self._generate_size(kind)
            x = float(self._rng.randint(0, self._max_x(width)))
            y = float(self._rng.randint(-self._screen_h, y_max))
            enemies.append(Enemy(
                rect=Rect(x, y, width, height),
                speed_y=self._generate_speed(kind),
                kind=kind
            ))
        return enemies

    def needs_recycle(self, enemy: Enemy) -> bool:
        """True once the enemy has fallen past the bottom margin."""
        return enemy.rect.y > self._recycle_y

    def recycle(self, enemy: Enemy) -> None:
        """
        Put an enemy back above the screen with a new position and speed.

        Size and kind are kept.
        """
        y_low, y_high = self._config.recycle.y_range
        enemy.rect.y = float(self._rng.randint(y_low, y_high))
        enemy.rect.x = float(self._rng.randint(0, self._max_x(enemy.rect.width)))
        enemy.speed_y = self._generate_speed(enemy.kind)

    def _max_x(self, width: float) -> int:
        return max(0, self._screen_w - int(width))

    def _generate_size(self, kind: WeatherKind) -> Tuple[float, float]:
        ranges = self._config.enemies.ranges_for(kind)
        width = float(self._rng.randint(*ranges.width))
        if ranges.is_square:
            return width, width
        return width, float(self._rng.randint(*ranges.height))

    def _generate_speed(self, kind: WeatherKind) -> float:
        ranges = self._config.enemies.ranges_for(kind)
        return ranges.base_speed + float(self._rng.randint(*ranges.speed_bonus))
