"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

from dodge_weather.dodge_core.weather import WeatherKind


@dataclass(frozen=True)
class ScreenConfig:
    """Fixed screen dimensions in pixels."""
    width: int
    height: int


@dataclass(frozen=True)
class PlayerConfig:
    """Player rectangle size, speed and reset position."""
    width: float
    height: float
    speed: float          # Pixels per second
    bottom_offset: float  # Distance of the player's top edge from the screen bottom


@dataclass(frozen=True)
class KindRanges:
    """Generation ranges for one weather kind (inclusive integer bounds)."""
    width: Tuple[int, int]
    height: Optional[Tuple[int, int]]  # None means square (height = width)
    base_speed: float
    speed_bonus: Tuple[int, int]

    @property
    def is_square(self) -> bool:
        return self.height is None

    @property
    def speed_range(self) -> Tuple[float, float]:
        """Lowest and highest speed this kind can be given."""
        return (
            self.base_speed + self.speed_bonus[0],
            self.base_speed + self.speed_bonus[1],
        )


@dataclass(frozen=True)
class EnemyConfig:
    """Enemy pool size, spawn band and per-kind ranges."""
    count: int
    spawn_y_max: int
    kinds: Dict[WeatherKind, KindRanges]

    def ranges_for(self, kind: WeatherKind) -> KindRanges:
        """Ranges for a kind; anything unknown falls back to sunny."""
        return self.kinds.get(kind, self.kinds[WeatherKind.SUNNY])


@dataclass(frozen=True)
class RecycleConfig:
    """When and where fallen enemies are put back."""
    margin_below: int
    y_range: Tuple[int, int]


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    points_per_second: float


@dataclass(frozen=True)
class DisplayConfig:
    """Frame pump settings."""
    target_fps: int
    max_frame_dt: float
    title: str


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable so screen size and enemy count cannot change
    while the game is running.
    """
    screen: ScreenConfig
    player: PlayerConfig
    enemies: EnemyConfig
    recycle: RecycleConfig
    scoring: ScoringConfig
    display: DisplayConfig

    @property
    def recycle_threshold_y(self) -> float:
        """Enemies whose top edge is below this line get recycled."""
        return float(self.screen.height + self.recycle.margin_below)


def _parse_range(data, name: str) -> Tuple[int, int]:
    """Parse an inclusive [min, max] integer range from YAML."""
    if data is None or len(data) != 2:
        raise ValueError(f"{name} must have 2 values [min, max], got {data}")
    low, high = int(data[0]), int(data[1])
    if low > high:
        raise ValueError(f"{name} range is inverted: [{low}, {high}]")
    return (low, high)


def _parse_kind(kind_data: dict, name: str) -> KindRanges:
    """Parse the generation ranges of a single weather kind."""
    height_data = kind_data.get("height")
    return KindRanges(
        width=_parse_range(kind_data["width"], f"{name}.width"),
        height=None if height_data is None else _parse_range(height_data, f"{name}.height"),
        base_speed=float(kind_data["base_speed"]),
        speed_bonus=_parse_range(kind_data["speed_bonus"], f"{name}.speed_bonus"),
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    screen = config.screen
    if screen.width <= 0 or screen.height <= 0:
        raise ValueError(f"Screen must be positive, got {screen.width}x{screen.height}")

    player = config.player
    if player.width <= 0 or player.height <= 0:
        raise ValueError(f"Player size must be positive, got {player.width}x{player.height}")
    if player.width > screen.width or player.height > screen.height:
        raise ValueError(
            f"Player ({player.width}x{player.height}) does not fit on "
            f"screen ({screen.width}x{screen.height})"
        )
    if player.speed < 0:
        raise ValueError(f"Player speed must not be negative, got {player.speed}")

    enemies = config.enemies
    if enemies.count < 1:
        raise ValueError(f"enemies.count must be at least 1, got {enemies.count}")
    if -screen.height > enemies.spawn_y_max:
        raise ValueError(
            f"enemies.spawn_y_max ({enemies.spawn_y_max}) must be >= -screen.height ({-screen.height})"
        )

    for kind in WeatherKind:
        if kind not in enemies.kinds:
            raise ValueError(f"Missing enemy ranges for kind '{kind.key}'")
        ranges = enemies.kinds[kind]
        if ranges.width[0] <= 0:
            raise ValueError(f"{kind.key}.width must be positive, got {ranges.width}")
        if ranges.width[1] > screen.width:
            raise ValueError(f"{kind.key}.width exceeds screen width: {ranges.width}")
        if ranges.height is not None and ranges.height[0] <= 0:
            raise ValueError(f"{kind.key}.height must be positive, got {ranges.height}")

    if config.scoring.points_per_second < 0:
        raise ValueError(
            f"scoring.points_per_second must not be negative, got {config.scoring.points_per_second}"
        )

    if config.display.target_fps <= 0:
        raise ValueError(f"display.target_fps must be positive, got {config.display.target_fps}")
    if config.display.max_frame_dt <= 0:
        raise ValueError(f"display.max_frame_dt must be positive, got {config.display.max_frame_dt}")


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

    screen_data = raw["screen"]
    screen = ScreenConfig(
        width=int(screen_data["width"]),
        height=int(screen_data["height"])
    )

    player_data = raw["player"]
    player = PlayerConfig(
        width=float(player_data["width"]),
        height=float(player_data["height"]),
        speed=float(player_data.get("speed", 260.0)),
        bottom_offset=float(player_data.get("bottom_offset", 70))
    )

    enemy_data = raw["enemies"]
    kinds_data = enemy_data["kinds"]
    kinds = {
        kind: _parse_kind(kinds_data[kind.key], kind.key)
        for kind in WeatherKind
        if kind.key in kinds_data
    }
    enemies = EnemyConfig(
        count=int(enemy_data["count"]),
        spawn_y_max=int(enemy_data.get("spawn_y_max", -20)),
        kinds=kinds
    )

    recycle_data = raw.get("recycle", {})
    recycle = RecycleConfig(
        margin_below=int(recycle_data.get("margin_below", 10)),
        y_range=_parse_range(recycle_data.get("y_range", [-200, -20]), "recycle.y_range")
    )

    scoring_data = raw.get("scoring", {})
    scoring = ScoringConfig(
        points_per_second=float(scoring_data.get("points_per_second", 60.0))
    )

    display_data = raw.get("display", {})
    display = DisplayConfig(
        target_fps=int(display_data.get("target_fps", 60)),
        max_frame_dt=float(display_data.get("max_frame_dt", 0.1)),
        title=str(display_data.get("title", "Dodge"))
    )

    config = GameConfig(
        screen=screen,
        player=player,
        enemies=enemies,
        recycle=recycle,
        scoring=scoring,
        display=display
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
