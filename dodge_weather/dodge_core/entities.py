"""
Entities
========

Player, enemies and the world that holds them. Plain data; all movement
happens in CollisionScorer and SpawnRecycleEngine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from dodge_weather.dodge_core.weather import WeatherKind


@dataclass
class Rect:
    """Axis-aligned rectangle with float coordinates. y grows downward."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> tuple:
        return (self.x + self.width * 0.5, self.y + self.height * 0.5)

    def overlaps(self, other: "Rect") -> bool:
        """
        True if the two rectangles share positive area.

        Edges that only touch do not count.
        """
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )

    def clamp_inside(self, width: float, height: float) -> None:
        """Move the rectangle so it lies fully within [0, width] x [0, height]."""
        if self.x < 0:
            self.x = 0.0
        if self.y < 0:
            self.y = 0.0
        if self.right > width:
            self.x = width - self.width
        if self.bottom > height:
            self.y = height - self.height

    def as_tuple(self) -> tuple:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Player:
    """The player-controlled square."""
    rect: Rect
    speed: float = 260.0


@dataclass
class Enemy:
    """
    A falling obstacle.

    kind is captured from the weather when the enemy is spawned and stays
    the same across recycles.
    """
    rect: Rect
    speed_y: float
    kind: WeatherKind


@dataclass
class World:
    """Owns the player and the fixed-size enemy pool of the current run."""
    player: Optional[Player] = None
    enemies: List[Enemy] = field(default_factory=list)

    def reset(self, player: Player, enemies: List[Enemy]) -> None:
        """Replace the player and the pool for a new run."""
        self.player = player
        self.enemies = list(enemies)

    @property
    def enemy_count(self) -> int:
        return len(self.enemies)
