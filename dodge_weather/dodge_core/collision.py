"""
Collision and Movement
======================

Per-frame update while playing: move the player, drop the enemies, recycle
the ones that fell off screen, test for hits and award survival points.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from dodge_weather.dodge_core.config_loader import GameConfig, get_config
from dodge_weather.dodge_core.entities import World
from dodge_weather.dodge_core.scoring import ScoreTracker
from dodge_weather.dodge_core.spawner import SpawnRecycleEngine


@dataclass
class UpdateResult:
    """Outcome of one playing frame."""
    collided: bool
    recycled: int
    points: float


def movement_direction(
    left: bool,
    right: bool,
    up: bool,
    down: bool
) -> Tuple[float, float]:
    """
    Unit direction vector from the four directional inputs.

    Opposing inputs cancel. Diagonals are normalised so they move at the
    same speed as straight lines. Returns (0, 0) when idle.
    """
    dx = float(right) - float(left)
    dy = float(down) - float(up)
    if dx == 0 and dy == 0:
        return (0.0, 0.0)
    length = math.hypot(dx, dy)
    return (dx / length, dy / length)


class CollisionScorer:
    """
    Advances the world by one frame.

    Collision uses each enemy's rectangle. Suns are drawn as the circle
    inscribed in that rectangle, so their hitbox is slightly larger than
    what the player sees.
    """

    def __init__(
        self,
        spawner: SpawnRecycleEngine,
        scorer: ScoreTracker,
        config: Optional[GameConfig] = None
    ):
        """
        Initialize collision scorer.

        Args:
            spawner: Used to recycle enemies that fell past the bottom.
            scorer: Receives survival points.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._spawner = spawner
        self._scorer = scorer
        self._screen_w = float(config.screen.width)
        self._screen_h = float(config.screen.height)

    def move_player(self, world: World, direction: Tuple[float, float], dt: float) -> None:
        """Displace the player along direction and keep it on screen."""
        player = world.player
        player.rect.x += direction[0] * player.speed * dt
        player.rect.y += direction[1] * player.speed * dt
        player.rect.clamp_inside(self._screen_w, self._screen_h)

    def advance_enemies(self, world: World, dt: float) -> int:
        """
        Drop every enemy by its speed and recycle those past the bottom.

        Returns:
            Number of enemies recycled this frame.
        """
        recycled = 0
        for enemy in world.enemies:
            enemy.rect.y += enemy.speed_y * dt
            if self._spawner.needs_recycle(enemy):
                self._spawner.recycle(enemy)
                recycled += 1
        return recycled

    def detect_collision(self, world: World) -> bool:
        """True if any enemy overlaps the player."""
        player_rect = world.player.rect
        return any(enemy.rect.overlaps(player_rect) for enemy in world.enemies)

    def update(
        self,
        world: World,
        direction: Tuple[float, float],
        dt: float
    ) -> UpdateResult:
        """
        Run one playing frame.

        Args:
            world: Player and enemy pool, mutated in place.
            direction: Unit (or zero) movement vector from movement_direction().
            dt: Elapsed real time in seconds.

        Returns:
            UpdateResult; points is 0 when the player was hit.
        """
        self.move_player(world, direction, dt)
        recycled = self.advance_enemies(world, dt)

        if self.detect_collision(world):
            return UpdateResult(collided=True, recycled=recycled, points=0.0)

        points = self._scorer.add_survival_time(dt)
        return UpdateResult(collided=False, recycled=recycled, points=points)
