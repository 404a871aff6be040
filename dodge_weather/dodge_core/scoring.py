"""
Scoring System
==============

Time-based score for the current run plus the best score of the process.
"""

from __future__ import annotations

import math
from typing import Optional

from dodge_weather.dodge_core.config_loader import GameConfig, get_config


class ScoreTracker:
    """
    Tracks the running score and the best completed run.

    Score accumulates points_per_second * dt while the player survives, so it
    does not depend on frame rate. Best score is an integer and is only
    updated when a run ends; it is never reset.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._points_per_second = config.scoring.points_per_second
        self._score: float = 0.0
        self._best_score: int = 0
        self._runs_completed: int = 0

    @property
    def score(self) -> float:
        """Current run score."""
        return self._score

    @property
    def display_score(self) -> int:
        """Score truncated to an integer, as shown in the HUD."""
        return int(math.floor(self._score))

    @property
    def best_score(self) -> int:
        """Best floor(score) of any completed run."""
        return self._best_score

    @property
    def runs_completed(self) -> int:
        return self._runs_completed

    def add_survival_time(self, dt: float) -> float:
        """
        Award points for surviving dt seconds.

        Returns:
            Points added this call.
        """
        points = self._points_per_second * dt
        self._score += points
        return points

    def record_run(self) -> bool:
        """
        Close the current run and update the best score.

        Returns:
            True if the best score improved.
        """
        self._runs_completed += 1
        final = self.display_score
        if final > self._best_score:
            self._best_score = final
            return True
        return False

    def reset(self) -> None:
        """Reset the run score to zero. Best score is kept."""
        self._score = 0.0
