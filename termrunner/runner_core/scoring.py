"""
Scoring System
==============

Accrues survival score over time and freezes it when the game ends.
"""

from __future__ import annotations

from typing import Optional

from termrunner.runner_core.config_loader import GameConfig, get_config


class ScoreTracker:
    """
    Tracks the survival score.

    Score grows by dt * score_rate for every tick survived. Once frozen it
    never changes again until reset.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._rate = config.world.score_rate
        self._score: float = 0.0
        self._frozen: bool = False

    @property
    def score(self) -> float:
        """Current total score."""
        return self._score

    @property
    def display_score(self) -> int:
        """Score truncated to an integer, as shown on screen."""
        return int(self._score)

    @property
    def frozen(self) -> bool:
        """True once the game has ended."""
        return self._frozen

    def accrue(self, dt: float) -> float:
        """
        Add survival points for dt seconds.

        Args:
            dt: Elapsed time in seconds.

        Returns:
            Points added (0.0 when frozen).
        """
        if self._frozen:
            return 0.0
        points = dt * self._rate
        self._score += points
        return points

    def freeze(self) -> None:
        """Stop accruing; the current value is final."""
        self._frozen = True

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0.0
        self._frozen = False
