"""
Game Rules
==========

Handles spawn positioning, the difficulty ramp, and termination conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from termrunner.runner_core.config_loader import GameConfig, get_config
from termrunner.runner_core.enemy import Enemy
from termrunner.runner_core.player import Player


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class SpawnRules:
    """
    Places new enemies at the right edge of the grid.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize spawn rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._sprite = config.enemy.sprite
        self._spawn_x = float(config.screen.width - config.enemy.width - 1)
        self._baseline = float(config.screen.height)

    @property
    def spawn_x(self) -> float:
        """Column where new enemies appear."""
        return self._spawn_x

    def create_enemy(self, scroll_speed: float) -> Enemy:
        """
        Build an enemy moving left at the given speed.

        Args:
            scroll_speed: Current world scroll speed (positive magnitude).

        Returns:
            New Enemy at the right edge.
        """
        return Enemy(
            sprite=self._sprite,
            x=self._spawn_x,
            vx=-abs(scroll_speed),
            baseline=self._baseline
        )


class DifficultyRules:
    """
    Compounding scroll speed growth.

    Speed grows by speed * rate * dt every tick, so it only ever increases.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._initial_speed = config.world.initial_scroll_speed
        self._growth_rate = config.world.speed_growth_rate

    @property
    def initial_speed(self) -> float:
        return self._initial_speed

    def accelerate(self, speed: float, dt: float) -> float:
        """Return the scroll speed after dt seconds of growth."""
        return speed + speed * self._growth_rate * dt


class TerminationRules:
    """
    Handles game termination conditions.

    - Collision: any live enemy touching the player ends the game.
    """

    def check_collisions(self, enemies: Iterable[Enemy], player: Player) -> TerminationResult:
        """
        Check whether any enemy hits the player.

        Args:
            enemies: Live enemies after integration.
            player: The player.

        Returns:
            TerminationResult indicating game state.
        """
        for enemy in enemies:
            if enemy.collides_with(player):
                return TerminationResult.game_over("collision")
        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize game rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self.spawn = SpawnRules(config)
        self.difficulty = DifficultyRules(config)
        self.termination = TerminationRules()
