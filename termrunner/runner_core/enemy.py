"""
Enemy
=====

Horizontally scrolling obstacle. Velocity is captured at spawn time and
never changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from termrunner.runner_core.frame_buffer import FrameBuffer
from termrunner.runner_core.player import Player
from termrunner.runner_core.sprite import Sprite


@dataclass
class Enemy:
    """
    An obstacle sliding left along the floor.

    Attributes:
        sprite: Shape drawn for the enemy.
        x: Column of the left (leading) edge.
        vx: Horizontal velocity in columns/s, negative is leftward.
        baseline: Row just below the floor; the top edge is baseline - height.
    """
    sprite: Sprite
    x: float
    vx: float
    baseline: float

    @property
    def width(self) -> int:
        return self.sprite.width

    @property
    def height(self) -> int:
        return self.sprite.height

    def integrate(self, dt: float) -> None:
        """Advance the enemy by dt seconds."""
        self.x += self.vx * dt

    def is_expired(self, dt: float) -> bool:
        """True if moving for dt seconds would carry the left edge past column 0."""
        return self.x < abs(self.vx) * dt

    def collides_with(self, player: Player) -> bool:
        """
        Simplified AABB test against a player pinned at column 0.

        Hits when the leading edge has reached the player's right edge and
        the player's bottom row is at or below the enemy's top edge.
        """
        return self.x <= player.width and player.y >= self.baseline - self.height

    def render(self, buffer: FrameBuffer, floor: int) -> None:
        self.sprite.render(buffer, int(self.x), floor)
