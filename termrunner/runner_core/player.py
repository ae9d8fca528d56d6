"""
Player
======

Vertical-only kinematic body. Rows count down from the top of the screen,
so the floor is the last row and a positive velocity moves the sprite up.
"""

from __future__ import annotations

from dataclasses import dataclass

from termrunner.runner_core.frame_buffer import FrameBuffer
from termrunner.runner_core.sprite import Sprite


@dataclass
class Player:
    """
    The jumping player sprite, pinned to column 0.

    Attributes:
        sprite: Shape drawn for the player.
        y: Row of the sprite's bottom edge (float, never below the floor).
        vy: Vertical velocity in rows/s, positive is up.
        jump_impulse: Velocity set by a jump.
        gravity: Downward acceleration applied while airborne.
    """
    sprite: Sprite
    y: float
    vy: float
    jump_impulse: float
    gravity: float

    @property
    def width(self) -> int:
        return self.sprite.width

    @property
    def height(self) -> int:
        return self.sprite.height

    def is_grounded(self, floor: float) -> bool:
        """True iff the player rests exactly on the floor."""
        return self.y == floor

    def jump(self) -> None:
        """Set the upward velocity. Grounded gating is the engine's job."""
        self.vy = self.jump_impulse

    def integrate(self, dt: float, floor: float) -> None:
        """
        Advance the player by dt seconds.

        The position is clamped to the floor before gravity is applied, so a
        grounded player keeps its velocity (landing does not zero it).

        Args:
            dt: Elapsed time in seconds.
            floor: Row of the ground.
        """
        self.y -= self.vy * dt
        self.y = min(self.y, float(floor))
        if not self.is_grounded(floor):
            self.vy -= self.gravity * dt

    def render(self, buffer: FrameBuffer) -> None:
        """Stamp the sprite at column 0, kept inside the top edge."""
        row = max(int(self.y), self.sprite.height - 1)
        self.sprite.render(buffer, 0, row)
