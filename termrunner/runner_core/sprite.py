"""
Sprite
======

Immutable rectangular glyph shape. Position is supplied by the owning body
at render time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termrunner.runner_core.frame_buffer import FrameBuffer


@dataclass(frozen=True)
class Sprite:
    """A width x height block of a single glyph."""
    width: int
    height: int
    glyph: str

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Sprite size must be positive, got {self.width}x{self.height}")
        if len(self.glyph) != 1:
            raise ValueError(f"Sprite glyph must be a single character, got {self.glyph!r}")

    def render(self, buffer: "FrameBuffer", x: int, y: int) -> None:
        """
        Stamp the sprite into a frame buffer.

        The block's bottom-left cell lands on column x, row y and the block
        grows upward and rightward.

        Args:
            buffer: Target frame buffer.
            x: Column of the left edge.
            y: Row of the bottom edge.

        Raises:
            ValueError: If any part of the block falls outside the buffer.
        """
        top = y - self.height + 1
        buffer.fill_rect(x, top, self.width, self.height, self.glyph)
