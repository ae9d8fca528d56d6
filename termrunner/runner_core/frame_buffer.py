"""
Frame Buffer
============

Character grid the engine composes every frame into. Backed by a numpy
unicode array so rectangle stamps are slice assignments.
"""

from __future__ import annotations

import numpy as np

BLANK = " "


class FrameBuffer:
    """
    A height x width grid of single characters.

    Row 0 is the top of the screen. The buffer is derived state: the engine
    resets it to blanks at the start of every render.
    """

    def __init__(self, width: int, height: int):
        """
        Initialize a blank buffer.

        Args:
            width: Number of columns.
            height: Number of rows.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame buffer size must be positive, got {width}x{height}")

        self._width = width
        self._height = height
        self._cells = np.full((height, width), BLANK, dtype="<U1")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def reset(self) -> None:
        """Fill every cell with a blank."""
        self._cells[:] = BLANK

    def set(self, x: int, y: int, char: str) -> None:
        """
        Write one character at column x, row y.

        Raises:
            ValueError: If the cell is outside the buffer or char is not
                exactly one character.
        """
        self._check_bounds(x, y, 1, 1)
        self._check_char(char)
        self._cells[y, x] = char

    def fill_rect(self, x: int, y: int, width: int, height: int, char: str) -> None:
        """
        Fill a rectangle whose top-left cell is (x, y).

        Raises:
            ValueError: If the rectangle is not fully inside the buffer.
        """
        self._check_bounds(x, y, width, height)
        self._check_char(char)
        self._cells[y:y + height, x:x + width] = char

    def write_text(self, x: int, y: int, text: str) -> None:
        """
        Overlay text on row y starting at column x, one character per cell.

        Characters past the right edge are dropped.
        """
        self._check_bounds(x, y, 1, 1)
        for i, char in enumerate(text[:self._width - x]):
            self.set(x + i, y, char)

    def to_text(self) -> str:
        """Flatten rows top-first, each followed by a line break."""
        return "".join("".join(row) + "\n" for row in self._cells.tolist())

    @staticmethod
    def _check_char(char: str) -> None:
        # A <U1 cell would silently keep only the first character
        if len(char) != 1:
            raise ValueError(f"Cell must hold a single character, got {char!r}")

    def _check_bounds(self, x: int, y: int, width: int, height: int) -> None:
        # numpy would silently wrap negative indices
        if x < 0 or y < 0 or x + width > self._width or y + height > self._height:
            raise ValueError(
                f"Rectangle ({x}, {y}, {width}x{height}) outside "
                f"{self._width}x{self._height} buffer"
            )
