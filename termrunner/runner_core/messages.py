"""
Messages
========

The closed set of messages the engine consumes. Timers emit Tick and Spawn,
the host emits KeyPress, and the engine answers with Quit when the host
should stop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

JUMP_KEY = " "
QUIT_KEYS = frozenset({"q", "ctrl+c", "\x03"})


@dataclass(frozen=True)
class Tick:
    """Advance the simulation by the wall-clock time since the last tick."""


@dataclass(frozen=True)
class Spawn:
    """Append a new enemy at the right edge."""


@dataclass(frozen=True)
class KeyPress:
    """A decoded key from the host terminal."""
    code: str


@dataclass(frozen=True)
class Quit:
    """Stop message delivery and tear the host down."""


Message = Union[Tick, Spawn, KeyPress, Quit]
