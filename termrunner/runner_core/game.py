"""
Core Game
=========

Main game orchestrator combining player physics, enemy scrolling, collision,
scoring, the difficulty ramp, and frame composition.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from termrunner.runner_core.config_loader import GameConfig, get_config, validate_screen
from termrunner.runner_core.enemy import Enemy
from termrunner.runner_core.frame_buffer import FrameBuffer
from termrunner.runner_core.messages import (
    JUMP_KEY,
    QUIT_KEYS,
    KeyPress,
    Message,
    Quit,
    Spawn,
    Tick,
)
from termrunner.runner_core.player import Player
from termrunner.runner_core.rules import GameRules
from termrunner.runner_core.scoring import ScoreTracker

GAME_OVER_TEMPLATE = "Game Over :( Your score: {score}.\nPress q to quit"
SCORE_TEMPLATE = "Score: {score}"


@dataclass
class StepResult:
    """Result of a single simulation tick."""
    dt: float
    removed: int
    collided: bool
    delta_score: float
    terminated: bool
    termination_reason: str


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Player integration and jump gating
    - Enemy spawning, scrolling and expiry
    - Collision detection (Playing -> GameOver, one way)
    - Survival scoring
    - Scroll speed ramp
    - Frame composition

    The engine is single-threaded: every message runs to completion before
    the next one is handled.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        on_spawn: Optional[Callable[[int], None]] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            clock: Monotonic time source in seconds. Defaults to time.monotonic.
            on_spawn: Optional hook called with the running spawn count.

        Raises:
            ValueError: If the screen is too small for the sprites.
        """
        if config is None:
            config = get_config()

        validate_screen(config)

        self._config = config
        self._clock = clock if clock is not None else time.monotonic
        self._on_spawn = on_spawn

        self._width = config.screen.width
        self._height = config.screen.height
        self._floor = config.screen.floor_row
        self._header_row = config.screen.header_row

        # Subsystems
        self._rules = GameRules(config)
        self._scorer = ScoreTracker(config)
        self._buffer = FrameBuffer(self._width, self._height)

        self.reset()

    def reset(self) -> None:
        """Reset game to its initial state."""
        player_cfg = self._config.player
        self._player = Player(
            sprite=player_cfg.sprite,
            y=float(self._floor),
            vy=0.0,
            jump_impulse=player_cfg.jump_impulse,
            gravity=player_cfg.gravity
        )
        self._enemies: List[Enemy] = []
        self._scorer.reset()
        self._scroll_speed = self._rules.difficulty.initial_speed
        self._game_over = False
        self._termination_reason = ""
        self._tick_count = 0
        self._spawn_count = 0
        self._last_tick = self._clock()
        self._buffer.reset()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def player(self) -> Player:
        return self._player

    @property
    def enemies(self) -> Tuple[Enemy, ...]:
        """Live enemies in spawn order."""
        return tuple(self._enemies)

    @property
    def score(self) -> float:
        """Current score."""
        return self._scorer.score

    @property
    def scroll_speed(self) -> float:
        """Speed assigned to newly spawned enemies."""
        return self._scroll_speed

    @property
    def is_over(self) -> bool:
        """True if game has ended."""
        return self._game_over

    @property
    def termination_reason(self) -> str:
        return self._termination_reason

    @property
    def screen_width(self) -> int:
        return self._width

    @property
    def screen_height(self) -> int:
        return self._height

    @property
    def floor_row(self) -> int:
        return self._floor

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def spawn_count(self) -> int:
        return self._spawn_count

    def tick(self) -> StepResult:
        """
        Advance the simulation by the wall-clock time since the last tick.

        Returns:
            StepResult describing the tick.
        """
        now = self._clock()
        dt = now - self._last_tick
        self._last_tick = now
        return self.step(dt)

    def step(self, dt: float) -> StepResult:
        """
        Advance the simulation by an explicit dt.

        Args:
            dt: Elapsed time in seconds.

        Returns:
            StepResult describing the tick.
        """
        self._tick_count += 1
        self._player.integrate(dt, self._floor)

        # Stable compaction: expired enemies drop out, survivors keep order
        survivors: List[Enemy] = []
        for enemy in self._enemies:
            if enemy.is_expired(dt):
                continue
            enemy.integrate(dt)
            survivors.append(enemy)
        removed = len(self._enemies) - len(survivors)
        self._enemies = survivors

        result = self._rules.termination.check_collisions(self._enemies, self._player)
        if result.terminated and not self._game_over:
            self._game_over = True
            self._termination_reason = result.reason
            self._scorer.freeze()

        delta_score = self._scorer.accrue(dt)

        self._scroll_speed = self._rules.difficulty.accelerate(self._scroll_speed, dt)

        return StepResult(
            dt=dt,
            removed=removed,
            collided=result.terminated,
            delta_score=delta_score,
            terminated=self._game_over,
            termination_reason=self._termination_reason
        )

    def spawn_enemy(self) -> Enemy:
        """
        Append a new enemy at the right edge.

        Its velocity is the scroll speed at this instant; later speed growth
        does not affect it.

        Returns:
            The spawned enemy.
        """
        enemy = self._rules.spawn.create_enemy(self._scroll_speed)
        self._enemies.append(enemy)
        self._spawn_count += 1
        if self._on_spawn is not None:
            self._on_spawn(self._spawn_count)
        return enemy

    def request_jump(self) -> bool:
        """
        Jump if the player is on the ground.

        Returns:
            True if the jump happened, False if the player was airborne.
        """
        if not self._player.is_grounded(self._floor):
            return False
        self._player.jump()
        return True

    def handle_key(self, code: str) -> Optional[Quit]:
        """
        Apply a decoded key press.

        Args:
            code: Key name, e.g. " " or "q".

        Returns:
            Quit if the host should stop, otherwise None.
        """
        if code in QUIT_KEYS:
            return Quit()
        if code == JUMP_KEY:
            self.request_jump()
        return None

    def update(self, message: Message) -> Optional[Quit]:
        """
        Dispatch one message.

        Args:
            message: Tick, Spawn, KeyPress or Quit.

        Returns:
            Quit if the host should stop, otherwise None.

        Raises:
            TypeError: For anything that is not a known message.
        """
        if isinstance(message, Tick):
            self.tick()
            return None
        if isinstance(message, Spawn):
            self.spawn_enemy()
            return None
        if isinstance(message, KeyPress):
            return self.handle_key(message.code)
        if isinstance(message, Quit):
            return message
        raise TypeError(f"Unknown message: {message!r}")

    def render(self) -> str:
        """
        Compose the next displayable frame.

        Returns:
            The game-over message once the game has ended, otherwise the grid
            flattened top row first with a line break after every row.
        """
        display_score = self._scorer.display_score
        if self._game_over:
            return GAME_OVER_TEMPLATE.format(score=display_score)

        self._buffer.reset()
        for enemy in self._enemies:
            enemy.render(self._buffer, self._floor)
        self._player.render(self._buffer)
        self._buffer.write_text(0, self._header_row, SCORE_TEMPLATE.format(score=display_score))
        return self._buffer.to_text()

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self._scorer.score,
            "display_score": self._scorer.display_score,
            "ticks": self._tick_count,
            "spawns": self._spawn_count,
            "enemy_count": len(self._enemies),
            "scroll_speed": self._scroll_speed,
            "game_over": self._game_over,
            "terminated_reason": self._termination_reason,
        }
