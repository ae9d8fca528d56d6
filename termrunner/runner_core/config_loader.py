"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from termrunner.runner_core.sprite import Sprite


@dataclass(frozen=True)
class ScreenConfig:
    """Grid geometry used when no real terminal is attached."""
    width: int          # Columns
    height: int         # Rows
    header_row: int     # Row carrying the score readout

    @property
    def floor_row(self) -> int:
        """Row the player rests on."""
        return self.height - 1


@dataclass(frozen=True)
class PlayerConfig:
    """Player sprite and vertical physics."""
    width: int
    height: int
    glyph: str
    jump_impulse: float
    gravity: float

    @property
    def sprite(self) -> Sprite:
        return Sprite(self.width, self.height, self.glyph)


@dataclass(frozen=True)
class EnemyConfig:
    """Enemy sprite."""
    width: int
    height: int
    glyph: str

    @property
    def sprite(self) -> Sprite:
        return Sprite(self.width, self.height, self.glyph)


@dataclass(frozen=True)
class WorldConfig:
    """Scroll speed ramp and scoring."""
    initial_scroll_speed: float  # Columns per second, positive magnitude
    speed_growth_rate: float     # Fractional growth per second
    score_rate: float            # Points per second survived


@dataclass(frozen=True)
class TimingConfig:
    """Timer rates of the message pump."""
    fps: int
    spawn_interval: float


@dataclass(frozen=True)
class EnvConfig:
    """Gymnasium environment parameters."""
    dt: float
    max_ticks: int
    max_enemies: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    screen: ScreenConfig
    player: PlayerConfig
    enemy: EnemyConfig
    world: WorldConfig
    timing: TimingConfig
    env: EnvConfig

    def with_screen(self, width: int, height: int) -> "GameConfig":
        """Copy of this config sized to a real terminal."""
        screen = ScreenConfig(
            width=int(width),
            height=int(height),
            header_row=self.screen.header_row
        )
        return GameConfig(
            screen=screen,
            player=self.player,
            enemy=self.enemy,
            world=self.world,
            timing=self.timing,
            env=self.env
        )


def _parse_glyph(value) -> str:
    """Parse a single display character from YAML."""
    glyph = str(value)
    if len(glyph) != 1:
        raise ValueError(f"Glyph must be a single character, got {glyph!r}")
    return glyph


def validate_screen(config: GameConfig) -> None:
    """
    Check that the grid can hold both sprites and the score header.

    Raises:
        ValueError: If the grid is too small.
    """
    screen = config.screen
    min_width = config.player.width + config.enemy.width + 2
    min_height = max(config.player.height, config.enemy.height, screen.header_row + 2)
    if screen.width < min_width or screen.height < min_height:
        raise ValueError(
            f"Screen {screen.width}x{screen.height} too small, "
            f"need at least {min_width}x{min_height}"
        )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    for name, sprite in (("player", config.player), ("enemy", config.enemy)):
        if sprite.width <= 0 or sprite.height <= 0:
            raise ValueError(f"{name} sprite must have positive size, got {sprite.width}x{sprite.height}")

    if config.screen.header_row < 0:
        raise ValueError(f"header_row must be >= 0, got {config.screen.header_row}")

    validate_screen(config)

    if config.player.gravity <= 0:
        raise ValueError(f"gravity must be positive, got {config.player.gravity}")

    if config.world.initial_scroll_speed <= 0:
        raise ValueError(
            f"initial_scroll_speed must be positive, got {config.world.initial_scroll_speed}"
        )

    # Speed only ever grows
    if config.world.speed_growth_rate < 0:
        raise ValueError(f"speed_growth_rate must be >= 0, got {config.world.speed_growth_rate}")

    if config.timing.fps <= 0 or config.timing.spawn_interval <= 0:
        raise ValueError("fps and spawn_interval must be positive")

    if config.env.dt <= 0 or config.env.max_ticks <= 0 or config.env.max_enemies <= 0:
        raise ValueError("env.dt, env.max_ticks and env.max_enemies must be positive")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    screen_data = raw["screen"]
    screen = ScreenConfig(
        width=int(screen_data["width"]),
        height=int(screen_data["height"]),
        header_row=int(screen_data.get("header_row", 1))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        width=int(player_data["width"]),
        height=int(player_data["height"]),
        glyph=_parse_glyph(player_data.get("glyph", "*")),
        jump_impulse=float(player_data["jump_impulse"]),
        gravity=float(player_data["gravity"])
    )

    enemy_data = raw["enemy"]
    enemy = EnemyConfig(
        width=int(enemy_data["width"]),
        height=int(enemy_data["height"]),
        glyph=_parse_glyph(enemy_data.get("glyph", "X"))
    )

    world_data = raw["world"]
    world = WorldConfig(
        initial_scroll_speed=float(world_data["initial_scroll_speed"]),
        speed_growth_rate=float(world_data.get("speed_growth_rate", 0.05)),
        score_rate=float(world_data.get("score_rate", 10.0))
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        fps=int(timing_data.get("fps", 30)),
        spawn_interval=float(timing_data.get("spawn_interval", 4.0))
    )

    # Env section is optional
    env_data = raw.get("env", {})
    env = EnvConfig(
        dt=float(env_data.get("dt", 1.0 / timing.fps)),
        max_ticks=int(env_data.get("max_ticks", 5400)),
        max_enemies=int(env_data.get("max_enemies", 16))
    )

    config = GameConfig(
        screen=screen,
        player=player,
        enemy=enemy,
        world=world,
        timing=timing,
        env=env
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
