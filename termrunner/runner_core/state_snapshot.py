"""
State Snapshot
==============

Packs engine state into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, TYPE_CHECKING
import numpy as np

from termrunner.runner_core.config_loader import GameConfig, get_config

if TYPE_CHECKING:
    from termrunner.runner_core.game import CoreGame


@dataclass
class GameSnapshot:
    """
    Engine state snapshot.

    Enemy arrays are fixed-size with masking for variable enemy counts,
    ordered by spawn time (oldest first).
    """
    # Player
    player_y: float
    player_vy: float
    height_above_floor: float
    grounded: bool

    # World
    scroll_speed: float
    score: float
    ticks: int
    enemies_count: int

    # Grid info (for normalization)
    screen_width: float
    screen_height: float

    # Derived
    nearest_enemy_distance: float     # Columns between player edge and nearest enemy

    # Enemy arrays (fixed size, padded)
    enemy_x: np.ndarray               # (MAX_ENEMIES,) float32
    enemy_vx: np.ndarray              # (MAX_ENEMIES,) float32
    enemy_mask: np.ndarray            # (MAX_ENEMIES,) int8

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "player_y": np.array(self.player_y, dtype=np.float32),
            "player_vy": np.array(self.player_vy, dtype=np.float32),
            "height_above_floor": np.array(self.height_above_floor, dtype=np.float32),
            "grounded": np.array(int(self.grounded), dtype=np.int8),
            "scroll_speed": np.array(self.scroll_speed, dtype=np.float32),
            "score": np.array(self.score, dtype=np.float32),
            "ticks": np.array(self.ticks, dtype=np.int32),
            "enemies_count": np.array(self.enemies_count, dtype=np.int32),
            "screen_width": np.array(self.screen_width, dtype=np.float32),
            "screen_height": np.array(self.screen_height, dtype=np.float32),
            "nearest_enemy_distance": np.array(self.nearest_enemy_distance, dtype=np.float32),
            "enemy_x": self.enemy_x,
            "enemy_vx": self.enemy_vx,
            "enemy_mask": self.enemy_mask,
        }


class SnapshotBuilder:
    """Builds game state snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_enemies = config.env.max_enemies

    @property
    def max_enemies(self) -> int:
        return self._max_enemies

    def build(self, game: "CoreGame") -> GameSnapshot:
        """
        Build a snapshot of the current engine state.

        Enemies beyond max_enemies are dropped from the arrays (the newest
        ones).

        Args:
            game: Engine to observe.

        Returns:
            GameSnapshot with copied values.
        """
        n = self._max_enemies
        enemy_x = np.zeros(n, dtype=np.float32)
        enemy_vx = np.zeros(n, dtype=np.float32)
        enemy_mask = np.zeros(n, dtype=np.int8)

        enemies = game.enemies[:n]
        for i, enemy in enumerate(enemies):
            enemy_x[i] = enemy.x
            enemy_vx[i] = enemy.vx
            enemy_mask[i] = 1

        player = game.player
        floor = game.floor_row

        # Later enemies are faster and may overtake earlier ones
        if game.enemies:
            nearest = max(0.0, min(e.x for e in game.enemies) - player.width)
        else:
            nearest = float(game.screen_width)

        return GameSnapshot(
            player_y=player.y,
            player_vy=player.vy,
            height_above_floor=floor - player.y,
            grounded=player.is_grounded(floor),
            scroll_speed=game.scroll_speed,
            score=game.score,
            ticks=game.tick_count,
            enemies_count=len(game.enemies),
            screen_width=float(game.screen_width),
            screen_height=float(game.screen_height),
            nearest_enemy_distance=nearest,
            enemy_x=enemy_x,
            enemy_vx=enemy_vx,
            enemy_mask=enemy_mask
        )
