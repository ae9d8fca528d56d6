"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the runner game.
The simulation advances by a fixed dt per step instead of wall-clock time.
Reward is always 0.0 - agents must compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from termrunner.runner_core.config_loader import GameConfig, load_config
from termrunner.runner_core.game import CoreGame
from termrunner.runner_core.state_snapshot import SnapshotBuilder

ACTION_NOOP = 0
ACTION_JUMP = 1


class RunnerEnv(gym.Env):
    """
    Side-scrolling avoidance game as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = jump (ignored while airborne).

    Observation Space:
        Dict containing player state, world state and padded enemy arrays.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, ticks, spawns, terminated_reason, etc.

    Enemies spawn on reset and then every spawn_interval simulated seconds,
    mirroring the spawn timer of the terminal game.
    """

    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 30,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize runner environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            config: Already loaded configuration (takes precedence over config_path).
            render_mode: "ansi" for text frames, None for headless.
            debug: If True, enables verbose debug output for agent development.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")

        self._config = config if config is not None else load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._dt = self._config.env.dt
        self._max_ticks = self._config.env.max_ticks
        self._spawn_interval = self._config.timing.spawn_interval
        self._since_spawn = 0.0

        self._game = CoreGame(config=self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] RunnerEnv initialized")
            print(f"[DEBUG]   Screen: {self._config.screen.width}x{self._config.screen.height}")
            print(f"[DEBUG]   dt: {self._dt:.4f}s, max ticks: {self._max_ticks}")
            print(f"[DEBUG]   Spawn interval: {self._spawn_interval}s")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        max_enemies = self._config.env.max_enemies
        screen = self._config.screen

        return spaces.Dict({
            # Player
            "player_y": spaces.Box(low=-np.inf, high=screen.floor_row, shape=(), dtype=np.float32),
            "player_vy": spaces.Box(low=-np.inf, high=np.inf, shape=(), dtype=np.float32),
            "height_above_floor": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "grounded": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),

            # World
            "scroll_speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "ticks": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "enemies_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),

            # Grid info
            "screen_width": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "screen_height": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),

            # Derived
            "nearest_enemy_distance": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),

            # Enemy arrays
            "enemy_x": spaces.Box(low=0, high=screen.width, shape=(max_enemies,), dtype=np.float32),
            "enemy_vx": spaces.Box(low=-np.inf, high=0, shape=(max_enemies,), dtype=np.float32),
            "enemy_mask": spaces.MultiBinary(max_enemies),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed (the game itself is deterministic).
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._game.reset()
        self._game.spawn_enemy()
        self._since_spawn = 0.0

        obs = self._snapshot_builder.build(self._game).to_obs_dict()
        info = self._game.get_info()
        info["delta_score"] = 0.0
        info["jumped"] = False

        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: 0 for no-op, 1 for jump.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())

        jumped = False
        if action == ACTION_JUMP:
            jumped = self._game.request_jump()

        result = self._game.step(self._dt)

        # Spawn timer runs on simulated time
        self._since_spawn += self._dt
        if self._since_spawn >= self._spawn_interval:
            self._since_spawn -= self._spawn_interval
            self._game.spawn_enemy()

        terminated = result.terminated
        truncated = not terminated and self._game.tick_count >= self._max_ticks

        obs = self._snapshot_builder.build(self._game).to_obs_dict()

        # Reward is always 0.0 - agents compute their own
        reward = 0.0

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["removed"] = result.removed
        info["jumped"] = jumped

        if self._debug:
            print(f"[DEBUG] Step: action={action}, jumped={jumped}, "
                  f"y={self._game.player.y:.2f}, enemies={info['enemy_count']}, "
                  f"speed={self._game.scroll_speed:.2f}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {info.get('terminated_reason', 'unknown')}")

        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[str]:
        """
        Render the current game state.

        Returns:
            Frame text if render_mode is "ansi", None otherwise.
        """
        if self.render_mode == "ansi":
            return self._game.render()
        return None

    def close(self) -> None:
        """Clean up resources (nothing to release)."""
        pass

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
